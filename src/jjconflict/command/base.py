"""Shared file handling for commands."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from jjconflict.conflict.parser import ConflictBlock, parse
from jjconflict.core.log import logger
from jjconflict.highlight.highlighter import FileLineSource

EXIT_OK = 0
EXIT_CONFLICTS = 1
EXIT_UNREADABLE = 2


def scan_files(
    files: list[Path], source: FileLineSource
) -> Iterator[tuple[Path, list[str] | None, list[ConflictBlock]]]:
    """Parse each file, yielding (path, lines, blocks).

    Unreadable files are logged and yielded with lines=None and no
    blocks, so callers can keep going and report them in the exit
    code.
    """
    for path in files:
        try:
            lines = source.lines(path)
        except OSError as e:
            logger.error("Cannot read file", file=str(path), error=str(e))
            yield path, None, []
            continue

        blocks = parse(lines)
        logger.debug("File scanned", file=str(path), conflicts=len(blocks))
        yield path, lines, blocks
