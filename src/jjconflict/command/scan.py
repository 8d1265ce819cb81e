"""Scan command - dump parsed conflict blocks as JSON."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, TypeAdapter
from pydantic_settings import CliPositionalArg

from jjconflict.command.base import EXIT_OK, EXIT_UNREADABLE, scan_files
from jjconflict.conflict.parser import ConflictBlock
from jjconflict.highlight.highlighter import FileLineSource

if TYPE_CHECKING:
    from jjconflict.core.config import State

_blocks_by_file = TypeAdapter(dict[str, list[ConflictBlock]])


class ScanCommand(BaseModel):
    """Print the conflict blocks of each file as JSON.

    Output maps each readable file to its blocks, with zero-based
    line ranges for every section.
    """

    files: CliPositionalArg[list[Path]] = Field(
        description="Files to parse"
    )

    async def run_workflow(self, state: State) -> int:
        """Run scan.

        Returns:
            Exit code (0=success, 2=unreadable file)
        """
        exit_code = EXIT_OK
        result = {}
        for path, lines, blocks in scan_files(self.files, FileLineSource()):
            if lines is None:
                exit_code = EXIT_UNREADABLE
                continue
            result[str(path)] = blocks

        print(_blocks_by_file.dump_json(result, indent=2).decode())
        return exit_code
