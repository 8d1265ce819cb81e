"""Reparse a source and repaint its conflict regions."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from jjconflict.conflict.parser import ConflictBlock, parse, split_lines
from jjconflict.core.log import logger
from jjconflict.highlight.groups import HighlightGroups
from jjconflict.highlight.regions import RegionDescriptor, project


@runtime_checkable
class LineSource(Protocol):
    """Snapshots the current content of an editable source."""

    def is_valid(self, source_id: Hashable) -> bool:
        """Whether the source exists and can be read."""
        ...

    def lines(self, source_id: Hashable) -> Sequence[str]:
        """Return the source's lines, without terminators."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Paints region descriptors onto some surface."""

    def clear(self, source_id: Hashable) -> None:
        """Remove everything previously painted for source_id."""
        ...

    def paint(
        self,
        source_id: Hashable,
        region: RegionDescriptor,
        groups: HighlightGroups,
    ) -> None:
        """Fill region's lines and draw its label."""
        ...


class FileLineSource:
    """Line source where each source id is a file path."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def is_valid(self, source_id: Hashable) -> bool:
        return Path(str(source_id)).is_file()

    def lines(self, source_id: Hashable) -> list[str]:
        """Read the file and split it into lines.

        Raises:
            OSError: If the file cannot be read
        """
        text = Path(str(source_id)).read_text(
            encoding=self.encoding, errors="replace"
        )
        return split_lines(text)


class Highlighter:
    """Connects a line source, the parser and a renderer.

    Holds no per-source state: every call reparses from a fresh
    snapshot. Callers that get change notifications at a high rate
    are responsible for any debouncing.
    """

    def __init__(
        self,
        line_source: LineSource,
        renderer: Renderer,
        groups: HighlightGroups | None = None,
    ):
        """Initialize highlighter.

        Args:
            line_source: Provides line snapshots
            renderer: Receives clear/paint calls
            groups: Colors to paint with (defaults when None)
        """
        self.line_source = line_source
        self.renderer = renderer
        self.groups = groups or HighlightGroups()

    def reparse_and_render(self, source_id: Hashable) -> list[ConflictBlock]:
        """Parse the source and repaint all its conflict regions.

        Invalid sources are skipped. Previously painted regions are
        always cleared before painting the new ones.

        Args:
            source_id: Identifier understood by the line source and
                renderer

        Returns:
            The conflict blocks that were painted
        """
        if not self.line_source.is_valid(source_id):
            logger.debug("Skipping invalid source", source=str(source_id))
            return []

        return self.render(source_id, self.line_source.lines(source_id))

    def render(
        self, source_id: Hashable, lines: Sequence[str]
    ) -> list[ConflictBlock]:
        """Repaint source_id from a snapshot the caller already holds.

        Callers that also display the lines use this so the painted
        regions and the displayed text come from the same snapshot.
        """
        blocks = parse(lines)

        self.renderer.clear(source_id)
        for region in project(lines, blocks):
            self.renderer.paint(source_id, region, self.groups)

        logger.debug(
            "Conflicts highlighted",
            source=str(source_id),
            conflicts=len(blocks),
        )
        return blocks

    def clear(self, source_id: Hashable) -> None:
        """Remove all painted conflict regions from the source."""
        self.renderer.clear(source_id)
