"""Parse conflict markers into structured line ranges."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from jjconflict.conflict.markers import MarkerKind, classify, opens_block
from jjconflict.core.log import logger


@dataclass(frozen=True)
class Section:
    """One side of a conflict, as zero-based inclusive line indices.

    range_start..range_end is what gets painted. content_start..
    content_end excludes marker lines and is empty when
    content_end < content_start.
    """

    range_start: int
    range_end: int
    content_start: int
    content_end: int

    @property
    def is_empty(self) -> bool:
        """True when the section has no content lines."""
        return self.content_end < self.content_start

    def content_lines(self, lines: Sequence[str]) -> list[str]:
        """Return the content lines of this section from lines."""
        if self.is_empty:
            return []
        return list(lines[self.content_start:self.content_end + 1])


@dataclass(frozen=True)
class Markers:
    """Line indices of the structural marker lines of a block."""

    start_line: int
    finish_line: int
    middle_line: int | None = None
    ancestor_line: int | None = None


@dataclass(frozen=True)
class ConflictBlock:
    """A single conflict found in a line sequence."""

    current: Section
    incoming: Section
    markers: Markers
    ancestor: Section | None = None

    def sections(self) -> Iterator[tuple[str, Section]]:
        """Yield (name, section) pairs in document order."""
        yield "current", self.current
        if self.ancestor is not None:
            yield "ancestor", self.ancestor
        yield "incoming", self.incoming


def parse(lines: Sequence[str]) -> list[ConflictBlock]:
    """Find every complete conflict block in lines.

    Blocks are returned in document order and never overlap. A block
    whose closing marker is missing is discarded, and because nothing
    after it can close a new block either, scanning stops there.

    Args:
        lines: Snapshot of the text, one entry per line, without line
            terminators

    Returns:
        List of ConflictBlock objects (possibly empty)
    """
    blocks = []
    total = len(lines)
    i = 0

    while i < total:
        if not opens_block(classify(lines[i])):
            i += 1
            continue

        block = _scan_block(lines, i)
        if block is None:
            logger.debug(
                "Unterminated conflict block discarded",
                start_line=i,
            )
            break

        logger.trace(
            "Conflict block found",
            start_line=block.markers.start_line,
            finish_line=block.markers.finish_line,
            has_ancestor=block.ancestor is not None,
        )
        blocks.append(block)
        i = block.markers.finish_line + 1

    return blocks


def split_lines(text: str) -> list[str]:
    """Split text into lines the way an editor buffer holds them.

    Only "\\n" and "\\r\\n" end a line. Form feeds and the other
    separators str.splitlines() breaks on stay inside their line, so
    indices match the line numbers an editor shows.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_text(text: str) -> list[ConflictBlock]:
    """Split text into lines and parse it."""
    return parse(split_lines(text))


def _scan_block(lines: Sequence[str], block_start: int) -> ConflictBlock | None:
    """Scan forward from an opening marker to the closing marker.

    Only the first ancestor marker before the divider and the first
    divider are structural; later ones are ordinary content.
    """
    ancestor_line = None
    middle_line = None

    for j in range(block_start + 1, len(lines)):
        kind = classify(lines[j])
        if (
            kind is MarkerKind.ANCESTOR
            and ancestor_line is None
            and middle_line is None
        ):
            ancestor_line = j
            logger.spew("Ancestor marker", line=j)
        elif kind is MarkerKind.MIDDLE and middle_line is None:
            middle_line = j
            logger.spew("Divider marker", line=j)
        elif kind is MarkerKind.FINISH:
            logger.spew("Finish marker", line=j)
            return _build_block(block_start, ancestor_line, middle_line, j)

    return None


def _build_block(
    block_start: int,
    ancestor_line: int | None,
    middle_line: int | None,
    finish_line: int,
) -> ConflictBlock:
    """Compute section ranges from the marker positions."""
    if ancestor_line is not None:
        current_end = ancestor_line - 1
    elif middle_line is not None:
        current_end = middle_line - 1
    else:
        current_end = finish_line - 1

    # Current paints its own opening marker; the other sides don't.
    current = Section(
        range_start=block_start,
        range_end=current_end,
        content_start=block_start + 1,
        content_end=current_end,
    )

    ancestor = None
    if ancestor_line is not None:
        ancestor_end = (
            middle_line if middle_line is not None else finish_line
        ) - 1
        ancestor = Section(
            range_start=ancestor_line + 1,
            range_end=ancestor_end,
            content_start=ancestor_line + 1,
            content_end=ancestor_end,
        )

    # Without a divider, incoming is empty and sits on the finish line.
    incoming_start = (
        middle_line + 1 if middle_line is not None else finish_line
    )
    incoming = Section(
        range_start=incoming_start,
        range_end=finish_line,
        content_start=incoming_start,
        content_end=finish_line - 1,
    )

    return ConflictBlock(
        current=current,
        incoming=incoming,
        markers=Markers(
            start_line=block_start,
            finish_line=finish_line,
            middle_line=middle_line,
            ancestor_line=ancestor_line,
        ),
        ancestor=ancestor,
    )
