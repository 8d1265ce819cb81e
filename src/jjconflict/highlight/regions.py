"""Project parsed conflict blocks onto paintable regions."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from jjconflict.conflict.parser import ConflictBlock


class RegionKind(Enum):
    """Which side of a conflict a region belongs to."""

    CURRENT = "current"
    ANCESTOR = "ancestor"
    INCOMING = "incoming"

    @property
    def role(self) -> str:
        """Role shown in parentheses after the label text."""
        return _ROLES[self]

    @property
    def fallback(self) -> str:
        """Label text used when the anchor line does not exist."""
        return _FALLBACKS[self]


_ROLES = {
    RegionKind.CURRENT: "Current",
    RegionKind.ANCESTOR: "Base",
    RegionKind.INCOMING: "Incoming",
}

_FALLBACKS = {
    RegionKind.CURRENT: "Current",
    RegionKind.ANCESTOR: "Ancestor",
    RegionKind.INCOMING: "Incoming",
}


@dataclass(frozen=True)
class RegionDescriptor:
    """Render instruction for one side of one conflict.

    paint_range is inclusive on both ends. A range whose end is
    before its start paints nothing; the label is still drawn.
    """

    kind: RegionKind
    paint_range: tuple[int, int]
    label_text: str
    label_line: int

    @property
    def is_empty(self) -> bool:
        start, end = self.paint_range
        return end < start

    def painted_lines(self) -> range:
        """Line indices covered by paint_range."""
        start, end = self.paint_range
        return range(start, end + 1)


def label_for(lines: Sequence[str], kind: RegionKind, line: int) -> str:
    """Build "<text of line> (<role>)", falling back when out of range."""
    text = lines[line] if 0 <= line < len(lines) else kind.fallback
    return f"{text} ({kind.role})"


def project(
    lines: Sequence[str], blocks: Sequence[ConflictBlock]
) -> list[RegionDescriptor]:
    """Map conflict blocks to region descriptors.

    For each block, regions come in document order: current, then
    ancestor when present, then incoming. Labels overlay the opening
    marker (current), the ancestor marker (ancestor) and the closing
    marker (incoming).

    Args:
        lines: The line snapshot the blocks were parsed from
        blocks: Output of parse() for those lines

    Returns:
        List of RegionDescriptor objects
    """
    regions = []
    for block in blocks:
        current = block.current
        regions.append(_region(
            lines,
            RegionKind.CURRENT,
            (current.range_start, current.range_end),
            current.range_start,
        ))

        if block.ancestor is not None:
            ancestor = block.ancestor
            anchor = block.markers.ancestor_line
            if anchor is None:
                anchor = ancestor.range_start - 1
            regions.append(_region(
                lines,
                RegionKind.ANCESTOR,
                (ancestor.range_start, ancestor.range_end),
                anchor,
            ))

        incoming = block.incoming
        regions.append(_region(
            lines,
            RegionKind.INCOMING,
            (incoming.range_start, incoming.range_end),
            incoming.range_end,
        ))

    return regions


def _region(
    lines: Sequence[str],
    kind: RegionKind,
    paint_range: tuple[int, int],
    label_line: int,
) -> RegionDescriptor:
    return RegionDescriptor(
        kind=kind,
        paint_range=paint_range,
        label_text=label_for(lines, kind, label_line),
        label_line=label_line,
    )
