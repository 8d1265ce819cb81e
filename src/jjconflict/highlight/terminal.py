"""Render conflict regions to a terminal with rich."""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from rich.cells import cell_len
from rich.color import Color
from rich.style import Style
from rich.text import Text

from jjconflict.highlight.color import split_rgb
from jjconflict.highlight.groups import HighlightGroups
from jjconflict.highlight.regions import RegionDescriptor


def _background(color: int, bold: bool = False) -> Style:
    return Style(bgcolor=Color.from_rgb(*split_rgb(color)), bold=bold)


class TerminalRenderer:
    """Renderer that keeps painted regions and draws them as rich Text.

    Painted lines get their section's background across the full
    width. Label lines are overlaid with the label text on the darker
    label background.
    """

    def __init__(self, width: int = 80):
        """Initialize renderer.

        Args:
            width: Column count that fills and labels are padded to
        """
        self.width = width
        self._painted: dict[
            Hashable, list[tuple[RegionDescriptor, HighlightGroups]]
        ] = {}

    def clear(self, source_id: Hashable) -> None:
        """Forget every region painted for source_id."""
        self._painted.pop(source_id, None)

    def paint(
        self,
        source_id: Hashable,
        region: RegionDescriptor,
        groups: HighlightGroups,
    ) -> None:
        """Buffer region and its colors until the next render."""
        self._painted.setdefault(source_id, []).append((region, groups))

    def regions(self, source_id: Hashable) -> list[RegionDescriptor]:
        """Regions currently painted for source_id."""
        return [region for region, _ in self._painted.get(source_id, [])]

    def render(self, source_id: Hashable, lines: Sequence[str]) -> Text:
        """Draw lines with every painted region for source_id applied.

        Args:
            source_id: Source whose painted regions to apply
            lines: The lines to draw

        Returns:
            rich Text, one line per input line
        """
        fills: dict[int, Style] = {}
        labels: dict[int, tuple[str, Style]] = {}
        for region, groups in self._painted.get(source_id, []):
            fill = _background(groups.body[region.kind], bold=True)
            for index in region.painted_lines():
                fills[index] = fill
            labels[region.label_line] = (
                region.label_text,
                _background(groups.label[region.kind]),
            )

        text = Text()
        for index, line in enumerate(lines):
            if index in labels:
                label, style = labels[index]
                text.append(self._pad(label, minimum=1), style=style)
            elif index in fills:
                text.append(self._pad(line), style=fills[index])
            else:
                text.append(line)
            text.append("\n")
        return text

    def _pad(self, value: str, minimum: int = 0) -> str:
        remaining = max(self.width - cell_len(value), minimum)
        return value + " " * remaining
