"""Highlight group colors for conflict regions and their labels."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from jjconflict.core.log import logger
from jjconflict.highlight.color import (
    DEFAULT_ANCESTOR_BG,
    DEFAULT_CURRENT_BG,
    DEFAULT_INCOMING_BG,
    DEFAULT_SHADE_AMOUNT,
    parse_color,
    shade,
    to_hex,
)
from jjconflict.highlight.regions import RegionKind

GROUP_NAMES = {
    RegionKind.CURRENT: "JjConflictCurrent",
    RegionKind.INCOMING: "JjConflictIncoming",
    RegionKind.ANCESTOR: "JjConflictAncestor",
}

LABEL_GROUP_NAMES = {
    RegionKind.CURRENT: "JjConflictCurrentLabel",
    RegionKind.INCOMING: "JjConflictIncomingLabel",
    RegionKind.ANCESTOR: "JjConflictAncestorLabel",
}

# Groups whose backgrounds the conflict colors are taken from
DEFAULT_SOURCE_GROUPS = {
    RegionKind.CURRENT: "DiffText",
    RegionKind.INCOMING: "DiffAdd",
    RegionKind.ANCESTOR: "DiffChange",
}

DEFAULT_BACKGROUNDS = {
    RegionKind.CURRENT: DEFAULT_CURRENT_BG,
    RegionKind.INCOMING: DEFAULT_INCOMING_BG,
    RegionKind.ANCESTOR: DEFAULT_ANCESTOR_BG,
}


@runtime_checkable
class ColorResolver(Protocol):
    """Maps a highlight group name to its background color."""

    def resolve(self, name: str) -> int | None:
        """Return the packed background color, or None if unknown."""
        ...


class StaticColorResolver:
    """Resolve group names from a fixed color scheme."""

    def __init__(self, colors: Mapping[str, int | str] | None = None):
        """Initialize resolver.

        Args:
            colors: Group name to color (int or "#rrggbb")

        Raises:
            ValueError: If a color value is malformed
        """
        self.colors = {
            name: parse_color(value)
            for name, value in (colors or {}).items()
        }

    def resolve(self, name: str) -> int | None:
        """Return the scheme's color for name, or None if unlisted."""
        return self.colors.get(name)


@dataclass(frozen=True)
class HighlightGroups:
    """Resolved body and label backgrounds for each region kind.

    body and label are read-only views, copied from whatever mappings
    were passed in.
    """

    body: Mapping[RegionKind, int] = field(
        default_factory=lambda: dict(DEFAULT_BACKGROUNDS)
    )
    label: Mapping[RegionKind, int] = field(
        default_factory=lambda: {
            kind: shade(color) for kind, color in DEFAULT_BACKGROUNDS.items()
        }
    )

    def __post_init__(self):
        object.__setattr__(self, "body", MappingProxyType(dict(self.body)))
        object.__setattr__(self, "label", MappingProxyType(dict(self.label)))

    @classmethod
    def derive(
        cls,
        resolver: ColorResolver,
        sources: Mapping[RegionKind, str] | None = None,
        shade_amount: int = DEFAULT_SHADE_AMOUNT,
    ) -> HighlightGroups:
        """Resolve source groups and derive label colors from them.

        Unresolved groups fall back to the built-in defaults. Labels
        use the body color darkened by shade_amount percent.

        Args:
            resolver: Source of group colors
            sources: Group to read per region kind (defaults to
                DiffText, DiffAdd, DiffChange)
            shade_amount: Label darkening percentage

        Returns:
            HighlightGroups instance
        """
        sources = {**DEFAULT_SOURCE_GROUPS, **(sources or {})}

        body = {}
        for kind in RegionKind:
            color = resolver.resolve(sources[kind])
            if color is None:
                color = DEFAULT_BACKGROUNDS[kind]
                logger.debug(
                    "Highlight group unresolved, using default",
                    group=sources[kind],
                    color=to_hex(color),
                )
            body[kind] = color

        label = {kind: shade(color, shade_amount) for kind, color in body.items()}
        return cls(body=body, label=label)

    def definitions(self) -> dict[str, dict]:
        """Group name to attributes, for renderers keyed by name."""
        result = {}
        for kind in RegionKind:
            result[GROUP_NAMES[kind]] = {
                "background": self.body[kind],
                "bold": True,
            }
            result[LABEL_GROUP_NAMES[kind]] = {
                "background": self.label[kind],
            }
        return result
