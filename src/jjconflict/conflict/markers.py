"""Recognize conflict marker lines."""

from enum import Enum


class MarkerKind(Enum):
    """Structural role of a marker line."""

    HEADER = "header"
    START = "start"
    ANCESTOR = "ancestor"
    MIDDLE = "middle"
    FINISH = "finish"


# Checked in this order; the first matching prefix wins.
MARKER_PREFIXES: tuple[tuple[MarkerKind, str], ...] = (
    (MarkerKind.HEADER, "%" * 6),
    (MarkerKind.START, "<" * 7),
    (MarkerKind.ANCESTOR, "|" * 7),
    (MarkerKind.MIDDLE, "=" * 7),
    (MarkerKind.FINISH, ">" * 7),
)


def classify(line: str | None) -> MarkerKind | None:
    """Return the marker kind a line starts with, or None.

    Only the start of the line is inspected; anything after the
    prefix (branch names, "Conflict 1 of 2", ...) is ignored.
    """
    if not line:
        return None
    for kind, prefix in MARKER_PREFIXES:
        if line.startswith(prefix):
            return kind
    return None


def opens_block(kind: MarkerKind | None) -> bool:
    """True for the markers that begin a conflict block."""
    return kind is MarkerKind.HEADER or kind is MarkerKind.START
