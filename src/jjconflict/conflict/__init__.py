"""Conflict marker recognition and block parsing."""

from jjconflict.conflict.markers import MarkerKind, classify
from jjconflict.conflict.parser import (
    ConflictBlock,
    Markers,
    Section,
    parse,
    parse_text,
)

__all__ = [
    "ConflictBlock",
    "MarkerKind",
    "Markers",
    "Section",
    "classify",
    "parse",
    "parse_text",
]
