"""jjconflict - highlight Jujutsu/Git conflict blocks in text."""

from jjconflict.conflict.parser import ConflictBlock, Markers, Section, parse
from jjconflict.highlight.color import shade
from jjconflict.highlight.regions import RegionDescriptor, RegionKind, project

__all__ = [
    "ConflictBlock",
    "Markers",
    "RegionDescriptor",
    "RegionKind",
    "Section",
    "parse",
    "project",
    "shade",
]
