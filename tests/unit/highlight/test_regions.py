"""Tests for projecting conflict blocks onto render regions."""

from jjconflict.conflict.parser import (
    ConflictBlock,
    Markers,
    Section,
    parse,
)
from jjconflict.highlight.regions import (
    RegionDescriptor,
    RegionKind,
    label_for,
    project,
)


def test_two_way_regions():
    """Current and incoming regions with marker-line labels."""
    lines = [
        "a", "<<<<<<< HEAD", "x", "=======", "y", ">>>>>>> branch", "b",
    ]

    regions = project(lines, parse(lines))

    assert regions == [
        RegionDescriptor(
            kind=RegionKind.CURRENT,
            paint_range=(1, 2),
            label_text="<<<<<<< HEAD (Current)",
            label_line=1,
        ),
        RegionDescriptor(
            kind=RegionKind.INCOMING,
            paint_range=(4, 5),
            label_text=">>>>>>> branch (Incoming)",
            label_line=5,
        ),
    ]


def test_ancestor_region():
    """The base label overlays the ||||||| marker line."""
    lines = [
        "<<<<<<< ours", "x", "||||||| base", "o", "=======", "y",
        ">>>>>>> theirs",
    ]

    regions = project(lines, parse(lines))

    assert [r.kind for r in regions] == [
        RegionKind.CURRENT, RegionKind.ANCESTOR, RegionKind.INCOMING,
    ]
    ancestor = regions[1]
    assert ancestor.paint_range == (3, 3)
    assert ancestor.label_line == 2
    assert ancestor.label_text == "||||||| base (Base)"


def test_empty_ancestor_paints_nothing():
    """An ancestor with no lines has an empty paint range."""
    lines = ["<<<<<<<", "x", "|||||||", "=======", "y", ">>>>>>>"]

    ancestor = project(lines, parse(lines))[1]

    assert ancestor.kind is RegionKind.ANCESTOR
    assert ancestor.is_empty
    assert list(ancestor.painted_lines()) == []


def test_regions_for_multiple_blocks_in_order():
    lines = [
        "<<<<<<<", "a", "=======", "b", ">>>>>>>",
        "<<<<<<<", "c", "=======", "d", ">>>>>>>",
    ]

    regions = project(lines, parse(lines))

    assert [r.label_line for r in regions] == [0, 4, 5, 9]


def test_no_blocks_no_regions():
    assert project(["a", "b"], []) == []


def test_labels_fall_back_when_lines_missing():
    """Labels use fixed words when anchor lines are out of range."""
    lines = ["<<<<<<<", "x", "|||||||", "o", "=======", "y", ">>>>>>>"]
    blocks = parse(lines)

    regions = project([], blocks)

    assert [r.label_text for r in regions] == [
        "Current (Current)",
        "Ancestor (Base)",
        "Incoming (Incoming)",
    ]


def test_negative_anchor_uses_fallback():
    """A negative anchor is out of range, not an index from the end."""
    assert label_for(["a", "b"], RegionKind.CURRENT, -1) == (
        "Current (Current)"
    )


def test_ancestor_label_without_recorded_marker():
    """Blocks built by hand anchor the base label above its range."""
    block = ConflictBlock(
        current=Section(0, 1, 1, 1),
        incoming=Section(5, 6, 5, 5),
        markers=Markers(start_line=0, finish_line=6, middle_line=4),
        ancestor=Section(3, 3, 3, 3),
    )
    lines = ["<<<<<<<", "x", "||||||| old", "o", "=======", "y", ">>>>>>>"]

    ancestor = project(lines, [block])[1]

    assert ancestor.label_line == 2
    assert ancestor.label_text == "||||||| old (Base)"


def test_region_kind_text():
    assert RegionKind.CURRENT.role == "Current"
    assert RegionKind.ANCESTOR.role == "Base"
    assert RegionKind.INCOMING.role == "Incoming"
    assert RegionKind.ANCESTOR.fallback == "Ancestor"
