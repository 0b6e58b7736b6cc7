"""Tests for reminder links kept in notes."""

import pytest

from apple_events.tools.links import extract_links, format_links, has_link


@pytest.mark.parametrize(
    ("notes", "expected"),
    [
        (None, []),
        ("", []),
        ("Just a note", []),
        ("Some notes\n\nRelated:\nID1, ID2, ID3", ["ID1", "ID2", "ID3"]),
        ("Related:\n\n  ID1 ,ID2  \nID9", ["ID1", "ID2"]),
        ("Related:", []),
        ("  Related:  \nA", ["A"]),
        ("Related: A, B", []),
    ],
)
def test_extract_links(notes, expected):
    assert extract_links(notes) == expected


def test_format_links():
    assert format_links([]) == ""
    assert format_links(["A", "B"]) == "Related:\nA, B"
    assert extract_links("Notes\n\n" + format_links(["A", "B"])) == ["A", "B"]


def test_has_link():
    notes = "Related:\nA, B"
    assert has_link(notes, "B")
    assert not has_link(notes, "C")
    assert not has_link(None, "A")
