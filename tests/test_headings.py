"""Unit tests for title normalization and heading-level helpers."""

import pytest

from bookmerge.headings import (
    adjust_header_level,
    normalize_title,
    remove_file_title,
    shift_level,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("I: The Basics", "The Basics"),
        ("II: Getting Started", "Getting Started"),
        ("IV: Fun", "Fun"),
        ("Plain Title", "Plain Title"),
        ("Chapter I: Basics", "Chapter I: Basics"),
        ("II:NoSpace", "II:NoSpace"),
        ("Inheritance: A Myth", "Inheritance: A Myth"),
    ],
)
def test_normalize_title(title, expected):
    assert normalize_title(title) == expected


def test_normalize_title_strips_only_first_prefix():
    assert normalize_title("I: II: Nested") == "II: Nested"


@pytest.mark.parametrize(
    ("base", "current", "expected"),
    [(1, 1, 1), (1, 2, 2), (2, 2, 3), (2, 1, 2)],
)
def test_shift_level(base, current, expected):
    assert shift_level(current, base) == expected


def test_adjust_header_level_skips_code():
    source = "# A\n## B\n```\n# code comment\n```\ntext #not\n"
    assert adjust_header_level(source, 3) == (
        "### A\n#### B\n```\n# code comment\n```\ntext #not\n"
    )


def test_adjust_header_level_base_one_is_noop():
    source = "# A\n\n## B {#custom-id}\n"
    assert adjust_header_level(source, 1) == source


def test_remove_file_title():
    assert remove_file_title("% Variable Bindings\n\nBody\n") == "\nBody\n"


def test_remove_file_title_only_at_start():
    source = "Body\n% not a title\n"
    assert remove_file_title(source) == source


def test_adjust_header_level_keeps_line_separators():
    source = "# A not a heading\x0c# nor this\n"
    assert adjust_header_level(source, 2) == "## A not a heading\x0c# nor this\n"
