"""Unit tests for the print-variant symbol cleanup."""

from bookmerge.symbols import convert_checkmarks, remove_emojis


def test_emojis_removed_everywhere():
    text = "Hello 🦀 world 🎉\n```\nlet party = \"🥳\";\n```\n"
    assert remove_emojis(text) == "Hello  world \n```\nlet party = \"\";\n```\n"


def test_emoji_presentation_selector_removed():
    assert remove_emojis("love ❤️ it") == "love  it"


def test_regular_text_kept():
    text = "Café, 日本語, ↳ wrapped, → arrow, © 2015, tabs\tand\nnewlines"
    assert remove_emojis(text) == text


def test_checkmarks_converted():
    assert convert_checkmarks("checks: ✓ ✔") == "checks: \\checkmark \\checkmark"


def test_checkmarks_survive_emoji_removal_when_converted_first():
    assert remove_emojis(convert_checkmarks("done ✓")) == "done \\checkmark"
    assert remove_emojis("done ✓") == "done "
