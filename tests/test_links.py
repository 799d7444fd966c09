"""Unit tests for cross-reference and external docs link rewriting."""

import pytest

from bookmerge.links import (
    find_anchor_links,
    normalize_links,
    prefix_reference_names,
    rewrite_cross_references,
    rewrite_external_prefixes,
)


@pytest.mark.parametrize(
    "stem",
    ["variable-bindings", "ffi", "error_handling", "chapter-2"],
)
def test_cross_reference_becomes_anchor(stem):
    """`[Foo](<stem>.html)` targets exactly `#sec--<stem>`."""
    assert normalize_links(f"[Foo]({stem}.html)") == f"[Foo](#sec--{stem})"


def test_cross_reference_independent_of_surrounding_text():
    text = "Before [a](a.html), middle [b](b-c.html) after."
    assert rewrite_cross_references(text) == (
        "Before [a](#sec--a), middle [b](#sec--b-c) after."
    )


def test_link_with_path_is_not_a_cross_reference():
    text = "[nested](nested/page.html) [abs](http://example.com/page.html)"
    assert rewrite_cross_references(text) == text


def test_std_prefix_rewritten_keeping_rest_of_path():
    text = "[Vec](../std/vec/struct.Vec.html)"
    assert normalize_links(text) == (
        "[Vec](http://doc.rust-lang.org/std/vec/struct.Vec.html)"
    ), "absolute URLs must not be re-targeted as cross references"


@pytest.mark.parametrize("name", ["std", "reference", "rustc", "syntax", "core"])
def test_all_known_prefixes_rewritten(name):
    assert rewrite_external_prefixes(f"](../{name}/index.html)") == (
        f"](http://doc.rust-lang.org/{name}/index.html)"
    )


def test_plain_std_mentions_untouched():
    text = "The std library and stdlib, also ./std and std/vec."
    assert normalize_links(text) == text


def test_custom_prefix_table():
    prefixes = {"../api": "https://docs.example.com/api"}
    assert normalize_links("[x](../api/x.html)", prefixes) == (
        "[x](https://docs.example.com/api/x.html)"
    )
    assert normalize_links("[s](../std/x.html)", prefixes) == "[s](../std/x.html)"


def test_prefix_rewritten_to_bare_name_is_retargeted():
    """
    Both passes always run in order, so a prefix replaced by a bare name
    is picked up again by the cross-reference pass.
    """
    prefixes = {"../guide": "handbook"}
    assert normalize_links("[g](../guide.html)", prefixes) == "[g](#sec--handbook)"


# ── Reference-style links ──────────────────────────────────────────────


def test_reference_links_and_definitions_prefixed():
    text = (
        "Lorem ipsum dolor [sit][amet], consectetur.\n"
        "\n"
        "[amet]: http://example.com/amet\n"
    )
    assert prefix_reference_names(text, "ownership") == (
        "Lorem ipsum dolor [sit][ownership--amet], consectetur.\n"
        "\n"
        "[ownership--amet]: http://example.com/amet\n"
    )


def test_two_reference_links_on_one_line():
    assert prefix_reference_names("[a][x] and [b][y]", "p") == "[a][p--x] and [b][p--y]\n"


def test_reference_links_in_code_untouched():
    text = "```rust\nlet a = v[i][j];\n```\n"
    assert prefix_reference_names(text, "p") == text


def test_find_anchor_links():
    assert find_anchor_links("[a](#sec--one) and [b](#sec--two-2)") == ["one", "two-2"]


def test_footnotes_keep_their_names():
    """`[^1]` markers and `[^1]: ...` definitions must stay paired."""
    text = "Text[^1] and [see][^2].\n\n[^1]: A note.\n[^2]: Another.\n"
    assert prefix_reference_names(text, "ownership") == text


def test_reference_prefixing_keeps_form_feed_in_line():
    assert prefix_reference_names("[a][x]\x0c[b][y]\n", "p") == "[a][p--x]\x0c[b][p--y]\n"
