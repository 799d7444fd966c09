"""Shared fixtures: a small on-disk book source tree.

The ``book_source`` fixture writes a ``SUMMARY.md`` manifest, an intro, a
handful of chapters, and a ``book.yaml`` under ``tmp_path/book_src/tiny``
so assembly, checking, and CLI tests all run against the same corpus.
"""

import datetime
import textwrap

import pytest


RELEASE_DATE = datetime.date(2015, 5, 13)

SUMMARY = """\
# Summary

* [Getting Started](getting-started.md)
    * [Installing](installing.md)
* [I: The Basics](basics.md)

Not an entry: [prose](prose.md)
"""

BOOK_YAML = """\
title: "Tiny Book"
author: "The Tiny Team"
prefix: tiny
"""

CHAPTERS = {
    "README.md": "Welcome to the book.\n",
    "getting-started.md": "Read [installing](installing.html) first.\n",
    "installing.md": textwrap.dedent("""\
        Install it:

        ```rust,ignore
        # fn main() {
        println!("hi");
        # }
        ```
        """),
    "basics.md": "See the [Vec docs](../std/vec/struct.Vec.html).\n",
}


def write_book(root, summary=SUMMARY, chapters=None, book_yaml=BOOK_YAML):
    root.mkdir(parents=True, exist_ok=True)
    (root / "SUMMARY.md").write_text(summary, encoding="utf-8")
    if book_yaml is not None:
        (root / "book.yaml").write_text(book_yaml, encoding="utf-8")
    for name, content in (CHAPTERS if chapters is None else chapters).items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def book_source(tmp_path):
    """Path to a complete tiny book under tmp_path/book_src/tiny."""
    return write_book(tmp_path / "book_src" / "tiny")


@pytest.fixture
def release_date():
    return RELEASE_DATE
