"""
Table-of-contents manifest parsing (SUMMARY.md).

Each entry line looks like:

    * [Variable Bindings](variable-bindings.md)
        * [Nested Page](nested/page.md)

Anything else (part titles, blank lines, prose) is skipped.
"""

import posixpath
import re
from dataclasses import dataclass

from bookmerge.fences import split_lines


TOC_LINK = re.compile(
    r"^(?P<indent>\s*)[*-] \[(?P<title>.+?)\]\((?P<filename>.+?)\)"
)


def anchor_id(path):
    """Base name of a chapter file without its extension: `a/b.md` → `b`."""
    name = posixpath.basename(path.replace("\\", "/"))
    stem, _ = posixpath.splitext(name)
    return stem or name


@dataclass(frozen=True)
class TocEntry:
    indent_depth: int
    title: str
    target_file: str

    @property
    def heading_level(self):
        """Only two levels: top-level entries are `#`, everything nested `##`."""
        return 1 if self.indent_depth == 0 else 2

    @property
    def anchor_id(self):
        return anchor_id(self.target_file)


def parse_toc(manifest_text):
    """Return TocEntry items in manifest order."""
    entries = []
    for line in split_lines(manifest_text):
        match = TOC_LINK.match(line)
        if not match:
            continue
        entries.append(TocEntry(
            indent_depth=len(match.group("indent")),
            title=match.group("title"),
            target_file=match.group("filename"),
        ))
    return entries
