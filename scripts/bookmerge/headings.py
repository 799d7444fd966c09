"""
Heading helpers: chapter title cleanup and heading-level shifting.
"""

import re

from bookmerge.fences import FenceState, is_fence, split_lines, toggle


# Some chapter titles start with Roman numerals, e.g. "I: The Basics"
ROMAN_PREFIX = re.compile(r"^[IV]+:\s")

ATX_HEADING = re.compile(r"^(?P<level>#+)\s(?P<title>.+)$")

# pandoc title block line, e.g. "% Variable Bindings"
FILE_TITLE = re.compile(r"^%\s(.+)\n")


def normalize_title(title):
    return ROMAN_PREFIX.sub("", title, count=1)


def shift_level(level, base_level):
    """Heading level after moving a file's top level to base_level."""
    return level + base_level - 1


def adjust_header_level(text, base_level):
    """
    Re-level every ATX heading outside code blocks so that a file's `#`
    headings land at base_level. base_level 1 leaves headings as they are.
    """
    state = FenceState.OUTSIDE
    output = []

    for line in split_lines(text):
        if is_fence(line):
            state = toggle(state)
        elif state is FenceState.OUTSIDE:
            heading = ATX_HEADING.match(line)
            if heading:
                level = shift_level(len(heading.group("level")), base_level)
                line = f"{'#' * level} {heading.group('title')}"
        output.append(line + "\n")

    return "".join(output)


def remove_file_title(text):
    """Drop a leading `% Title` line; the assembler emits its own heading."""
    return FILE_TITLE.sub("", text, count=1)
