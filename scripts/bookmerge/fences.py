"""
Code fence handling: rust fence normalization, hidden lines, and line wrapping.

Both passes walk a chapter line by line with a two-state machine
(OUTSIDE / INSIDE a fenced block). State never carries over between
chapters; an unterminated fence simply leaves the rest of that chapter
"inside".
"""

import enum
import re


FENCE = "```"

# ```rust, ```{rust,ignore}, ``` rust,no_run ...
RUST_FENCE_START = re.compile(r"^```(.*)rust(.*)")

# Lines that compile but are not shown (rustdoc convention)
HIDDEN_LINE = re.compile(r"^# ")

DEFAULT_WRAP_WIDTH = 87
DEFAULT_WRAP_MARKER = "↳ "

# Only \n and \r\n end a line; form feeds and U+2028 are chapter text
LINE_BREAK = re.compile(r"\r?\n")


class FenceState(enum.Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def split_lines(text):
    """Split text into lines without their terminators."""
    lines = LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_fence(line):
    return line.startswith(FENCE)


def toggle(state):
    """Transition for passes where every ``` line opens or closes a block."""
    if state is FenceState.INSIDE:
        return FenceState.OUTSIDE
    return FenceState.INSIDE


# ── Code fence normalizer ──────────────────────────────────────────────


def normalize_line(state, line):
    """
    One step of the code-start normalizer.

    Returns (new_state, output_line). output_line is None when the line
    is dropped.
    """
    if state is FenceState.INSIDE and HIDDEN_LINE.match(line):
        return state, None
    if RUST_FENCE_START.match(line):
        return FenceState.INSIDE, "```rust"
    if is_fence(line):
        return FenceState.OUTSIDE, line
    return state, line


def normalize_code_start(text):
    """
    Canonicalize rust fence openings and drop hidden lines inside them.

    Any opening fence mentioning "rust" becomes a bare ```rust. Other
    fence lines pass through and leave the block, so lines inside e.g.
    a ```sh block are never treated as hidden.
    """
    state = FenceState.OUTSIDE
    output = []

    for line in split_lines(text):
        state, out = normalize_line(state, line)
        if out is not None:
            output.append(out + "\n")

    return "".join(output)


# ── Line wrapper ───────────────────────────────────────────────────────


def break_long_line(line, max_len=DEFAULT_WRAP_WIDTH, marker=DEFAULT_WRAP_MARKER):
    """
    Split a line into fixed-width segments joined by newline + marker.

    The first segment is max_len characters; every following segment is
    max_len - len(marker) characters so that, with the marker prepended,
    no output line exceeds max_len.

        >>> break_long_line("abcdefgh", 5, "> ")
        'abcde\\n> fgh'
    """
    if len(line) <= max_len:
        return line

    width = max_len - len(marker)
    if width <= 0:
        raise ValueError(
            f"Wrap width {max_len} leaves no room after marker {marker!r}"
        )

    segments = [line[:max_len]]
    rest = line[max_len:]
    while rest:
        segments.append(rest[:width])
        rest = rest[width:]

    return ("\n" + marker).join(segments)


def break_code_blocks(text, max_len=DEFAULT_WRAP_WIDTH, marker=DEFAULT_WRAP_MARKER):
    """Wrap over-long lines inside fenced code blocks. Prose is untouched."""
    state = FenceState.OUTSIDE
    output = []

    for line in split_lines(text):
        if is_fence(line):
            state = toggle(state)
        elif state is FenceState.INSIDE:
            line = break_long_line(line, max_len, marker)
        output.append(line + "\n")

    return "".join(output)


def unterminated_fence_line(text):
    """
    Return the 1-based line number of a fence that is never closed,
    or None if every fence in text is balanced.
    """
    state = FenceState.OUTSIDE
    opened_at = None

    for num, line in enumerate(split_lines(text), 1):
        if is_fence(line):
            state = toggle(state)
            opened_at = num if state is FenceState.INSIDE else None

    return opened_at
