"""
Symbol cleanup for the print (LaTeX/PDF) variant.

XeLaTeX can't embed most pictographic glyphs with the book fonts, so the
print variant strips them. Checkmarks are kept by turning them into the
LaTeX `\\checkmark` macro, which pandoc passes through as raw TeX.
"""

import re


# (first, last) code points, inclusive
EMOJI_RANGES = [
    (0x2600, 0x26FF),    # Miscellaneous Symbols
    (0x2700, 0x27BF),    # Dingbats
    (0xFE0F, 0xFE0F),    # Variation Selector-16 (emoji presentation)
    (0x1F1E6, 0x1F1FF),  # Regional indicators (flags)
    (0x1F300, 0x1F5FF),  # Miscellaneous Symbols and Pictographs
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F680, 0x1F6FF),  # Transport and Map Symbols
    (0x1F700, 0x1F77F),  # Alchemical Symbols
    (0x1F780, 0x1F7FF),  # Geometric Shapes Extended
    (0x1F800, 0x1F8FF),  # Supplemental Arrows-C
    (0x1F900, 0x1F9FF),  # Supplemental Symbols and Pictographs
    (0x1FA70, 0x1FAFF),  # Symbols and Pictographs Extended-A
]

EMOJI_PATTERN = re.compile(
    "[" + "".join(f"{chr(first)}-{chr(last)}" for first, last in EMOJI_RANGES) + "]"
)

CHECKMARKS = re.compile("[✓✔]")


def remove_emojis(text):
    return EMOJI_PATTERN.sub("", text)


def convert_checkmarks(text):
    """✓ and ✔ → \\checkmark. Must run before remove_emojis (both are dingbats)."""
    return CHECKMARKS.sub(lambda _: "\\checkmark", text)
