"""
Link rewriting for the composite document.

Relative links into library docs become absolute URLs, and links to other
chapters (`foo.html`) become in-document anchors (`#sec--foo`). Reference
style link ids can also be namespaced per chapter so that two chapters
defining `[docs]: ...` don't clash once merged.
"""

import re

from bookmerge.fences import FenceState, is_fence, split_lines, toggle


# Known library doc folders, rewritten in this order
EXTERNAL_DOCS = {
    "../std": "http://doc.rust-lang.org/std",
    "../reference": "http://doc.rust-lang.org/reference",
    "../rustc": "http://doc.rust-lang.org/rustc",
    "../syntax": "http://doc.rust-lang.org/syntax",
    "../core": "http://doc.rust-lang.org/core",
}

ANCHOR_PREFIX = "sec--"

CROSS_REFERENCE = re.compile(r"\]\(([\w-]+)\.html\)")
ANCHOR_LINK = re.compile(r"\]\(#" + ANCHOR_PREFIX + r"([\w-]+)\)")

# Ids starting with ^ are footnotes and keep their names
REFERENCE_LINK = re.compile(r"\[(?P<title>[^\]]+)\]\[(?P<id>[^\]^][^\]]*)\]")
REFERENCE_DEF = re.compile(r"^\[(?P<id>[^\]^][^\]]*)\]:\s(?P<link>.+)$")


def anchor_for(name):
    return f"#{ANCHOR_PREFIX}{name}"


def rewrite_external_prefixes(text, prefixes=None):
    """Replace each known relative docs prefix with its absolute URL."""
    if prefixes is None:
        prefixes = EXTERNAL_DOCS
    for prefix, url in prefixes.items():
        text = text.replace(prefix, url)
    return text


def rewrite_cross_references(text):
    """`[Foo](variable-bindings.html)` → `[Foo](#sec--variable-bindings)`."""
    return CROSS_REFERENCE.sub(r"](" + anchor_for(r"\1") + ")", text)


def normalize_links(text, prefixes=None):
    """
    Run both link passes, external prefixes first.

    The second pass does not know which links the first one produced: a
    prefix whose replacement is a bare `name` (no slash) turns
    `](../x.html)` into `](name.html)`, which is then re-targeted to
    `#sec--name`.
    """
    transforms = [
        lambda t: rewrite_external_prefixes(t, prefixes),
        rewrite_cross_references,
    ]
    for transform in transforms:
        text = transform(text)
    return text


def prefix_reference_names(text, prefix):
    """
    Namespace reference-style link ids: `[t][id]` → `[t][prefix--id]`,
    `[id]: url` → `[prefix--id]: url`. Code blocks are left alone.
    """
    state = FenceState.OUTSIDE
    output = []

    for line in split_lines(text):
        if is_fence(line):
            state = toggle(state)
        elif state is FenceState.OUTSIDE:
            definition = REFERENCE_DEF.match(line)
            if definition:
                line = f"[{prefix}--{definition.group('id')}]: {definition.group('link')}"
            else:
                line = REFERENCE_LINK.sub(
                    lambda m: f"[{m.group('title')}][{prefix}--{m.group('id')}]",
                    line,
                )
        output.append(line + "\n")

    return "".join(output)


def find_anchor_links(text):
    """All `#sec--X` targets linked from text, as a list of X."""
    return ANCHOR_LINK.findall(text)
