"""
Source resolution, chapter loading, and artifact lookup.

Every script that needs to find a book source tree, read a chapter, or
locate shared artifacts (pandoc templates, stylesheets) imports from here.
"""

import os

from bookmerge.config import CONFIG_FILENAME


SOURCE_ROOT = "book_src"
ARTIFACT_DIR = "lib"


class SourceNotFoundError(Exception):
    """Raised when no book source directory can be found."""
    pass


class ChapterNotFoundError(FileNotFoundError):
    """Raised when a file referenced by the manifest cannot be read."""
    pass


def is_source_dir(path, summary="SUMMARY.md"):
    """A book source holds a book.yaml, a manifest, or both."""
    return any(
        os.path.isfile(os.path.join(path, marker))
        for marker in (CONFIG_FILENAME, summary)
    )


def find_source_dir(identifier, project_root, summary="SUMMARY.md"):
    """
    Resolve a book identifier to its source directory.

    Accepts:
        - Direct path:  book_src/trpl  (or any dir holding book.yaml or SUMMARY.md)
        - Keyword:      trpl           (matches a dir name under book_src/)

    Returns: absolute path to the source directory.
    Raises SourceNotFoundError if nothing matches.
    """
    # Direct path (absolute or relative)
    for candidate in [identifier, os.path.join(project_root, identifier)]:
        if is_source_dir(candidate, summary):
            return os.path.abspath(candidate)

    source_root = os.path.join(project_root, SOURCE_ROOT)
    if os.path.isdir(source_root):
        identifier_lower = identifier.lower()
        sources = [
            entry for entry in sorted(os.listdir(source_root))
            if is_source_dir(os.path.join(source_root, entry), summary)
        ]
        # Exact name first, then keyword
        for entry in sources:
            if entry.lower() == identifier_lower:
                return os.path.abspath(os.path.join(source_root, entry))

        for entry in sources:
            if identifier_lower in entry.lower():
                return os.path.abspath(os.path.join(source_root, entry))

    raise SourceNotFoundError(
        f"Could not find book source '{identifier}' "
        f"(searched {identifier} and {source_root})"
    )


def read_text(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text(path, text):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


class ChapterLoader:
    """
    Reads chapter files relative to a source directory.

    Usage:
        load = ChapterLoader(source_dir)
        text = load("variable-bindings.md")
    """

    def __init__(self, source_dir):
        self.source_dir = source_dir

    def path_for(self, relative_path):
        return os.path.join(self.source_dir, relative_path)

    def exists(self, relative_path):
        return os.path.exists(self.path_for(relative_path))

    def __call__(self, relative_path):
        path = self.path_for(relative_path)
        try:
            return read_text(path)
        except OSError as e:
            raise ChapterNotFoundError(
                f"Cannot read chapter '{relative_path}' ({path}): {e.strerror or e}"
            ) from e


def resolve_artifact(source_dir, filename):
    """
    Resolve an artifact filename to its full path.

    Search order (first match wins):
        1. <source>/lib/    (per-book overrides)
        2. <repo>/lib/      (shared templates and stylesheets)

    Returns: absolute path or None.
    """
    if not filename:
        return None

    # 1. Per-book lib/
    path = os.path.join(source_dir, ARTIFACT_DIR, filename)
    if os.path.exists(path):
        return os.path.abspath(path)

    # 2. Repo-level lib/ (up from book_src/<book>)
    repo_root = os.path.dirname(os.path.dirname(os.path.abspath(source_dir)))
    path = os.path.join(repo_root, ARTIFACT_DIR, filename)
    if os.path.exists(path):
        return os.path.abspath(path)

    return None
