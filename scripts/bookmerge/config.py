"""
Book configuration: load, validate, and provide defaults for book.yaml.
"""

import copy
import os
import sys

try:
    import yaml
except ImportError:
    print("Error: PyYAML is required. Install with: pip install pyyaml")
    sys.exit(1)

from bookmerge.links import EXTERNAL_DOCS


CONFIG_FILENAME = "book.yaml"

# Fields required in every book.yaml
REQUIRED_FIELDS = ["title", "author", "prefix"]

# pandoc reader: grid/pipe tables, raw html, footnotes, no inline code attrs
MARKDOWN_EXTENSIONS = (
    "markdown+grid_tables+pipe_tables-simple_tables+raw_html+implicit_figures"
    "+footnotes+intraword_underscores+auto_identifiers-inline_code_attributes"
)

# Defaults applied if missing
DEFAULTS = {
    "description": "",
    "lang": "en",
    "markdown_extensions": MARKDOWN_EXTENSIONS,
    "summary": "SUMMARY.md",
    "intro": "README.md",
    "external_docs": EXTERNAL_DOCS,
    "document": {},
    "chapters": {},
    "html": {},
    "epub": {},
    "pdf": {},
}

# Rendering hints written into the front matter
DOCUMENT_DEFAULTS = {
    "documentclass": "book",
    "links-as-notes": True,
    "verbatim-in-note": True,
    "toc-depth": 2,
}

CHAPTER_DEFAULTS = {
    "base_header_level": 1,
    "strip_file_title": False,
    "prefix_references": False,
}

HTML_DEFAULTS = {
    "template": "template.html",
    "css": "pandoc.css",
    "highlight_style": "tango",
}

EPUB_DEFAULTS = {
    "css": "epub.css",
    "highlight_style": "tango",
}

PDF_DEFAULTS = {
    "template": "template.tex",
    "engine": "xelatex",
    "highlight_style": "tango",
    "papers": {"a4": "a4paper", "letter": "letterpaper"},
    "wrap_width": 87,
    "wrap_marker": "↳ ",
    "convert_checkmarks": True,
    "remove_emojis": True,
}

SECTION_DEFAULTS = {
    "document": DOCUMENT_DEFAULTS,
    "chapters": CHAPTER_DEFAULTS,
    "html": HTML_DEFAULTS,
    "epub": EPUB_DEFAULTS,
    "pdf": PDF_DEFAULTS,
}


class ConfigError(Exception):
    """Raised when book.yaml is missing or invalid."""
    pass


class BookConfig:
    """
    Loaded, validated book configuration.

    Usage:
        config = BookConfig.load(source_dir)
        config.title            # "The Rust Programming Language"
        config.pdf["papers"]    # {"a4": "a4paper", "letter": "letterpaper"}
        config.get("series")    # None if not set
    """

    def __init__(self, data, source_dir):
        self._data = data
        self.source_dir = source_dir

    @classmethod
    def load(cls, source_dir, path=None):
        """Load and validate book.yaml (from source_dir unless path is given)."""
        yaml_path = path or os.path.join(source_dir, CONFIG_FILENAME)
        if not os.path.exists(yaml_path):
            raise ConfigError(f"No {CONFIG_FILENAME} found at {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {yaml_path}: {e}") from e

        return cls.from_dict(data, source_dir)

    @classmethod
    def from_dict(cls, data, source_dir):
        """Validate a raw mapping and apply defaults."""
        if not isinstance(data, dict):
            raise ConfigError(
                f"{CONFIG_FILENAME} must be a YAML mapping, got {type(data).__name__}"
            )

        data = copy.deepcopy(data)

        # Validate required fields
        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise ConfigError(
                f"{CONFIG_FILENAME} missing required fields: {', '.join(missing)}"
            )

        # Apply top-level defaults
        for key, default in DEFAULTS.items():
            data.setdefault(key, copy.deepcopy(default))

        # Apply section defaults
        for section, defaults in SECTION_DEFAULTS.items():
            if not isinstance(data[section], dict):
                raise ConfigError(f"'{section}' must be a mapping")
            for key, default in defaults.items():
                data[section].setdefault(key, copy.deepcopy(default))

        if not isinstance(data["external_docs"], dict):
            raise ConfigError("'external_docs' must map relative prefixes to URLs")

        return cls(data, source_dir)

    # ── Attribute access ───────────────────────────────────

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"BookConfig has no field '{name}'")

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    # ── Convenience ────────────────────────────────────────

    @property
    def from_str(self):
        """The pandoc --from string including extensions."""
        return self.markdown_extensions

    def front_matter(self, release_date):
        """Front matter fields, in output order, for a given release date."""
        fields = {
            "title": self.title,
            "author": self.author,
            "date": release_date,
        }
        if self.description:
            fields["description"] = self.description
        fields["language"] = self.lang
        fields.update(self.document)
        return fields

    def print_summary(self):
        """Print a short config summary."""
        print(f"\n  Book:   {self.title}")
        print(f"  Author: {self.author}")
        print(f"  Source: {self.source_dir}")
