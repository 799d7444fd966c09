"""Unit tests for book.yaml loading and defaults."""

import datetime

import pytest

from bookmerge.config import BookConfig, ConfigError, DEFAULTS, PDF_DEFAULTS


def _write(tmp_path, text):
    (tmp_path / "book.yaml").write_text(text, encoding="utf-8")
    return str(tmp_path)


def test_load_applies_defaults(tmp_path):
    source = _write(tmp_path, "title: T\nauthor: A\nprefix: t\n")
    config = BookConfig.load(source)

    assert config.title == "T"
    assert config.lang == "en"
    assert config.summary == "SUMMARY.md"
    assert config.intro == "README.md"
    assert config.pdf["wrap_width"] == 87
    assert config.pdf["wrap_marker"] == "↳ "
    assert config.chapters["base_header_level"] == 1
    assert config.external_docs["../std"] == "http://doc.rust-lang.org/std"
    assert config.from_str.startswith("markdown+grid_tables")
    assert config.source_dir == source


def test_partial_section_keeps_other_defaults(tmp_path):
    source = _write(tmp_path, "title: T\nauthor: A\nprefix: t\npdf:\n  wrap_width: 80\n")
    config = BookConfig.load(source)
    assert config.pdf["wrap_width"] == 80
    assert config.pdf["engine"] == "xelatex"
    assert config.pdf["papers"] == {"a4": "a4paper", "letter": "letterpaper"}


def test_defaults_not_shared_between_configs(tmp_path):
    source = _write(tmp_path, "title: T\nauthor: A\nprefix: t\n")
    first = BookConfig.load(source)
    first.pdf["papers"]["a5"] = "a5paper"
    first.external_docs["../alloc"] = "x"

    second = BookConfig.load(source)
    assert "a5" not in second.pdf["papers"]
    assert "../alloc" not in second.external_docs
    assert "a5" not in PDF_DEFAULTS["papers"]
    assert "../alloc" not in DEFAULTS["external_docs"]


def test_missing_required_fields(tmp_path):
    source = _write(tmp_path, "title: T\n")
    with pytest.raises(ConfigError, match="author, prefix"):
        BookConfig.load(source)


def test_not_a_mapping(tmp_path):
    source = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        BookConfig.load(source)


def test_invalid_yaml(tmp_path):
    source = _write(tmp_path, "title: [unclosed\n")
    with pytest.raises(ConfigError, match="Could not parse"):
        BookConfig.load(source)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="No book.yaml"):
        BookConfig.load(str(tmp_path))


def test_explicit_path(tmp_path):
    path = tmp_path / "elsewhere.yaml"
    path.write_text("title: T\nauthor: A\nprefix: t\n", encoding="utf-8")
    config = BookConfig.load(str(tmp_path / "src"), path=str(path))
    assert config.prefix == "t"


def test_section_must_be_mapping():
    with pytest.raises(ConfigError, match="'pdf' must be a mapping"):
        BookConfig.from_dict({"title": "T", "author": "A", "prefix": "t", "pdf": 3}, ".")


def test_unknown_field_raises_attribute_error():
    config = BookConfig.from_dict({"title": "T", "author": "A", "prefix": "t"}, ".")
    assert config.get("series") is None
    with pytest.raises(AttributeError):
        config.series


def test_front_matter_fields():
    config = BookConfig.from_dict(
        {
            "title": "T",
            "author": "A",
            "prefix": "t",
            "description": "About T",
            "document": {"toc-depth": 3},
        },
        ".",
    )
    date = datetime.date(2017, 6, 12)
    assert list(config.front_matter(date).items()) == [
        ("title", "T"),
        ("author", "A"),
        ("date", date),
        ("description", "About T"),
        ("language", "en"),
        ("toc-depth", 3),
        ("documentclass", "book"),
        ("links-as-notes", True),
        ("verbatim-in-note", True),
    ]
