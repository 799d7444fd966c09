"""
Book assembly: manifest + chapters → one composite Markdown document.

Layout of the result:

    ---
    title: ...          (front matter, YAML)
    ...

    # Introduction

    <README.md>

    # Chapter Title {#sec--chapter-file}

    <chapter-file.md>

    ## Nested Title {#sec--nested-file}
    ...

Every chapter goes through an explicit, ordered list of text → text
transforms (see BookAssembler.chapter_transforms). Nothing here reads the
clock; the release date arrives inside the front matter.
"""

from dataclasses import dataclass, field

import yaml

from bookmerge import fences, headings, links, symbols
from bookmerge.resolve import ChapterNotFoundError
from bookmerge.toc import anchor_id, parse_toc


INTRO_TITLE = "Introduction"


@dataclass(frozen=True)
class Chapter:
    path: str
    content: str

    @property
    def anchor_id(self):
        return anchor_id(self.path)


@dataclass
class AssemblyOptions:
    """Per-variant switches for chapter rendering."""

    intro: str = "README.md"
    external_docs: dict = field(default_factory=lambda: dict(links.EXTERNAL_DOCS))
    base_header_level: int = 1
    strip_file_title: bool = False
    prefix_references: bool = False
    wrap_code_lines: bool = False
    wrap_width: int = fences.DEFAULT_WRAP_WIDTH
    wrap_marker: str = fences.DEFAULT_WRAP_MARKER
    convert_checkmarks: bool = False
    remove_emojis: bool = False

    @classmethod
    def from_config(cls, config, print_variant=False):
        """
        Options for the screen variant (HTML/EPUB/Markdown) or, with
        print_variant, for LaTeX/PDF output.
        """
        chapters = config.chapters
        pdf = config.pdf
        return cls(
            intro=config.intro,
            external_docs=dict(config.external_docs),
            base_header_level=chapters["base_header_level"],
            strip_file_title=chapters["strip_file_title"],
            prefix_references=chapters["prefix_references"],
            wrap_code_lines=print_variant,
            wrap_width=pdf["wrap_width"],
            wrap_marker=pdf["wrap_marker"],
            convert_checkmarks=print_variant and pdf["convert_checkmarks"],
            remove_emojis=print_variant and pdf["remove_emojis"],
        )


def render_front_matter(fields):
    """`---` / `...` delimited YAML block followed by a blank line."""
    body = yaml.safe_dump(
        fields,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    return f"---\n{body}...\n\n"


def heading_line(level, title, anchor):
    return f"{'#' * level} {title} {{{links.anchor_for(anchor)}}}\n\n"


class BookAssembler:
    """
    Assembles a composite document.

    Usage:
        assembler = BookAssembler(front_matter, ChapterLoader(src), options)
        book = assembler.assemble(manifest_text)
    """

    def __init__(self, front_matter, chapter_loader, options=None, verbose=False):
        self.front_matter = front_matter
        self.load = chapter_loader
        self.options = options or AssemblyOptions()
        self.verbose = verbose

    # ── Progress ───────────────────────────────────────────

    def progress(self, msg):
        if self.verbose:
            print(msg, end="", flush=True)

    # ── Chapter pipeline ───────────────────────────────────

    def chapter_transforms(self, chapter):
        """Ordered transforms for one chapter. Order matters; see links."""
        opts = self.options
        transforms = []

        if opts.base_header_level != 1:
            transforms.append(
                lambda t: headings.adjust_header_level(t, opts.base_header_level)
            )
        if opts.strip_file_title:
            transforms.append(headings.remove_file_title)
        if opts.prefix_references:
            transforms.append(
                lambda t: links.prefix_reference_names(t, chapter.anchor_id)
            )

        transforms.append(fences.normalize_code_start)
        transforms.append(lambda t: links.normalize_links(t, opts.external_docs))

        # Last, so hidden lines are gone and URLs are final before measuring
        if opts.wrap_code_lines:
            transforms.append(
                lambda t: fences.break_code_blocks(t, opts.wrap_width, opts.wrap_marker)
            )
        return transforms

    def render_chapter(self, chapter):
        text = chapter.content
        for transform in self.chapter_transforms(chapter):
            text = transform(text)
        return text

    def load_chapter(self, path):
        return Chapter(path=path, content=self.load(path))

    def document_transforms(self):
        """Whole-document fixups, applied after concatenation."""
        transforms = []
        if self.options.convert_checkmarks:
            transforms.append(symbols.convert_checkmarks)
        if self.options.remove_emojis:
            transforms.append(symbols.remove_emojis)
        return transforms

    # ── Assembly ───────────────────────────────────────────

    def render_intro(self):
        """Introduction section, or "" when the book has no intro file."""
        if not self.options.intro:
            return ""
        if not self.intro_exists():
            self.progress(f"(no {self.options.intro})")
            return ""
        # Present but unreadable is an error, like any chapter
        intro = self.load_chapter(self.options.intro)
        return f"# {INTRO_TITLE}\n\n{self.render_chapter(intro)}\n\n"

    def intro_exists(self):
        exists = getattr(self.load, "exists", None)
        if exists is not None:
            return exists(self.options.intro)
        # Plain callables can only report absence by failing
        try:
            self.load(self.options.intro)
        except ChapterNotFoundError:
            return False
        return True

    def assemble(self, manifest_text):
        self.progress("Reading book")

        parts = [render_front_matter(self.front_matter), self.render_intro()]
        self.progress(".")

        for entry in parse_toc(manifest_text):
            chapter = self.load_chapter(entry.target_file)
            parts.append(heading_line(
                entry.heading_level,
                headings.normalize_title(entry.title),
                entry.anchor_id,
            ))
            parts.append(self.render_chapter(chapter))
            parts.append("\n\n")
            self.progress(".")

        book = "".join(parts)
        for transform in self.document_transforms():
            book = transform(book)

        self.progress(" done.\n")
        return book


def assemble(manifest_text, chapter_loader, options, front_matter):
    """Functional entry point; see BookAssembler."""
    return BookAssembler(front_matter, chapter_loader, options).assemble(manifest_text)


def assemble_book(config, chapter_loader, release_date, print_variant=False, verbose=False):
    """Assemble the book described by config for one output variant."""
    manifest = chapter_loader(config.summary)
    assembler = BookAssembler(
        config.front_matter(release_date),
        chapter_loader,
        AssemblyOptions.from_config(config, print_variant=print_variant),
        verbose=verbose,
    )
    return assembler.assemble(manifest)
