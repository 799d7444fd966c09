from bookmerge.builders.html import HtmlBuilder
from bookmerge.builders.epub import EpubBuilder
from bookmerge.builders.markdown import MarkdownBuilder
from bookmerge.builders.pdf import PdfBuilder

BUILDERS = {
    "md": MarkdownBuilder,
    "html": HtmlBuilder,
    "epub": EpubBuilder,
    "pdf": PdfBuilder,
}

# --all builds these; PDF needs xelatex and is opt-in with --pdf
DEFAULT_FORMATS = ["md", "html", "epub"]
