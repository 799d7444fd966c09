"""
bookmerge — merge a Markdown book source into one document for pandoc.

Public API:
    from bookmerge.config import BookConfig
    from bookmerge.resolve import find_source_dir, ChapterLoader
    from bookmerge.toc import parse_toc, TocEntry
    from bookmerge.assemble import BookAssembler, AssemblyOptions, assemble, assemble_book
    from bookmerge.fences import normalize_code_start, break_code_blocks
    from bookmerge.links import normalize_links
    from bookmerge.headings import normalize_title
    from bookmerge.symbols import remove_emojis
    from bookmerge.builders import BUILDERS, DEFAULT_FORMATS
    from bookmerge.check import SourceChecker
    from bookmerge.index import render_index
"""
