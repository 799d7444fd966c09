#!/usr/bin/env python3
"""
Unified build script for bookmerge.

Merges a Markdown book (SUMMARY.md + chapters) into one document and
renders it with pandoc.

Usage:
    python build.py trpl                       Build md + html + epub
    python build.py trpl --pdf                 Build A4 and Letter PDFs
    python build.py trpl --all --pdf           Everything
    python build.py merge trpl                 Only write the merged markdown
    python build.py check trpl                 Report broken links, duplicate anchors

Requires: pandoc, PyYAML, Jinja2
Optional: xelatex (PDF)
"""

import os
import sys
import argparse
import datetime
import traceback

# Ensure bookmerge is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bookmerge.assemble import assemble_book
from bookmerge.builders import BUILDERS, DEFAULT_FORMATS
from bookmerge.check import SourceChecker
from bookmerge.config import DEFAULTS, BookConfig, ConfigError
from bookmerge.index import render_index
from bookmerge.resolve import (
    ChapterLoader,
    ChapterNotFoundError,
    SourceNotFoundError,
    find_source_dir,
    write_text,
)


# ── Resolve book ───────────────────────────────────────────────────────


def resolve_book(args):
    """Find the source directory, load config. Exits on failure."""
    project_root = os.getcwd()

    try:
        summary = DEFAULTS["summary"]
        if args.config:
            summary = BookConfig.load(project_root, path=args.config).summary
        source_dir = find_source_dir(args.book, project_root, summary=summary)
        config = BookConfig.load(source_dir, path=args.config)
    except (SourceNotFoundError, ConfigError) as e:
        print(f"Error: {e}")
        print("  Tip: Run from the project root, or pass a direct path.")
        sys.exit(1)

    return source_dir, config


def current_release_date():
    """Read the clock once per run; everything downstream takes the value."""
    return datetime.date.today()


def assemble_or_exit(config, loader, release_date, print_variant=False, verbose=False):
    try:
        return assemble_book(
            config, loader, release_date,
            print_variant=print_variant, verbose=verbose,
        )
    except ChapterNotFoundError as e:
        print(f"\nError: {e}")
        sys.exit(1)


def output_dir_for(args):
    output_dir = args.output_dir or os.path.join(os.getcwd(), "dist")
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


# ── Build command ──────────────────────────────────────────────────────


def selected_formats(args):
    if args.all:
        formats = list(DEFAULT_FORMATS)
        if args.pdf:
            formats.append("pdf")
        return formats

    formats = [fmt for fmt in BUILDERS if getattr(args, fmt, False)]
    if not formats:
        formats = list(DEFAULT_FORMATS)
    # The merged markdown is always written
    if "md" not in formats:
        formats.insert(0, "md")
    return formats


def cmd_build(args):
    """Assemble the book and build one or more output formats."""
    source_dir, config = resolve_book(args)
    release_date = current_release_date()
    loader = ChapterLoader(source_dir)

    formats = selected_formats(args)

    config.print_summary()
    print(f"  Date:   {release_date.isoformat()}")

    output_dir = output_dir_for(args)
    print(f"  Output: {output_dir}")

    # Assemble each variant at most once
    documents = {}
    for fmt in formats:
        variant = BUILDERS[fmt].variant
        if variant not in documents:
            documents[variant] = assemble_or_exit(
                config, loader, release_date,
                print_variant=(variant == "print"),
                verbose=args.verbose,
            )

    results = {}
    for fmt in formats:
        builder_cls = BUILDERS[fmt]
        builder = builder_cls(
            config=config,
            document=documents[builder_cls.variant],
            output_dir=output_dir,
            release_date=release_date,
            verbose=args.verbose,
        )
        results[fmt] = builder.build()

    write_text(os.path.join(output_dir, "index.html"), render_index(output_dir, config))
    print("  ✓ index.html")

    # Summary
    print(f"\n{'─' * 60}")
    failed = [fmt for fmt, ok in results.items() if not ok]
    if failed:
        print(f"  Done with errors: {', '.join(failed)} failed")
        sys.exit(1)
    else:
        print(f"  Done. {len(results)} format(s) built successfully.")


# ── Merge command ──────────────────────────────────────────────────────


def cmd_merge(args):
    """Write only the composite markdown."""
    source_dir, config = resolve_book(args)
    release_date = current_release_date()
    loader = ChapterLoader(source_dir)

    book = assemble_or_exit(
        config, loader, release_date,
        print_variant=args.print_variant, verbose=args.verbose,
    )

    if args.output:
        output_file = args.output
    else:
        suffix = "print.md" if args.print_variant else "md"
        output_file = os.path.join(
            output_dir_for(args),
            f"{config.prefix}-{release_date.isoformat()}.{suffix}",
        )

    write_text(output_file, book)
    print(f"[✓] Markdown: {output_file}")


# ── Check command ──────────────────────────────────────────────────────


def cmd_check(args):
    """Report problems assembly would pass through silently."""
    source_dir, config = resolve_book(args)
    loader = ChapterLoader(source_dir)

    color = not args.no_color and sys.stdout.isatty()

    print(f"\n  Checking: {config.title}")
    print(f"  Source:   {source_dir}")
    print()

    try:
        manifest = loader(config.summary)
    except ChapterNotFoundError as e:
        print(f"  Error: {e}")
        sys.exit(1)

    checker = SourceChecker(
        manifest,
        loader,
        external_docs=config.external_docs,
        intro=config.intro,
        color=color,
        verbose=args.verbose,
    )

    success = checker.run()
    sys.exit(0 if success else 1)


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        description="Merge a Markdown book and render it with pandoc",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s trpl                      Build md, html and epub
  %(prog)s trpl --pdf                Build A4 + Letter PDFs
  %(prog)s trpl --all --pdf          Build everything
  %(prog)s merge trpl --print        Merged markdown of the print variant
  %(prog)s check trpl                Check links, anchors and code fences
        """,
    )

    sub = parser.add_subparsers(dest="command")

    # ── build (default when no subcommand) ─────────────────
    build_p = sub.add_parser("build", help="Build output formats (default)")
    _add_book_args(build_p)
    _add_build_args(build_p)

    # ── merge ──────────────────────────────────────────────
    merge_p = sub.add_parser("merge", help="Write the merged markdown only")
    _add_book_args(merge_p)
    merge_p.add_argument(
        "--print", dest="print_variant", action="store_true",
        help="Print variant: wrapped code lines, no emoji",
    )
    merge_p.add_argument("--output", "-o", help="Output file")
    merge_p.add_argument("--output-dir", help="Override output directory")
    merge_p.add_argument("--verbose", "-v", action="store_true")

    # ── check ──────────────────────────────────────────────
    check_p = sub.add_parser("check", help="Check book source")
    _add_book_args(check_p)
    check_p.add_argument("--verbose", "-v", action="store_true")
    check_p.add_argument("--no-color", action="store_true", help="Plain output")

    return parser


def _add_book_args(parser):
    parser.add_argument("book", help="Book name under book_src/, or path to source dir")
    parser.add_argument("--config", help="Path to book.yaml (default: <source>/book.yaml)")


def _add_build_args(parser):
    """Add format flags and build options to a parser."""
    fmt = parser.add_argument_group("output formats")
    fmt.add_argument("--md", action="store_true", help="Write merged Markdown")
    fmt.add_argument("--html", action="store_true", help="Build HTML")
    fmt.add_argument("--epub", action="store_true", help="Build EPUB")
    fmt.add_argument("--pdf", action="store_true", help="Build PDF (requires xelatex)")
    fmt.add_argument("--all", action="store_true", help="Build md + html + epub")

    opts = parser.add_argument_group("options")
    opts.add_argument("--output-dir", help="Override output directory")
    opts.add_argument("--verbose", "-v", action="store_true")


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv

    # Allow bare "build.py trpl --epub" without the "build" subcommand
    known_commands = {"build", "merge", "check"}
    if argv and argv[0] not in known_commands and not argv[0].startswith("-"):
        argv = ["build"] + argv

    args = parser.parse_args(argv)

    dispatch = {
        "build": cmd_build,
        "merge": cmd_merge,
        "check": cmd_check,
    }

    handler = dispatch.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {log_path}")
        sys.exit(1)
