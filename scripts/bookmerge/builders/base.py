"""
Base builder class for all output formats.

Subclasses implement `build()` and set `format_name` / `extension`.
Shared logic (pandoc invocation, logging, artifact resolution) lives here.
The composite document is piped to pandoc on stdin.
"""

import os
import subprocess
import shutil
from abc import ABC, abstractmethod

from bookmerge.resolve import resolve_artifact


class BaseBuilder(ABC):
    """
    Abstract base for format builders.

    Subclasses must define:
        format_name:  str   — human-readable name ("EPUB", "PDF", etc.)
        extension:    str   — output file suffix ("html", "a4.pdf", etc.)
        build():      method — the actual build logic

    `variant` picks which assembled document the builder receives:
    "screen" (HTML/EPUB/Markdown) or "print" (LaTeX/PDF).
    """

    format_name = None  # Override in subclass
    extension = None    # Override in subclass
    variant = "screen"

    def __init__(self, config, document, output_dir, release_date, verbose=False, **kwargs):
        self.config = config
        self.document = document
        self.output_dir = output_dir
        self.release_date = release_date
        self.verbose = verbose
        self.kwargs = kwargs

    # ── Output path ────────────────────────────────────────

    def output_path(self, extension=None):
        """dist/<prefix>-<YYYY-MM-DD>.<extension>"""
        stem = f"{self.config.prefix}-{self.release_date.isoformat()}"
        return os.path.join(self.output_dir, f"{stem}.{extension or self.extension}")

    @property
    def output_file(self):
        return self.output_path()

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        if self.verbose:
            print(msg)

    def header(self):
        print(f"\n{'─' * 60}")
        print(f"  Building {self.format_name}: {self.config.title}")
        print(f"{'─' * 60}")

    # ── Artifact resolution (delegates to shared module) ───

    def resolve(self, filename):
        """Resolve a template/stylesheet filename for this book."""
        return resolve_artifact(self.config.source_dir, filename)

    # ── Pandoc invocation ──────────────────────────────────

    def pandoc_cmd(self, extra_args=None):
        """Standard pandoc arguments plus any extras."""
        cmd = ["pandoc", f"--from={self.config.from_str}"]
        cmd.extend([
            "--standalone",
            "--table-of-contents",
        ])

        if extra_args:
            cmd.extend(extra_args)

        return cmd

    def exec_cmd(self, cmd, label="Command"):
        """Run a command with the document on stdin; handle errors consistently."""
        self.log(f"  $ {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                input=self.document,
                capture_output=True,
                text=True,
                encoding="utf-8",
            )
        except FileNotFoundError:
            print(f"  ✗ {cmd[0]} not found")
            return False

        if result.returncode != 0:
            print(f"  ✗ {label} failed (exit {result.returncode})")
            if result.stderr:
                for line in result.stderr.strip().splitlines()[:20]:
                    print(f"    {line}")
            return False
        return True

    def check_tool(self, name):
        """Check that a required external tool is on PATH."""
        if not shutil.which(name):
            print(f"  ✗ {name} not found on PATH")
            return False
        return True

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def build(self):
        """
        Execute the build. Returns True on success, False on failure.
        """
        ...
