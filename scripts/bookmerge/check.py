"""
Book source checker.

Assembly is deliberately permissive: duplicate manifest entries, links to
chapters that don't exist, and unclosed code fences all pass through
silently. This module reports them before the book goes to pandoc.

Can be invoked from the unified build.py CLI.
"""

from bookmerge import fences, links
from bookmerge.resolve import ChapterNotFoundError
from bookmerge.toc import parse_toc


# ── Severity display ───────────────────────────────────────────────────

SEVERITY_COLOR = {
    "error":   "\033[31m✗\033[0m",
    "warning": "\033[33m!\033[0m",
}

SEVERITY_PLAIN = {
    "error":   "[ERROR]",
    "warning": "[WARN]",
}


# ── Checker class ──────────────────────────────────────────────────────


class SourceChecker:
    """
    Checks a manifest and the chapters it references.

    Usage:
        checker = SourceChecker(manifest_text, loader, config.external_docs)
        success = checker.run()      # prints findings, True if no errors
        findings = checker.check()   # [(file, line, severity, message), ...]
    """

    def __init__(self, manifest_text, chapter_loader, external_docs=None,
                 intro=None, color=True, verbose=False):
        self.manifest_text = manifest_text
        self.load = chapter_loader
        self.external_docs = external_docs
        self.intro = intro
        self.verbose = verbose
        self.symbols = SEVERITY_COLOR if color else SEVERITY_PLAIN

    def check(self):
        findings = []
        entries = parse_toc(self.manifest_text)

        # Duplicate anchors
        seen = {}
        for entry in entries:
            if entry.anchor_id in seen:
                findings.append((
                    entry.target_file, 0, "warning",
                    f"Duplicate anchor '#sec--{entry.anchor_id}' "
                    f"(also from {seen[entry.anchor_id]})",
                ))
            else:
                seen[entry.anchor_id] = entry.target_file
        anchors = set(seen)

        files = [e.target_file for e in entries]
        if self.intro and self._intro_exists():
            files.insert(0, self.intro)
        checked = set()
        for path in files:
            if path in checked:
                continue
            checked.add(path)

            try:
                content = self.load(path)
            except ChapterNotFoundError as e:
                findings.append((path, 0, "error", str(e)))
                continue

            findings.extend(self._check_chapter(path, content, anchors))

        return findings

    def _intro_exists(self):
        exists = getattr(self.load, "exists", None)
        if exists is not None:
            return exists(self.intro)
        try:
            self.load(self.intro)
        except ChapterNotFoundError:
            return False
        return True

    def _check_chapter(self, path, content, anchors):
        findings = []

        open_fence = fences.unterminated_fence_line(content)
        if open_fence:
            findings.append((
                path, open_fence, "warning",
                "Code fence is never closed (rest of file treated as code)",
            ))

        for num, line in enumerate(fences.split_lines(content), 1):
            rewritten = links.normalize_links(line, self.external_docs)
            for target in links.find_anchor_links(rewritten):
                if target not in anchors:
                    findings.append((
                        path, num, "warning",
                        f"Link to '#sec--{target}' has no matching chapter",
                    ))

        return findings

    def run(self):
        """Print findings grouped by file. Returns True if no errors found."""
        findings = self.check()
        counts = {"error": 0, "warning": 0}

        if self.verbose:
            print(f"  {len(parse_toc(self.manifest_text))} manifest entries\n")

        by_file = {}
        for path, line_num, severity, message in findings:
            counts[severity] += 1
            by_file.setdefault(path, []).append((line_num, severity, message))

        for path, items in by_file.items():
            print(f"  {path}")
            for line_num, severity, message in items:
                ref = f":{line_num}" if line_num > 0 else ""
                print(f"  {self.symbols[severity]} {ref} {message}")
            print()

        self._summary(counts, len(by_file))
        return counts["error"] == 0

    def _summary(self, counts, files_with_issues):
        print(f"{'─' * 50}")

        if not any(counts.values()):
            print("  No issues found.")
            return

        parts = []
        if counts["error"]:
            parts.append(f"{counts['error']} errors")
        if counts["warning"]:
            parts.append(f"{counts['warning']} warnings")
        print(f"  {', '.join(parts)} in {files_with_issues} files")
