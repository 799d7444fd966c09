"""
Markdown builder.

Writes the composite document itself. Needs no external tools; useful
for reviewing the merge or feeding it into other renderers.
"""

from bookmerge.builders.base import BaseBuilder
from bookmerge.resolve import write_text


class MarkdownBuilder(BaseBuilder):
    format_name = "Markdown"
    extension = "md"

    def build(self):
        self.header()

        try:
            write_text(self.output_file, self.document)
        except OSError as e:
            print(f"  ✗ Could not write {self.output_file}: {e}")
            return False

        self.log(f"  {len(self.document.splitlines())} lines")
        print(f"  ✓ {self.output_file}")
        return True
