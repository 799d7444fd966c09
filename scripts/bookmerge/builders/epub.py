"""
EPUB builder.

Pipeline: composite markdown → pandoc → epub with the book stylesheet.
"""

from bookmerge.builders.base import BaseBuilder


class EpubBuilder(BaseBuilder):
    format_name = "EPUB"
    extension = "epub"

    def build(self):
        self.header()

        epub = self.config.epub

        extra = [
            f"--highlight-style={epub['highlight_style']}",
            "--to=epub",
            f"--output={self.output_file}",
        ]

        # CSS (shared artifact)
        css_path = self.resolve(epub.get("css"))
        if css_path:
            extra.append(f"--css={css_path}")
            self.log(f"  CSS:   {css_path}")
        else:
            print("  Warning: No epub CSS found")

        if not self.exec_cmd(self.pandoc_cmd(extra), "EPUB generation"):
            return False

        print(f"  ✓ {self.output_file}")
        return True
