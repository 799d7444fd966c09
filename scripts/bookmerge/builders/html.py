"""
HTML builder.

Pipeline: composite markdown → pandoc → single self-contained html5 page.
"""

from bookmerge.builders.base import BaseBuilder


class HtmlBuilder(BaseBuilder):
    format_name = "HTML"
    extension = "html"

    def build(self):
        self.header()

        html = self.config.html

        extra = [
            "--embed-resources",
            "--section-divs",
            f"--highlight-style={html['highlight_style']}",
            "--to=html5",
            f"--output={self.output_file}",
        ]

        template_path = self.resolve(html.get("template"))
        if template_path:
            extra.append(f"--template={template_path}")
            self.log(f"  Template: {template_path}")

        css_path = self.resolve(html.get("css"))
        if css_path:
            extra.append(f"--css={css_path}")
            self.log(f"  CSS:      {css_path}")
        else:
            print("  Warning: No html CSS found")

        if not self.exec_cmd(self.pandoc_cmd(extra), "HTML generation"):
            return False

        print(f"  ✓ {self.output_file}")
        return True
