"""
PDF builder.

Pipeline:
    1. Receives the print variant of the book (long code lines wrapped,
       checkmarks turned into \\checkmark, emoji removed)
    2. Pandoc renders it through the LaTeX template with XeLaTeX,
       once per configured paper size (a4paper, letterpaper, ...)
"""

from bookmerge.builders.base import BaseBuilder


class PdfBuilder(BaseBuilder):
    format_name = "PDF"
    extension = "pdf"
    variant = "print"

    def paper_cmd(self, paper, output_file, template):
        pdf = self.config.pdf
        extra = [
            f"--highlight-style={pdf['highlight_style']}",
            "--top-level-division=chapter",
            f"--pdf-engine={pdf['engine']}",
            f"--variable=papersize:{paper}",
            f"--output={output_file}",
        ]
        if template:
            extra.append(f"--template={template}")
        return self.pandoc_cmd(extra)

    def build(self):
        self.header()

        pdf = self.config.pdf
        engine = pdf.get("engine", "xelatex")

        template = self.resolve(pdf.get("template"))
        if template:
            self.log(f"  Template: {template}")
        else:
            print(f"  Warning: Template '{pdf.get('template')}' not found, using pandoc default")

        if not self.check_tool(engine):
            print("  Install TeX Live or MacTeX:")
            print("    macOS:  brew install --cask mactex")
            print("    Ubuntu: sudo apt install texlive-xetex texlive-fonts-extra")
            return False

        for name, paper in pdf["papers"].items():
            output_file = self.output_path(f"{name}.pdf")
            self.log(f"  {engine} ({paper})...")
            cmd = self.paper_cmd(paper, output_file, template)
            if not self.exec_cmd(cmd, f"PDF generation ({name})"):
                return False
            print(f"  ✓ {output_file}")

        return True
