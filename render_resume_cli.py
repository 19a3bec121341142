"""render_resume_cli.py
Render a resume JSON file to PDF from the command line.
Example: `python render_resume_cli.py path/to/resume.json [path/to/output.pdf]`
"""
import json
import sys
from pathlib import Path

from resume_builder.exceptions import RenderError
from resume_builder.layout.layout_engine import LayoutEngine
from resume_builder.layout.page_writer import write_pages
from resume_builder.models import PageConfig, ResumeData


def main():
    if len(sys.argv) < 2:
        print("Usage: python render_resume_cli.py <json_path> [output_path] [--page-numbers]")
        sys.exit(1)

    args = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    json_path = Path(args[0])
    output_path = Path(args[1]) if len(args) > 1 else json_path.with_suffix(".pdf")
    page_numbers = "--page-numbers" in sys.argv

    with open(json_path, "r", encoding="utf-8") as f:
        resume_data = ResumeData.from_dict(json.load(f))

    engine = LayoutEngine(PageConfig(page_numbers=page_numbers))
    try:
        pages = engine.layout(resume_data)
        pdf_bytes = write_pages(pages, engine.config, title=resume_data.name.strip())
    except RenderError as e:
        print(f"Could not render resume: {e}")
        sys.exit(1)

    output_path.write_bytes(pdf_bytes)

    print("Resume Render Result:")
    print(f"Name: {resume_data.name}")
    print(f"Pages: {len(pages)}")
    print(f"Output: {output_path}")


if __name__ == "__main__":
    main()
