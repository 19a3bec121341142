"""page_writer.py
Second layout pass: draws finished pages onto a PDF canvas.
"""
from io import BytesIO
from typing import List, Optional

from reportlab.pdfgen import canvas

from resume_builder.models import PageConfig
from resume_builder.layout.layout_state import Page, TextRun
from resume_builder.layout.text_metrics import width_of

UNDERLINE_OFFSET = 0.12    # below the baseline, as a fraction of font size
UNDERLINE_THICKNESS = 0.5


def footer_text(page_number: int, page_count: int) -> str:
    return f"Page {page_number} of {page_count}"


def _draw_run(pdf: canvas.Canvas, run: TextRun, page_height: float) -> None:
    """Draw a single run, converting its top-down baseline to PDF coordinates."""
    y = page_height - run.baseline
    style = run.style

    pdf.setFont(style.font, style.size)
    pdf.setFillColorRGB(*style.color)
    pdf.drawString(run.x, y, run.text)

    if style.underline:
        underline_y = y - style.size * UNDERLINE_OFFSET
        pdf.setStrokeColorRGB(*style.color)
        pdf.setLineWidth(UNDERLINE_THICKNESS)
        pdf.line(run.x, underline_y, run.right, underline_y)

    if run.link:
        pdf.linkURL(
            run.link,
            (run.x, y - style.size * 0.25, run.right, y + style.size * 0.85),
            relative=0,
        )


def _draw_footer(pdf: canvas.Canvas, config: PageConfig, page_number: int, page_count: int) -> None:
    text = footer_text(page_number, page_count)
    text_width = width_of(text, config.body_font, config.footer_size)
    x = config.margin_left + (config.content_width - text_width) / 2
    pdf.setFont(config.body_font, config.footer_size)
    pdf.setFillColorRGB(*config.text_color)
    pdf.drawString(x, config.margin_bottom / 2, text)


def write_pages(
    pages: List[Page],
    config: PageConfig,
    title: Optional[str] = None,
) -> bytes:
    """
    Draw every page and return the finished PDF.

    The page count is only known here, after the first pass has produced all
    pages, so footers are stamped in this pass. Output is deterministic for
    identical input (reportlab invariant mode).

    Args:
        pages (List[Page]): Pages produced by the layout pass.
        config (PageConfig): Geometry and typography used for the layout.
        title (Optional[str]): Document title/author metadata.

    Returns:
        bytes: The PDF document.
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=config.page_size, invariant=1)
    if title:
        pdf.setTitle(f"{title} - Resume")
        pdf.setAuthor(title)
    pdf.setSubject("Resume")

    page_count = len(pages)
    for page in pages:
        for run in page.runs:
            _draw_run(pdf, run, config.page_height)
        if config.page_numbers:
            _draw_footer(pdf, config, page.number, page_count)
        pdf.showPage()

    pdf.save()
    result = buffer.getvalue()
    buffer.close()
    return result
