"""fonts.py
Registers the TrueType faces bundled in `layout/fonts/` with reportlab.

reportlab's built-in Type 1 faces (Times, Helvetica) only carry WinAnsi
glyphs, so Cyrillic, Greek or Central European names would be drawn as
blank boxes. The bundled DejaVu faces cover those scripts.
"""
from pathlib import Path
from typing import Dict

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

FONTS_DIR = Path(__file__).parent / "fonts"

HEADING_FONT = "DejaVuSerif-Bold"
BODY_FONT = "DejaVuSans"
BODY_BOLD_FONT = "DejaVuSans-Bold"

# Registered font name -> file in FONTS_DIR
BUNDLED_FONTS: Dict[str, str] = {
    HEADING_FONT: "DejaVuSerif-Bold.ttf",
    BODY_FONT: "DejaVuSans.ttf",
    BODY_BOLD_FONT: "DejaVuSans-Bold.ttf",
}


def register_fonts() -> None:
    """
    Register every bundled face under its font name. Safe to call repeatedly;
    faces already known to reportlab are skipped.

    Raises:
        FileNotFoundError: If a bundled font file is missing from the install.
    """
    registered = set(pdfmetrics.getRegisteredFontNames())
    for name, file_name in BUNDLED_FONTS.items():
        if name in registered:
            continue
        path = FONTS_DIR / file_name
        if not path.exists():
            raise FileNotFoundError(f"Bundled font file missing: {path}")
        pdfmetrics.registerFont(TTFont(name, str(path)))
