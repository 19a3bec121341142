"""config.py
Holds various defaults for resume rendering, auth and suggestion settings.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class BuilderDefaults:
    """
    Default settings for parameters used across resume_builder repo.
    """
    # ---- Page geometry ----
    PAGE_SIZE: str = field(
        default = "A4",
        metadata = {
            "description": 'Named page size: "A4" or "LETTER"'
    })
    MARGIN_TOP: float = field(
        default = 50.0,
        metadata = {
            "description": "Top margin in points"
    })
    MARGIN_BOTTOM: float = field(
        default = 50.0,
        metadata = {
            "description": "Bottom margin in points"
    })
    MARGIN_LEFT: float = field(
        default = 50.0,
        metadata = {
            "description": "Left margin in points"
    })
    MARGIN_RIGHT: float = field(
        default = 50.0,
        metadata = {
            "description": "Right margin in points"
    })

    # ---- Typography ----
    HEADING_FONT: str = field(
        default = "DejaVuSerif-Bold",
        metadata = {
            "description": "Font used for the name, section headings and entry titles (bundled TrueType face)"
    })
    BODY_FONT: str = field(
        default = "DejaVuSans",
        metadata = {
            "description": "Font used for running text (bundled TrueType face)"
    })
    BODY_BOLD_FONT: str = field(
        default = "DejaVuSans-Bold",
        metadata = {
            "description": "Bold variant of the body font (skill labels)"
    })
    NAME_SIZE: float = field(
        default = 24.0,
        metadata = {
            "description": "Font size of the name at the top of the page"
    })
    CONTACT_SIZE: float = field(
        default = 10.0,
        metadata = {
            "description": "Font size of the contact and social-link lines"
    })
    SECTION_SIZE: float = field(
        default = 14.0,
        metadata = {
            "description": "Font size of section headings"
    })
    ENTRY_TITLE_SIZE: float = field(
        default = 12.0,
        metadata = {
            "description": "Font size of entry titles (school, job title, project name)"
    })
    BODY_SIZE: float = field(
        default = 10.0,
        metadata = {
            "description": "Font size of body text and bullets"
    })
    FOOTER_SIZE: float = field(
        default = 8.0,
        metadata = {
            "description": "Font size of the page-number footer"
    })
    LEADING_FACTOR: float = field(
        default = 1.2,
        metadata = {
            "description": "Line height as a multiple of the font size"
    })
    BULLET_INDENT: float = field(
        default = 10.0,
        metadata = {
            "description": "Left indent of the bullet glyph in points"
    })
    BULLET_GLYPH: str = field(
        default = "•",
        metadata = {
            "description": "Glyph prefixed to every bullet line"
    })
    TEXT_COLOR: Tuple[float, float, float] = field(
        default = (0.0, 0.0, 0.0),
        metadata = {
            "description": "Default fill color (RGB, 0-1)"
    })
    LINK_COLOR: Tuple[float, float, float] = field(
        default = (0.0, 0.0, 1.0),
        metadata = {
            "description": "Fill color of hyperlink runs (RGB, 0-1)"
    })
    PAGE_NUMBERS: bool = field(
        default = False,
        metadata = {
            "description": "Stamp a `Page i of n` footer on every page"
    })

    # ---- Delivery settings ----
    TEMP_DIR: str = field(
        default = "temp_files",
        metadata = {
            "description": "Directory for temporary rendered artifacts"
    })
    ALLOWED_ORIGINS: List[str] = field(
        default_factory = lambda: ["http://localhost:3000"],
        metadata = {
            "description": "CORS origins allowed to call the API"
    })

    # ---- Auth settings ----
    JWT_ALGORITHM: str = field(
        default = "HS256",
        metadata = {
            "description": "Signing algorithm for bearer tokens"
    })
    TOKEN_LIFETIME_MINUTES: int = field(
        default = 60,
        metadata = {
            "description": "Lifetime of an issued bearer token"
    })

    # ---- LLMClient settings ----
    LLM_PROVIDER: str = field(
        default = "anthropic",
        metadata = {
            "description": 'LLM provider: "anthropic"'
    })
    ANTHROPIC_MODEL_ID: str = field(
        default = "claude-haiku-4-5",
        metadata = {
            "description": "Anthropic model ID"
    })
    SUGGESTION_TEMPERATURE: float = field(
        default = 0.7,
        metadata = {
            "description": "Sampling temperature for content suggestions"
    })


# Import this where needed
BUILDER_DEFAULTS = BuilderDefaults()
