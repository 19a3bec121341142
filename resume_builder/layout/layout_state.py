"""layout_state.py
Holds the per-render cursor and the pages produced by the first layout pass.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from resume_builder.models import PageConfig
from resume_builder.layout.text_metrics import Color, LinePiece, TextStyle

# Runs whose left edge is further than this from the previous run's right
# edge are treated as separate words when reading a line back as text.
RUN_GAP_TOLERANCE = 0.5


@dataclass
class TextRun:
    """
    A positioned piece of text on a page.

    Attributes:
        text (str): The text to draw.
        x (float): Left edge, in points from the left page edge.
        baseline (float): Baseline, in points from the TOP page edge.
        width (float): Rendered width in points.
        style (TextStyle): Font, size, color and underline flag.
        link (Optional[str]): URL the run links to, if any.
    """
    text: str
    x: float
    baseline: float
    width: float
    style: TextStyle
    link: Optional[str] = None

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class Page:
    """A single laid-out page. `number` starts at 1."""
    number: int
    runs: List[TextRun] = field(default_factory=list)

    @property
    def links(self) -> List[TextRun]:
        return [run for run in self.runs if run.link]

    def lines(self) -> List[str]:
        """Read the page back as text, one string per baseline, top to bottom."""
        by_baseline = {}
        for run in self.runs:
            by_baseline.setdefault(round(run.baseline, 2), []).append(run)

        lines = []
        for baseline in sorted(by_baseline):
            runs = sorted(by_baseline[baseline], key=lambda r: r.x)
            text = ""
            previous: Optional[TextRun] = None
            for run in runs:
                if previous is not None and run.x - previous.right > RUN_GAP_TOLERANCE:
                    text += " "
                text += run.text
                previous = run
            lines.append(text)
        return lines

    def text(self) -> str:
        return "\n".join(self.lines())


class LayoutState:
    """
    Mutable layout cursor for one render.

    Tracks the current page, the vertical write position (measured downward
    from the top edge) and the current font, size and fill color. A new
    LayoutState must be created for every render; instances are never shared.

    Args:
        config (PageConfig): Page geometry and typography for this render.

    Attributes:
        pages (List[Page]): Pages produced so far, in order.
        cursor_y (float): Top of the next line, in points from the top edge.
        font (str): Current font name.
        size (float): Current font size.
        color (Color): Current fill color.
    """

    def __init__(self, config: PageConfig):
        self.config = config
        self.pages: List[Page] = []
        self.cursor_y = config.margin_top
        self.font = config.body_font
        self.size = config.body_size
        self.color = config.text_color
        self.new_page()

    # --- Page handling ---
    @property
    def current_page(self) -> Page:
        return self.pages[-1]

    def new_page(self) -> Page:
        """Start a fresh page and move the cursor to the top margin."""
        page = Page(number=len(self.pages) + 1)
        self.pages.append(page)
        self.cursor_y = self.config.margin_top
        return page

    def _ensure_room(self, height: float) -> None:
        """Break to a new page if a line of `height` would cross the bottom margin."""
        if self.cursor_y + height > self.config.content_bottom and self.current_page.runs:
            self.new_page()

    # --- Style handling ---
    def set_font(self, font: str, size: Optional[float] = None) -> "LayoutState":
        self.font = font
        if size is not None:
            self.size = size
        return self

    def set_color(self, color: Color) -> "LayoutState":
        self.color = color
        return self

    def reset_color(self) -> "LayoutState":
        return self.set_color(self.config.text_color)

    def style(self, color: Optional[Color] = None, underline: bool = False) -> TextStyle:
        """Return a TextStyle snapshot of the current font, size and color."""
        return TextStyle(
            font=self.font,
            size=self.size,
            color=self.color if color is None else color,
            underline=underline,
        )

    def link_style(self) -> TextStyle:
        return self.style(color=self.config.link_color, underline=True)

    # --- Cursor movement ---
    @property
    def line_height(self) -> float:
        return self.config.leading(self.size)

    def move_down(self, lines: float = 1.0) -> None:
        """Advance the cursor by a multiple of the current line height."""
        self.cursor_y += lines * self.line_height

    def place_line(self, placements: List[Tuple[float, LinePiece]]) -> float:
        """
        Emit one visual line made of pieces at explicit x positions.

        All pieces share a baseline derived from the largest font on the line.
        Breaks to a new page first if the line does not fit.

        Args:
            placements (List[Tuple[float, LinePiece]]): (x, piece) pairs.

        Returns:
            float: The baseline the line was written at.
        """
        if not placements:
            return self.cursor_y

        max_size = max(piece.style.size for _, piece in placements)
        height = self.config.leading(max_size)
        self._ensure_room(height)

        baseline = self.cursor_y + max_size
        page = self.current_page
        for x, piece in placements:
            page.runs.append(
                TextRun(
                    text=piece.text,
                    x=x,
                    baseline=baseline,
                    width=piece.width,
                    style=piece.style,
                    link=piece.link,
                )
            )
        self.cursor_y += height
        return baseline
