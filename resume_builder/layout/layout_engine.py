"""layout_engine.py
Lays ResumeData out onto fixed-size pages and renders it to PDF bytes.
"""
from typing import Any, Dict, List, Optional, Union

from resume_builder.exceptions import MissingRequiredFieldError
from resume_builder.logging import LoggerFactory
from resume_builder.models import (
    CustomSection,
    EducationEntry,
    ExperienceEntry,
    PageConfig,
    ProjectEntry,
    ResumeData,
)
from resume_builder.layout.layout_state import LayoutState, Page
from resume_builder.layout.page_writer import write_pages
from resume_builder.layout.text_metrics import (
    Line,
    LinePiece,
    Segment,
    measure_line,
    width_of,
    wrap_segments,
)

SEPARATOR = " | "
LINK_SEPARATOR = ", "

logger = LoggerFactory().get_logger(
    name="layout_engine",
    logger_type="render",
)


def format_date_range(start: str, end: str) -> str:
    """Return `start - end`, or whichever side is present."""
    start, end = start.strip(), end.strip()
    if start and end:
        return f"{start} - {end}"
    return start or end


class LayoutEngine:
    """
    Turns a ResumeData object into a paginated PDF.

    Rendering happens in two passes:
        1. `layout()` walks the resume top to bottom, emitting positioned text
           runs into a fresh LayoutState and returning its pages.
        2. `write_pages()` draws those pages and stamps page-number footers
           (the page count is only known once the first pass is done).

    The engine holds configuration only. All cursor and style state lives in
    the LayoutState created per call, so one engine can serve concurrent renders.

    Args:
        config (Optional[PageConfig]): Page geometry and typography. Defaults
            to PageConfig() (values from BUILDER_DEFAULTS).

    Example:
        >>> engine = LayoutEngine()
        >>> pdf_bytes = engine.render(ResumeData(name="Jane Doe"))
        >>> pdf_bytes[:5]
        b'%PDF-'
    """

    def __init__(self, config: Optional[PageConfig] = None):
        self.config = config or PageConfig()

    # ----------------------
    # Public interface
    # ----------------------
    def render(self, data: Union[ResumeData, Dict[str, Any]]) -> bytes:
        """
        Lay out and render `data` to PDF bytes.

        Raises:
            MissingRequiredFieldError: If `name` is missing or blank. Nothing is
                rendered in this case.
        """
        data = self._coerce(data)
        pages = self.layout(data)
        pdf_bytes = write_pages(pages, self.config, title=data.name.strip())
        logger.debug(f"Rendered resume for `{data.name.strip()}`: {len(pages)} page(s), {len(pdf_bytes)} bytes")
        return pdf_bytes

    def layout(self, data: Union[ResumeData, Dict[str, Any]]) -> List[Page]:
        """
        Run the first pass only and return the laid-out pages.

        Raises:
            MissingRequiredFieldError: If `name` is missing or blank.
        """
        data = self._coerce(data)
        if not data.name.strip():
            raise MissingRequiredFieldError("name")

        state = LayoutState(self.config)
        self._emit_header(state, data)
        self._emit_education(state, data.education)
        self._emit_experience(state, data.experience)
        self._emit_projects(state, data.projects)
        self._emit_skills(state, data)
        for section in data.custom_sections:
            self._emit_custom_section(state, section)
        return state.pages

    @staticmethod
    def _coerce(data: Union[ResumeData, Dict[str, Any]]) -> ResumeData:
        if isinstance(data, ResumeData):
            return data
        return ResumeData.from_dict(data)

    # ----------------------
    # Line primitives
    # ----------------------
    def _place(self, state: LayoutState, line: Line, x: float) -> None:
        placements = []
        for piece in line.pieces:
            placements.append((x, piece))
            x += piece.width
        state.place_line(placements)

    def _flow(
        self,
        state: LayoutState,
        segments: List[Segment],
        x: Optional[float] = None,
        width: Optional[float] = None,
        align: str = "left",
    ) -> None:
        """Wrap continued segments within `width` and emit each line."""
        config = self.config
        x = config.margin_left if x is None else x
        width = config.content_width if width is None else width

        for line in wrap_segments(segments, width):
            offset = x
            if align == "center":
                offset = x + (width - line.width) / 2
            self._place(state, line, offset)

    def _emit_two_column(
        self,
        state: LayoutState,
        left: List[Segment],
        right: List[Segment],
    ) -> None:
        """
        Emit `left` flush left and `right` flush right on one line.

        If both do not fit within the content width they are joined with a
        separator and wrapped instead, so text is never truncated or overlapped.
        """
        left = [s for s in left if s.text]
        right = [s for s in right if s.text.strip()]
        if not right:
            self._flow(state, left)
            return

        config = self.config
        left_line = measure_line(left)
        right_line = measure_line(right)
        spacing = config.content_width - left_line.width - right_line.width

        if spacing >= 0:
            placements = []
            x = config.margin_left
            for piece in left_line.pieces:
                placements.append((x, piece))
                x += piece.width
            x = config.margin_left + config.content_width - right_line.width
            for piece in right_line.pieces:
                placements.append((x, piece))
                x += piece.width
            state.place_line(placements)
            return

        logger.warning(
            f"Two-column line overflows content width by {-spacing:.1f}pt, using separator form"
        )
        separator = Segment(SEPARATOR, right[0].style)
        self._flow(state, left + [separator] + right if left else right)

    def _emit_bullet(self, state: LayoutState, segments: List[Segment]) -> None:
        """
        Emit a bullet with a hanging indent: wrapped lines align under the first
        character after the glyph, not under the glyph.
        """
        config = self.config
        glyph_text = f"{config.bullet_glyph} "
        glyph_style = state.style()
        glyph_x = config.margin_left + config.bullet_indent
        text_x = glyph_x + width_of(glyph_text, glyph_style.font, glyph_style.size)
        width = config.content_width - (text_x - config.margin_left)

        for index, line in enumerate(wrap_segments(segments, width)):
            placements = []
            if index == 0:
                glyph_width = width_of(glyph_text, glyph_style.font, glyph_style.size)
                placements.append((glyph_x, LinePiece(glyph_text, glyph_style, None, glyph_width)))
            x = text_x
            for piece in line.pieces:
                placements.append((x, piece))
                x += piece.width
            state.place_line(placements)

    def _emit_bullets(self, state: LayoutState, items: List[str]) -> None:
        config = self.config
        state.set_font(config.body_font, config.body_size)
        for item in items:
            if item.strip():
                self._emit_bullet(state, [Segment(item.strip(), state.style())])

    def _emit_section_heading(self, state: LayoutState, title: str) -> None:
        config = self.config
        state.move_down(0.5)
        state.set_font(config.heading_font, config.section_size).reset_color()
        self._flow(state, [Segment(title.upper(), state.style())])
        state.move_down(0.5)

    # ----------------------
    # Header
    # ----------------------
    def _emit_header(self, state: LayoutState, data: ResumeData) -> None:
        config = self.config

        state.set_font(config.heading_font, config.name_size)
        self._flow(state, [Segment(data.name.strip(), state.style())], align="center")
        state.move_down(0.5)

        contact_info = [value.strip() for value in (data.email, data.phone) if value.strip()]
        state.set_font(config.body_font, config.contact_size)
        if contact_info:
            self._flow(state, [Segment(SEPARATOR.join(contact_info), state.style())], align="center")

        social_links = data.social_links()
        if social_links:
            state.move_down(0.2)
            self._emit_social_links(state, social_links)

        state.reset_color()
        state.move_down(1.5)

    def _emit_social_links(self, state: LayoutState, social_links) -> None:
        """
        Emit labeled social links centered as a unit.

        Labels are packed greedily into lines no wider than the content width;
        each line is centered on its own total width. A lone label wider than
        the content width starts at its (negative) centered offset.
        """
        config = self.config
        link_style = state.link_style()
        separator_style = state.style(color=config.text_color)
        separator_width = width_of(SEPARATOR, separator_style.font, separator_style.size)

        lines: List[List[LinePiece]] = [[]]
        line_width = 0.0
        for label, url in social_links:
            label_piece = LinePiece(label, link_style, url, width_of(label, link_style.font, link_style.size))
            added = label_piece.width + (separator_width if lines[-1] else 0.0)
            if lines[-1] and line_width + added > config.content_width:
                lines.append([])
                line_width = 0.0
                added = label_piece.width
            if lines[-1]:
                lines[-1].append(LinePiece(SEPARATOR, separator_style, None, separator_width))
            lines[-1].append(label_piece)
            line_width += added

        if len(lines) > 1:
            logger.warning(f"Social links overflow content width, wrapped onto {len(lines)} lines")

        for pieces in lines:
            line = Line(pieces=pieces)
            start_x = config.margin_left + (config.content_width - line.width) / 2
            self._place(state, line, start_x)

    # ----------------------
    # Sections
    # ----------------------
    def _emit_education(self, state: LayoutState, entries: List[EducationEntry]) -> None:
        entries = [entry for entry in entries if not entry.is_blank()]
        if not entries:
            return

        config = self.config
        self._emit_section_heading(state, "Education")
        for entry in entries:
            school, degree = entry.school.strip(), entry.degree.strip()

            state.set_font(config.heading_font, config.entry_title_size)
            title_style = state.style()
            self._emit_two_column(
                state,
                [Segment(school or degree, title_style)],
                [Segment(format_date_range(entry.start_date, entry.end_date), title_style)],
            )

            state.set_font(config.body_font, config.body_size)
            body_style = state.style()
            second_line = degree if school else ""
            if second_line or entry.location.strip():
                self._emit_two_column(
                    state,
                    [Segment(second_line, body_style)],
                    [Segment(entry.location.strip(), body_style)],
                )
            state.move_down(0.5)

    def _emit_experience(self, state: LayoutState, entries: List[ExperienceEntry]) -> None:
        entries = [entry for entry in entries if not entry.is_blank()]
        if not entries:
            return

        config = self.config
        self._emit_section_heading(state, "Experience")
        for entry in entries:
            state.set_font(config.heading_font, config.entry_title_size)
            title_style = state.style()
            title_parts = [
                part.strip()
                for part in (entry.title, entry.company, entry.location)
                if part.strip()
            ]
            self._emit_two_column(
                state,
                [Segment(SEPARATOR.join(title_parts), title_style)],
                [Segment(format_date_range(entry.start_date, entry.end_date), title_style)],
            )
            state.move_down(0.25)
            self._emit_bullets(state, entry.responsibilities)
            state.move_down(0.5)

    def _emit_projects(self, state: LayoutState, entries: List[ProjectEntry]) -> None:
        entries = [entry for entry in entries if not entry.is_blank()]
        if not entries:
            return

        config = self.config
        self._emit_section_heading(state, "Projects")
        for entry in entries:
            state.set_font(config.heading_font, config.entry_title_size)
            title_style = state.style()
            link_style = state.link_style()

            segments = [Segment(entry.name.strip(), title_style)]
            links = [
                (label, url.strip())
                for label, url in (("GitHub", entry.github_link), ("Live", entry.link))
                if url.strip()
            ]
            for index, (label, url) in enumerate(links):
                segments.append(Segment(SEPARATOR if index == 0 else LINK_SEPARATOR, title_style))
                segments.append(Segment(label, link_style, link=url))
            if entry.technologies.strip():
                segments.append(Segment(SEPARATOR, title_style))
                segments.append(Segment(entry.technologies.strip(), title_style))

            self._emit_two_column(
                state,
                segments,
                [Segment(format_date_range(entry.start_date, entry.end_date), title_style)],
            )
            state.move_down(0.25)
            self._emit_bullets(state, entry.details)
            state.move_down(0.5)

    def _emit_skills(self, state: LayoutState, data: ResumeData) -> None:
        skills = [(label, value.strip()) for label, value in data.technical_skills.items() if value.strip()]
        if not skills:
            return

        config = self.config
        self._emit_section_heading(state, "Technical Skills")
        for label, value in skills:
            state.set_font(config.body_bold_font, config.body_size)
            label_style = state.style()
            state.set_font(config.body_font, config.body_size)
            self._flow(state, [Segment(f"{label}: ", label_style), Segment(value, state.style())])
        state.move_down(0.5)

    def _emit_custom_section(self, state: LayoutState, section: CustomSection) -> None:
        if section.is_blank():
            return

        config = self.config
        self._emit_section_heading(state, section.title.strip())
        state.set_font(config.body_font, config.body_size)
        for item in section.items:
            if not item.content.strip():
                continue
            segments = [Segment(item.content.strip(), state.style())]
            if item.link.strip():
                segments.append(Segment(" ", state.style()))
                segments.append(Segment(item.link.strip(), state.link_style(), link=item.link.strip()))
            self._emit_bullet(state, segments)
            state.reset_color()
        state.move_down(0.5)


def render(
    data: Union[ResumeData, Dict[str, Any]],
    config: Optional[PageConfig] = None,
) -> bytes:
    """Render `data` with a fresh LayoutEngine. See LayoutEngine.render."""
    return LayoutEngine(config).render(data)
