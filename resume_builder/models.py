"""models.py
Holds standardized data models used across various functions.
"""
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4, LETTER

from resume_builder.config import BUILDER_DEFAULTS

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}


def _text(value: Any) -> str:
    """
    Coerce a JSON value into a string, mapping None to "". Lists (e.g.
    `["Python", "Go"]` for a skills field) are joined with ", ", skipping
    blank items.
    """
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(text for text in (_text(item).strip() for item in value) if text)
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> List[str]:
    """Coerce a JSON value into a list of strings, preserving order."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [_text(item) for item in value]


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


# --------------------------------------------------------------
# RESUME ENTRIES
# --------------------------------------------------------------
@dataclass
class EducationEntry:
    """
    A single school attended.

    Attributes:
        school (str): Name of the institution.
        degree (str): Degree or program studied.
        location (str): City/region of the institution.
        start_date (str): Free-text start date.
        end_date (str): Free-text end date.
    """
    school: str = ""
    degree: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EducationEntry":
        return cls(
            school=_text(payload.get("school")),
            degree=_text(payload.get("degree")),
            location=_text(payload.get("location")),
            start_date=_text(payload.get("startDate")),
            end_date=_text(payload.get("endDate")),
        )

    def is_blank(self) -> bool:
        return not (self.school.strip() or self.degree.strip())


@dataclass
class ExperienceEntry:
    """
    A single job held.

    Attributes:
        title (str): Job title.
        company (str): Employer name.
        location (str): City/region of the job.
        start_date (str): Free-text start date.
        end_date (str): Free-text end date.
        responsibilities (List[str]): Bullet points, in display order.
    """
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ExperienceEntry":
        return cls(
            title=_text(payload.get("title")),
            company=_text(payload.get("company")),
            location=_text(payload.get("location")),
            start_date=_text(payload.get("startDate")),
            end_date=_text(payload.get("endDate")),
            responsibilities=_text_list(payload.get("responsibilities")),
        )

    def is_blank(self) -> bool:
        return not (self.title.strip() or self.company.strip())


@dataclass
class ProjectEntry:
    """
    A single project.

    Attributes:
        name (str): Project name.
        technologies (str): Free-text technologies used.
        start_date (str): Free-text start date.
        end_date (str): Free-text end date.
        link (str): URL of the live project.
        github_link (str): URL of the source repository.
        details (List[str]): Bullet points, in display order.
    """
    name: str = ""
    technologies: str = ""
    start_date: str = ""
    end_date: str = ""
    link: str = ""
    github_link: str = ""
    details: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ProjectEntry":
        return cls(
            name=_text(payload.get("name")),
            technologies=_text(payload.get("technologies")),
            start_date=_text(payload.get("startDate")),
            end_date=_text(payload.get("endDate")),
            link=_text(payload.get("link")),
            github_link=_text(payload.get("githubLink")),
            details=_text_list(payload.get("details")),
        )

    def is_blank(self) -> bool:
        return not self.name.strip()


@dataclass
class CustomSectionItem:
    content: str = ""
    link: str = ""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CustomSectionItem":
        return cls(
            content=_text(payload.get("content")),
            link=_text(payload.get("link")),
        )


@dataclass
class CustomSection:
    """A user-named section holding free-form items."""
    title: str = ""
    items: List[CustomSectionItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CustomSection":
        return cls(
            title=_text(payload.get("title")),
            items=[CustomSectionItem.from_dict(i) for i in _dict_list(payload.get("items"))],
        )

    def is_blank(self) -> bool:
        if not self.title.strip():
            return True
        return not any(item.content.strip() for item in self.items)


@dataclass
class TechnicalSkills:
    """
    Free-text, comma-separated skill lists by category.
    """
    languages: str = ""
    frameworks: str = ""
    developer_tools: str = ""
    libraries: str = ""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TechnicalSkills":
        return cls(
            languages=_text(payload.get("languages")),
            frameworks=_text(payload.get("frameworks")),
            developer_tools=_text(payload.get("developerTools")),
            libraries=_text(payload.get("libraries")),
        )

    def items(self) -> List[Tuple[str, str]]:
        """Return (label, value) pairs in display order."""
        return [
            ("Languages", self.languages),
            ("Frameworks", self.frameworks),
            ("Developer Tools", self.developer_tools),
            ("Libraries", self.libraries),
        ]

    def is_blank(self) -> bool:
        return not any(value.strip() for _, value in self.items())


# --------------------------------------------------------------
# RESUME DATA
# --------------------------------------------------------------
@dataclass
class ResumeData:
    """
    Stores everything submitted through the resume form.

    Constructed once per request and discarded after rendering. List order
    is display order.

    Attributes:
        name (str): Full name (required for rendering).
        email (str): Email address.
        phone (str): Phone number.
        linkedin (str): LinkedIn profile URL.
        github (str): GitHub profile URL.
        twitter (str): Twitter profile URL.
        portfolio (str): Portfolio site URL.
        education (List[EducationEntry]): Schools attended.
        experience (List[ExperienceEntry]): Jobs held.
        projects (List[ProjectEntry]): Projects.
        technical_skills (TechnicalSkills): Skills by category.
        custom_sections (List[CustomSection]): User-named sections.
    """
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    twitter: str = ""
    portfolio: str = ""
    education: List[EducationEntry] = field(default_factory=list)
    experience: List[ExperienceEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    technical_skills: TechnicalSkills = field(default_factory=TechnicalSkills)
    custom_sections: List[CustomSection] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "ResumeData":
        """
        Build ResumeData from the camelCase JSON body sent by the form.
        Missing keys, nulls and wrongly-typed containers degrade to empty values.
        """
        payload = payload if isinstance(payload, dict) else {}
        skills = payload.get("technicalSkills")
        return cls(
            name=_text(payload.get("name")),
            email=_text(payload.get("email")),
            phone=_text(payload.get("phone")),
            linkedin=_text(payload.get("linkedin")),
            github=_text(payload.get("github")),
            twitter=_text(payload.get("twitter")),
            portfolio=_text(payload.get("portfolio")),
            education=[EducationEntry.from_dict(e) for e in _dict_list(payload.get("education"))],
            experience=[ExperienceEntry.from_dict(e) for e in _dict_list(payload.get("experience"))],
            projects=[ProjectEntry.from_dict(p) for p in _dict_list(payload.get("projects"))],
            technical_skills=TechnicalSkills.from_dict(skills if isinstance(skills, dict) else {}),
            custom_sections=[
                CustomSection.from_dict(s) for s in _dict_list(payload.get("customSections"))
            ],
        )

    @classmethod
    def new_blank(cls) -> "ResumeData":
        """Return the state of a freshly opened form: one empty element per list."""
        return cls(
            education=[EducationEntry()],
            experience=[ExperienceEntry()],
            projects=[ProjectEntry()],
            custom_sections=[CustomSection(items=[CustomSectionItem()])],
        )

    def social_links(self) -> List[Tuple[str, str]]:
        """Return (label, url) pairs for every non-empty social URL, in header order."""
        candidates = [
            ("Portfolio", self.portfolio),
            ("GitHub", self.github),
            ("LinkedIn", self.linkedin),
            ("Twitter", self.twitter),
        ]
        return [(label, url.strip()) for label, url in candidates if url.strip()]


# --------------------------------------------------------------
# PAGE CONFIG
# --------------------------------------------------------------
@dataclass
class PageConfig:
    """
    Page geometry and typography for a single render.

    Defaults are pulled from `BUILDER_DEFAULTS`.
    """
    page_size: Tuple[float, float] = PAGE_SIZES[BUILDER_DEFAULTS.PAGE_SIZE]
    margin_top: float = BUILDER_DEFAULTS.MARGIN_TOP
    margin_bottom: float = BUILDER_DEFAULTS.MARGIN_BOTTOM
    margin_left: float = BUILDER_DEFAULTS.MARGIN_LEFT
    margin_right: float = BUILDER_DEFAULTS.MARGIN_RIGHT
    heading_font: str = BUILDER_DEFAULTS.HEADING_FONT
    body_font: str = BUILDER_DEFAULTS.BODY_FONT
    body_bold_font: str = BUILDER_DEFAULTS.BODY_BOLD_FONT
    name_size: float = BUILDER_DEFAULTS.NAME_SIZE
    contact_size: float = BUILDER_DEFAULTS.CONTACT_SIZE
    section_size: float = BUILDER_DEFAULTS.SECTION_SIZE
    entry_title_size: float = BUILDER_DEFAULTS.ENTRY_TITLE_SIZE
    body_size: float = BUILDER_DEFAULTS.BODY_SIZE
    footer_size: float = BUILDER_DEFAULTS.FOOTER_SIZE
    leading_factor: float = BUILDER_DEFAULTS.LEADING_FACTOR
    bullet_indent: float = BUILDER_DEFAULTS.BULLET_INDENT
    bullet_glyph: str = BUILDER_DEFAULTS.BULLET_GLYPH
    text_color: Tuple[float, float, float] = BUILDER_DEFAULTS.TEXT_COLOR
    link_color: Tuple[float, float, float] = BUILDER_DEFAULTS.LINK_COLOR
    page_numbers: bool = BUILDER_DEFAULTS.PAGE_NUMBERS

    @classmethod
    def from_page_size_name(cls, name: str, **overrides) -> "PageConfig":
        try:
            page_size = PAGE_SIZES[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown page size `{name}`. Choices are: {list(PAGE_SIZES)}")
        return cls(page_size=page_size, **overrides)

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_bottom(self) -> float:
        """Distance from the top edge below which no line may extend."""
        return self.page_height - self.margin_bottom

    def leading(self, size: float) -> float:
        return size * self.leading_factor
