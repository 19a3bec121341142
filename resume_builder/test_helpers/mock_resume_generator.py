"""mock_resume_generator.py
Builds ResumeData objects and their JSON payloads for tests.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import copy

from resume_builder.models import ResumeData

DEFAULT_SECTION_ORDER = [
    "contact_info",
    "education",
    "experience",
    "projects",
    "skills",
    "custom_sections",
]

# -------------------------------------------------------------------------
# DUMMY RESUME BLOCKS (to construct resumes from)
# First example of each is the default used
# -------------------------------------------------------------------------
DUMMY_RESUME_BLOCKS = {
    "education": [
        {"school": "MIT", "degree": "BS CS", "location": "Cambridge, MA", "startDate": "2018", "endDate": "2022"},
        {"school": "San Diego State University", "degree": "M.S. Computer Science", "location": "", "startDate": "Feb 2016", "endDate": "Jun 2018"},
        {"school": "The Collegiate School", "degree": "High school diploma", "location": "Richmond, VA", "startDate": "", "endDate": ""},
    ],
    "experience": [
        {
            "title": "Software Engineer",
            "company": "{company_name}",
            "location": "Boston, MA",
            "startDate": "Jun 2022",
            "endDate": "Present",
            "responsibilities": [
                "Built X",
                "Shipped Y",
            ],
        },
        {
            "title": "Data Scientist",
            "company": "{company_name}",
            "location": "San Diego, CA",
            "startDate": "Mar 2021",
            "endDate": "",
            "responsibilities": [
                "Pioneered segmentation in Google Analytics 4, leading to 3 successful campaigns.",
            ],
        },
    ],
    "projects": [
        {
            "name": "Resume Builder",
            "technologies": "Python, FastAPI",
            "startDate": "2023",
            "endDate": "2024",
            "link": "https://resume.example.com",
            "githubLink": "https://github.com/example/resume-builder",
            "details": ["Generated PDF resumes from a web form."],
        },
        {
            "name": "h2oFiltration",
            "technologies": "",
            "startDate": "",
            "endDate": "",
            "link": "",
            "githubLink": "",
            "details": ["Designed a water filtration system."],
        },
    ],
    "custom_sections": [
        {
            "title": "Certifications",
            "items": [
                {"content": "AWS Certified Developer", "link": "https://aws.example.com/cert/123"},
                {"content": "Scrum Master", "link": ""},
            ],
        },
    ],
}


# -------------------------------------------------------------------------
# MockResumeGenerator INPUT DATA MODELS
# -------------------------------------------------------------------------
@dataclass
class ResumeValues:
    """
    Holds header field values that can be overridden when generating a
    mock resume.
    """
    name: str = "Jane Doe"
    email: str = "jane@x.com"
    phone: str = "123-456-7890"
    linkedin: str = "https://linkedin.com/in/janedoe"
    github: str = "https://github.com/janedoe"
    twitter: str = ""
    portfolio: str = "https://janedoe.dev"
    company_name: str = "Comcast"
    technical_skills: Dict[str, str] = field(default_factory=lambda: {
        "languages": "Python",
        "frameworks": "FastAPI",
        "developerTools": "Git, Docker",
        "libraries": "",
    })


@dataclass
class ResumeBlocks:
    """Section contents, each a list of camelCase entry dicts."""
    education: List[Dict[str, Any]] = field(default_factory=lambda: [DUMMY_RESUME_BLOCKS["education"][0]])
    experience: List[Dict[str, Any]] = field(default_factory=lambda: [DUMMY_RESUME_BLOCKS["experience"][0]])
    projects: List[Dict[str, Any]] = field(default_factory=lambda: [DUMMY_RESUME_BLOCKS["projects"][0]])
    custom_sections: List[Dict[str, Any]] = field(default_factory=lambda: [DUMMY_RESUME_BLOCKS["custom_sections"][0]])


# -------------------------------------------------------------------------
# Main generator class
# -------------------------------------------------------------------------
class MockResumeGenerator:
    """
    Generate realistic mock resume payloads for testing purposes.

    Attributes:
        values (ResumeValues): Header values for substitution.
        blocks (ResumeBlocks): Section entries.
        section_order (List[str]): Sections to include; any section not
            listed is emitted empty.
    """

    def __init__(
        self,
        values: Optional[ResumeValues] = None,
        blocks: Optional[ResumeBlocks] = None,
        section_order: Optional[List[str]] = None,
    ):
        self.values = values or ResumeValues()
        self.blocks = blocks or ResumeBlocks()
        self.section_order = DEFAULT_SECTION_ORDER if section_order is None else section_order

    def _fill(self, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Deep-copy entries and substitute `{company_name}` placeholders."""
        filled = copy.deepcopy(entries)
        for entry in filled:
            for key, value in entry.items():
                if isinstance(value, str) and "{company_name}" in value:
                    entry[key] = value.format(company_name=self.values.company_name)
        return filled

    def generate_payload(self) -> Dict[str, Any]:
        """Return the camelCase JSON body the form would submit."""
        v = self.values
        included = set(self.section_order)
        payload: Dict[str, Any] = {
            "name": v.name,
            "email": "", "phone": "",
            "linkedin": "", "github": "", "twitter": "", "portfolio": "",
            "education": [],
            "experience": [],
            "projects": [],
            "technicalSkills": {"languages": "", "frameworks": "", "developerTools": "", "libraries": ""},
            "customSections": [],
        }
        if "contact_info" in included:
            payload.update({
                "email": v.email, "phone": v.phone,
                "linkedin": v.linkedin, "github": v.github,
                "twitter": v.twitter, "portfolio": v.portfolio,
            })
        if "education" in included:
            payload["education"] = self._fill(self.blocks.education)
        if "experience" in included:
            payload["experience"] = self._fill(self.blocks.experience)
        if "projects" in included:
            payload["projects"] = self._fill(self.blocks.projects)
        if "skills" in included:
            payload["technicalSkills"] = dict(v.technical_skills)
        if "custom_sections" in included:
            payload["customSections"] = self._fill(self.blocks.custom_sections)
        return payload

    def generate(self) -> ResumeData:
        """Return the payload parsed into ResumeData."""
        return ResumeData.from_dict(self.generate_payload())

    def clone(
        self,
        values: Optional[ResumeValues] = None,
        blocks: Optional[ResumeBlocks] = None,
        section_order: Optional[List[str]] = None,
    ) -> "MockResumeGenerator":
        """Create a copy of this generator, optionally overriding specific attributes."""
        new_gen = copy.deepcopy(self)
        if values is not None:
            new_gen.values = values
        if blocks is not None:
            new_gen.blocks = blocks
        if section_order is not None:
            new_gen.section_order = section_order
        return new_gen
