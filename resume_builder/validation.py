"""validation.py
Form-level checks run on submitted ResumeData before it reaches the layout engine.
"""
from typing import Dict

from resume_builder.exceptions import ResumeValidationError
from resume_builder.models import ResumeData

REQUIRED_MESSAGE = "This field is required"


def collect_validation_errors(data: ResumeData) -> Dict[str, str]:
    """
    Return a field -> message map of every failed check. Empty when valid.

    Checks:
        - `name` and `email` are non-blank.
        - The first education entry has both a school and a degree.
        - `technicalSkills.languages` is non-blank.
    """
    errors: Dict[str, str] = {}

    if not data.name.strip():
        errors["name"] = REQUIRED_MESSAGE
    if not data.email.strip():
        errors["email"] = REQUIRED_MESSAGE

    first_education = data.education[0] if data.education else None
    if (
        first_education is None
        or not first_education.school.strip()
        or not first_education.degree.strip()
    ):
        errors["education"] = "At least one education entry is required"

    if not data.technical_skills.languages.strip():
        errors["technicalSkills"] = "At least one language is required"

    return errors


def validate_resume_data(data: ResumeData) -> ResumeData:
    """
    Raise ResumeValidationError if `data` fails any form-level check.

    Returns:
        ResumeData: The same object, for chaining.

    Raises:
        ResumeValidationError: Carries the full field -> message map.
    """
    errors = collect_validation_errors(data)
    if errors:
        raise ResumeValidationError(errors)
    return data
