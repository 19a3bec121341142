"""test_validation.py
Test the form-level checks run before rendering.
"""
import pytest

from resume_builder.exceptions import ResumeValidationError
from resume_builder.models import ResumeData
from resume_builder.validation import collect_validation_errors, validate_resume_data


class TestCollectValidationErrors:
    def test_valid_resume_has_no_errors(self, scenario_a_payload):
        assert collect_validation_errors(ResumeData.from_dict(scenario_a_payload)) == {}

    def test_blank_form_reports_every_field(self):
        errors = collect_validation_errors(ResumeData.new_blank())
        assert set(errors) == {"name", "email", "education", "technicalSkills"}
        assert errors["name"] == "This field is required"

    def test_whitespace_name_is_blank(self, scenario_a_payload):
        scenario_a_payload["name"] = "   "
        assert set(collect_validation_errors(ResumeData.from_dict(scenario_a_payload))) == {"name"}

    @pytest.mark.parametrize("education", [
        [],
        [{"school": "MIT", "degree": ""}],
        [{"school": "", "degree": "BS CS"}],
        [{"school": "", "degree": ""}, {"school": "MIT", "degree": "BS CS"}],
    ])
    def test_first_education_needs_school_and_degree(self, scenario_a_payload, education):
        scenario_a_payload["education"] = education
        errors = collect_validation_errors(ResumeData.from_dict(scenario_a_payload))
        assert set(errors) == {"education"}

    def test_languages_required(self, scenario_a_payload):
        scenario_a_payload["technicalSkills"]["languages"] = " "
        scenario_a_payload["technicalSkills"]["frameworks"] = "React"
        errors = collect_validation_errors(ResumeData.from_dict(scenario_a_payload))
        assert errors == {"technicalSkills": "At least one language is required"}


class TestValidateResumeData:
    def test_returns_data_when_valid(self, scenario_a_payload):
        data = ResumeData.from_dict(scenario_a_payload)
        assert validate_resume_data(data) is data

    def test_raises_with_error_map(self):
        with pytest.raises(ResumeValidationError) as exc_info:
            validate_resume_data(ResumeData(name="Jane Doe"))
        assert set(exc_info.value.errors) == {"email", "education", "technicalSkills"}
        assert "email" in str(exc_info.value)
