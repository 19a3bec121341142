"""test_suggestion_service.py
Test SuggestionService and its result normalization.
"""
import pytest
from unittest.mock import MagicMock

from resume_builder.conftest_helpers import apply_mock_llm_patch
from resume_builder.exceptions import (
    LLMConfigError,
    SuggestionRequestError,
    UpstreamGenerationError,
)
from resume_builder.suggestions.llm_client import LLMClient
from resume_builder.suggestions.suggestion_service import (
    SuggestionService,
    build_user_prompt,
    normalize_bullets,
    normalize_skills,
)
from resume_builder.test_helpers.llm_client_test_helpers import expected_test_responses


# ----------------------
# Prompt building
# ----------------------
class TestBuildUserPrompt:
    def test_includes_request_and_instructions(self):
        prompt = build_user_prompt("  front end developer  ", "experience")
        assert "Request: front end developer" in prompt
        assert "bullet points" in prompt
        assert "Context from the resume form" not in prompt

    def test_includes_non_empty_context_only(self):
        prompt = build_user_prompt(
            "data pipeline",
            "projects",
            context={"name": "ETL Tool", "technologies": "", "details": []},
        )
        assert "Context from the resume form:" in prompt
        assert "- name: ETL Tool" in prompt
        assert "technologies" not in prompt


# ----------------------
# Normalization
# ----------------------
class TestNormalize:
    def test_bullets_from_list(self):
        assert normalize_bullets([" Built X ", "", "Shipped Y"]) == ["Built X", "Shipped Y"]

    def test_bullets_unwrapped_from_object(self):
        assert normalize_bullets({"bullets": ["Built X"]}) == ["Built X"]

    def test_bullets_raw_text_passthrough(self):
        assert normalize_bullets("just some text") == "just some text"

    def test_skills_lists_are_joined(self):
        result = normalize_skills({"languages": ["Python", "Go"], "frameworks": "FastAPI"})
        assert result == {
            "languages": "Python, Go",
            "frameworks": "FastAPI",
            "developerTools": "",
            "libraries": "",
        }

    def test_skills_non_object_becomes_text(self):
        assert normalize_skills(["Python", "Docker"]) == "Python, Docker"
        assert normalize_skills("Python, Docker") == "Python, Docker"


# ----------------------
# Service with canned LLM responses
# ----------------------
@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestSuggestionServiceMocked:
    """Runs the real LLMClient in test mode."""

    def test_experience_success(self):
        result = SuggestionService().suggest("front end developer at a startup", "experience")
        assert result == {
            "success": True,
            "data": expected_test_responses["suggest_experience"]["success"],
        }

    def test_skills_success_normalized(self):
        result = SuggestionService().suggest("backend python developer", "skills")
        assert result["data"] == {
            "languages": "Python, TypeScript, SQL",
            "frameworks": "FastAPI, React",
            "developerTools": "Git, Docker",
            "libraries": "pandas, NumPy",
        }

    @pytest.mark.parametrize("section", ["education", "", "SKILLS"])
    def test_unsupported_section(self, section):
        with pytest.raises(SuggestionRequestError):
            SuggestionService().suggest("anything", section)

    @pytest.mark.parametrize("prompt", ["", "   ", None])
    def test_blank_prompt(self, prompt):
        with pytest.raises(SuggestionRequestError):
            SuggestionService().suggest(prompt, "experience")


@pytest.mark.parametrize("section,response_type,expected", [
    ("experience", "fenced", ["Led migration of 4 services to Kubernetes.", "Cut CI time by 30%."]),
    ("experience", "unexpected_json", ["Mentored 3 junior engineers through weekly code reviews."]),
    ("projects", "unexpected_json", "Wrote a CLI tool in Go."),
    ("skills", "fenced", {"languages": "Go, Rust", "frameworks": "", "developerTools": "", "libraries": ""}),
    ("skills", "unexpected_json", "Python, Docker"),
])
def test_suggest_response_shapes(monkeypatch, section, response_type, expected):
    """Non-ideal model output is normalized or passed through as text."""
    apply_mock_llm_patch(monkeypatch, response_type=response_type)
    result = SuggestionService().suggest("prompt", section)
    assert result == {"success": True, "data": expected}


def test_suggest_not_json_is_passed_through(monkeypatch):
    apply_mock_llm_patch(monkeypatch, response_type="not_json")
    with pytest.warns(UserWarning):
        result = SuggestionService().suggest("prompt", "skills")
    assert result == {"success": True, "data": "Python, Docker, Git"}


def test_empty_response_is_upstream_error(monkeypatch):
    apply_mock_llm_patch(monkeypatch, response_type="empty")
    with pytest.raises(UpstreamGenerationError) as exc_info:
        SuggestionService().suggest("prompt", "projects")
    assert exc_info.value.section == "projects"


def test_missing_configuration_is_upstream_error(monkeypatch):
    """Without test mode or an API key the client cannot be built."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(UpstreamGenerationError) as exc_info:
        SuggestionService().suggest("prompt", "experience")
    assert isinstance(exc_info.value.original_exception, LLMConfigError)


def test_custom_client_factory_receives_function_name():
    client = MagicMock(spec=LLMClient)
    client.query.return_value = ["Built X"]
    factory = MagicMock(return_value=client)

    result = SuggestionService(client_factory=factory).suggest(
        "prompt", "projects", context={"name": "Resume Builder"}
    )

    factory.assert_called_once_with("suggest_projects")
    assert client.query.call_args.kwargs["expect_json"] is True
    assert "Resume Builder" in client.query.call_args.kwargs["user_prompt"]
    assert result == {"success": True, "data": ["Built X"]}
