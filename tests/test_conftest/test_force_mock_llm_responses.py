"""test_force_mock_llm_responses.py
Confirm FORCE_MOCK_LLM_RESPONSES and USE_MOCK_LLM_RESPONSE_SETTING
apply correctly depending on scope and LLM_TEST_MODE.
"""

import pytest

from resume_builder.conftest_helpers import apply_mock_llm_patch
from resume_builder.suggestions.llm_client import LLMClient


# ---------------------------------------------------------------------------
# Confirm default behavior without fixture
# ---------------------------------------------------------------------------
def test_llm_client_unpatched_by_default(monkeypatch):
    """LLMClient should not be in test mode unless a fixture is applied."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test-key")
    client = LLMClient(function_name="suggest_experience")
    assert client.test_mode is False


# ---------------------------------------------------------------------------
# Class-level fixture tests
# ---------------------------------------------------------------------------
@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestForceMockClassLevel:
    """Verify FORCE_MOCK_LLM_RESPONSES applies at the class level."""

    def test_client_patched(self):
        client = LLMClient(function_name="suggest_skills")
        assert client.test_mode is True, (
            "Class-level patch failed: LLMClient did not get test_mode=True"
        )
        assert client.test_response_type == "success"


# ---------------------------------------------------------------------------
# Function-level fixture test
# ---------------------------------------------------------------------------
def test_function_level_patch(FORCE_MOCK_LLM_RESPONSES):
    client = LLMClient(function_name="suggest_projects")
    assert client.test_mode is True, (
        "Function-level patch failed: LLMClient did not get test_mode=True"
    )


def test_explicit_arguments_win_over_patch(FORCE_MOCK_LLM_RESPONSES):
    client = LLMClient(function_name="suggest_projects", test_response_type="empty")
    assert client.test_response_type == "empty"


def test_patch_response_type(monkeypatch):
    apply_mock_llm_patch(monkeypatch, response_type="not_json")
    client = LLMClient(function_name="suggest_skills")
    assert client.test_mode is True
    assert client.test_response_type == "not_json"


# ---------------------------------------------------------------------------
# Conditional patch tests (simulate LLM_TEST_MODE)
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("mode,expected", [
    ("mock_only", True),
    ("full", False),
])
def test_use_mock_llm_response_setting(monkeypatch, mode, expected):
    """
    Confirm that the patch from USE_MOCK_LLM_RESPONSE_SETTING is applied unless
    LLM_TEST_MODE=='full'.

    The real LLM_TEST_MODE fixture reads the command line, so the fixture's
    branch is reproduced here for each mode.
    """
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test-key")
    if mode != "full":
        apply_mock_llm_patch(monkeypatch)

    client = LLMClient(function_name="suggest_experience")
    assert client.test_mode is expected


def test_use_mock_setting_fixture_default(USE_MOCK_LLM_RESPONSE_SETTING, LLM_TEST_MODE):
    """With the default `--llm-mode`, clients are forced into test mode."""
    if LLM_TEST_MODE == "full":
        pytest.skip("Only meaningful in mock_only mode")
    client = LLMClient(function_name="suggest_experience")
    assert client.test_mode is True
