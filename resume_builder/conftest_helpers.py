"""conftest_helpers.py
Helper functions for `tests/conftest.py`
"""

from resume_builder.suggestions.llm_client import LLMClient


# --------------------------------------------------------------
# SETUP MONKEYPATCH FIXTURES
# --------------------------------------------------------------
def apply_mock_llm_patch(monkeypatch, response_type: str = "success"):
    """
    Core patching logic for LLMClient.

    Forces every LLMClient created after the patch to use canned responses:
      - `test_mode=True` (no API key or network needed)
      - `test_response_type` set to `response_type` unless given explicitly

    Notes:
      - Intended to be called from a fixture to control scope.
      - Does not yield; directly applies the monkeypatch.
    """
    original_init = LLMClient.__init__

    def patched_init(self, *args, **kwargs):
        kwargs.setdefault("test_mode", True)
        kwargs.setdefault("test_response_type", response_type)
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(LLMClient, "__init__", patched_init)
