"""suggestion_service.py
Generates resume content suggestions (bullets or skill lists) from a prompt.
"""
from typing import Any, Callable, Dict, List, Literal, Optional

from resume_builder.exceptions import (
    LLMConfigError,
    LLMError,
    SuggestionRequestError,
    UpstreamGenerationError,
)
from resume_builder.logging import LoggerFactory
from resume_builder.suggestions.llm_client import LLMClient

SuggestionSection = Literal["experience", "projects", "skills"]
SUPPORTED_SECTIONS = ["experience", "projects", "skills"]

SKILL_CATEGORIES = ["languages", "frameworks", "developerTools", "libraries"]

SYSTEM_PROMPT = (
    "You are an assistant that writes concise, results-oriented resume content. "
    "Always answer with JSON only, no commentary."
)

SECTION_INSTRUCTIONS = {
    "experience": (
        "Write 3 to 5 resume bullet points for a work experience entry. "
        "Start each with a strong action verb and quantify impact where possible. "
        "Return a JSON array of strings."
    ),
    "projects": (
        "Write 2 to 4 resume bullet points describing a software project. "
        "Mention the technologies used and the outcome. "
        "Return a JSON array of strings."
    ),
    "skills": (
        "Suggest technical skills for a resume. Return a JSON object with the keys "
        "\"languages\", \"frameworks\", \"developerTools\" and \"libraries\", "
        "each a comma-separated string."
    ),
}

suggestion_logger = LoggerFactory().get_logger(
    name="suggestions",
    logger_type="suggestion",
)


def build_user_prompt(prompt: str, section: SuggestionSection, context: Optional[Dict[str, Any]] = None) -> str:
    """Embellish the user's prompt with section instructions and form context."""
    lines = [SECTION_INSTRUCTIONS[section], "", f"Request: {prompt.strip()}"]
    context_lines = [
        f"- {key}: {value}"
        for key, value in (context or {}).items()
        if value not in (None, "", [], {})
    ]
    if context_lines:
        lines += ["", "Context from the resume form:"] + context_lines
    return "\n".join(lines)


def _as_text(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v).strip() for v in value if str(v).strip())
    return "" if value is None else str(value).strip()


def normalize_bullets(result: Any) -> List[str] | str:
    """
    Coerce a model result into a list of bullet strings.
    Anything that does not look like bullets is returned as raw text.
    """
    if isinstance(result, dict):
        for key in ("bullets", "suggestions", "items", "data"):
            if key in result:
                result = result[key]
                break
    if isinstance(result, str):
        return result
    if isinstance(result, list):
        bullets = [str(item).strip() for item in result if str(item).strip()]
        return bullets
    return str(result)


def normalize_skills(result: Any) -> Dict[str, str] | str:
    """
    Coerce a model result into a category -> comma string map.
    Anything that is not an object is returned as raw text.
    """
    if not isinstance(result, dict):
        return result if isinstance(result, str) else _as_text(result)
    return {category: _as_text(result.get(category)) for category in SKILL_CATEGORIES}


class SuggestionService:
    """
    Turns a user prompt plus form context into suggested resume content.

    Args:
        client_factory (Optional[Callable[[str], LLMClient]]): Builds an
            initialized LLMClient for a given function name. Defaults to
            constructing LLMClient with provider defaults.

    Example:
        >>> service = SuggestionService()
        >>> service.suggest("front end developer at a startup", "experience")
        {'success': True, 'data': ['Developed responsive ...', ...]}
    """

    def __init__(self, client_factory: Optional[Callable[[str], LLMClient]] = None):
        self.client_factory = client_factory or self._default_client_factory

    @staticmethod
    def _default_client_factory(function_name: str) -> LLMClient:
        client = LLMClient(function_name=function_name)
        client.initialize_client()
        return client

    def suggest(
        self,
        prompt: str,
        section: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Generate suggestions for one form section.

        Returns:
            Dict[str, Any]: `{"success": True, "data": ...}` where data is a
                list of strings (experience/projects), a category map (skills),
                or the raw model text if it could not be parsed.

        Raises:
            SuggestionRequestError: Unknown section or blank prompt.
            UpstreamGenerationError: The text-generation backend failed.
        """
        if section not in SUPPORTED_SECTIONS:
            raise SuggestionRequestError(
                f"Unsupported section `{section}`. Choices are: {SUPPORTED_SECTIONS}"
            )
        if not prompt or not prompt.strip():
            raise SuggestionRequestError("Prompt must not be blank.")

        try:
            client = self.client_factory(f"suggest_{section}")
            result = client.query(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=build_user_prompt(prompt, section, context),
                expect_json=True,
            )
        except (LLMConfigError, LLMError) as e:
            suggestion_logger.error(f"Suggestion backend failed for `{section}`: {e}")
            raise UpstreamGenerationError(section=section, original_exception=e)

        data = normalize_skills(result) if section == "skills" else normalize_bullets(result)
        if isinstance(data, str):
            suggestion_logger.warning(f"Passing through unstructured suggestion output for `{section}`")
        return {"success": True, "data": data}
