"""
llm_client.py

LangChain chat client used to generate resume content suggestions.
Only Anthropic (Claude) is wired up; providers are described in `PROVIDER_SETTINGS`.
"""
import json
import os
import re
import warnings
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from resume_builder.config import BUILDER_DEFAULTS
from resume_builder.exceptions import (
    LLMConfigError,
    LLMInitializationError,
    LLMQueryError,
    LLMEmptyResponse
)
from resume_builder.test_helpers.llm_client_test_helpers import (
    MockResponseType,
    create_mock_llm_response
)

load_dotenv()

PROVIDER_SETTINGS: Dict[str, Dict[str, str]] = {
    "anthropic": {
        "api_key_env": "ANTHROPIC_API_KEY",
        "default_model": BUILDER_DEFAULTS.ANTHROPIC_MODEL_ID,
    },
}
SUPPORTED_PROVIDERS = list(PROVIDER_SETTINGS)

PLACEHOLDER_API_KEY = "<REPLACE_ME>"

_CODE_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\n?")
_CODE_FENCE_CLOSE = re.compile(r"\n?```$")
_JSON_BODY = re.compile(r"(\{.*\}|\[.*\])", re.DOTALL)


class LLMClient:
    """
    Wrapper over a LangChain chat model for one suggestion feature.

    Call `initialize_client()` before `query()` unless running in test mode,
    where canned responses keyed by `function_name` are returned and no
    provider client or API key is needed.

    Attributes:
        provider (str): LLM provider name. Defaults to BUILDER_DEFAULTS.LLM_PROVIDER.
        model (str): Model identifier, from PROVIDER_SETTINGS when not given.
        api_key (Optional[str]): Provider API key read from the environment.
        function_name (Optional[str]): Feature using the client, e.g. `suggest_skills`.
        test_mode (bool): Return canned responses instead of calling the provider.
        test_response_type (MockResponseType): Which canned response to return.
        client (Any): The LangChain chat model, set by `initialize_client()`.

    Raises:
        LLMConfigError: Unsupported provider, or no API key outside test mode.
    """

    def __init__(
        self,
        provider: Optional[str] = BUILDER_DEFAULTS.LLM_PROVIDER,
        model: Optional[str] = None,
        function_name: Optional[str] = None,
        test_mode: Optional[bool] = False,
        test_response_type: MockResponseType = "success",
    ):
        if provider not in PROVIDER_SETTINGS:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                extra_info=f"Choices are: {SUPPORTED_PROVIDERS}"
            )

        self.provider = provider
        self.model = model or PROVIDER_SETTINGS[provider]["default_model"]
        self.function_name = function_name
        self.test_mode = test_mode
        self.test_response_type = test_response_type
        self.api_key = self._load_api_key()
        self.client: Any = None

    def _load_api_key(self) -> Optional[str]:
        """
        Read the provider API key from the environment. The key is not checked
        against the provider here.

        Raises:
            LLMConfigError: If the key is missing or a placeholder outside test mode.
        """
        env_name = PROVIDER_SETTINGS[self.provider]["api_key_env"]
        api_key = os.getenv(env_name)
        if (not api_key or api_key == PLACEHOLDER_API_KEY) and not self.test_mode:
            raise LLMConfigError(
                variable_name=env_name,
                message=(
                    f"Set a `{self.provider}` API key in your environment variables "
                    "to request content suggestions."
                )
            )
        return api_key

    def initialize_client(self) -> None:
        """
        Build the LangChain chat model. Makes no network call; a no-op in test mode.

        Raises:
            LLMInitializationError: If the chat model cannot be constructed.
        """
        if self.test_mode:
            return
        try:
            from langchain_anthropic import ChatAnthropic
            self.client = ChatAnthropic(
                model=self.model,
                anthropic_api_key=self.api_key,
                temperature=BUILDER_DEFAULTS.SUGGESTION_TEMPERATURE,
            )
        except Exception as e:
            raise LLMInitializationError(
                provider=self.provider,
                model=self.model,
                original_exception=e
            )

    # --- QUERY EXECUTION ---
    @staticmethod
    def _build_messages(system_prompt: Optional[str], user_prompt: str) -> List[BaseMessage]:
        messages: List[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=user_prompt))
        return messages

    def _invoke(self, messages: List[BaseMessage], temperature: float) -> AIMessage:
        if not self.test_mode:
            return self.client.invoke(messages, temperature=temperature)

        if not self.function_name:
            raise LLMQueryError(
                provider=self.provider,
                model=self.model,
                additional_message="Test mode needs a `function_name` to pick a canned response.",
            )
        return create_mock_llm_response(
            function_name=self.function_name,
            provider=self.provider,
            response_type=self.test_response_type,
        )

    def query(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: float = BUILDER_DEFAULTS.SUGGESTION_TEMPERATURE,
        expect_json: bool = False,
    ) -> Any:
        """
        Send one prompt to the model.

        Args:
            system_prompt (Optional[str]): Behavioral instructions; omitted if empty.
            user_prompt (str): The request itself.
            temperature (float): Sampling temperature (0.0-1.0).
            expect_json (bool): Parse the answer as JSON. If parsing fails a
                UserWarning is emitted and the text is returned unchanged.

        Returns:
            Any: Parsed JSON when `expect_json` and parsing succeeds, else the
                stripped response text.

        Raises:
            LLMInitializationError: If `initialize_client()` was never called.
            LLMQueryError: If the call fails or the model answers with nothing
                but whitespace.
        """
        if not self.client and not self.test_mode:
            raise LLMInitializationError(provider=self.provider, model=self.model)

        messages = self._build_messages(system_prompt, user_prompt)
        try:
            response = self._invoke(messages, temperature)
            if not response or not response.content or not response.content.strip():
                raise LLMEmptyResponse(provider=self.provider, model=self.model)

            content = response.content.strip()
            if expect_json:
                return self._parse_json_or_warn(content)
            return content

        except LLMQueryError:
            raise
        except Exception as e:
            raise LLMQueryError(provider=self.provider, model=self.model, original_exception=e)

    def _parse_json_or_warn(self, text: str) -> Any:
        try:
            return self._clean_llm_json_response(response_text=text)
        except json.JSONDecodeError as e:
            warnings.warn(
                (
                    f"Expected JSON from `{self.provider}` model `{self.model}` "
                    f"for `{self.function_name}`, returning raw text. Exception: `{e}`"
                ),
                category=UserWarning,
            )
            return text

    def _clean_llm_json_response(self, response_text: str) -> Any:
        """
        Parse JSON out of a model answer, tolerating Markdown code fences and
        chatter around the JSON body (first `{...}` or `[...]` block wins).

        Raises:
            json.JSONDecodeError: If no valid JSON can be extracted.
        """
        text = _CODE_FENCE_OPEN.sub("", response_text.strip())
        text = _CODE_FENCE_CLOSE.sub("", text)
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            match = _JSON_BODY.search(text)
            if not match:
                raise
            return json.loads(match.group(1))
