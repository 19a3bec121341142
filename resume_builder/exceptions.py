"""exceptions.py
Defines custom exceptions for this project.
"""
from typing import Dict, Optional

# ------------------------ Validation Errors ------------------------
class ResumeValidationError(Exception):
    """
    Raised when submitted resume data fails the form-level checks that run
    before rendering.

    Attributes:
        errors (Dict[str, str]): Maps each offending field to a message.
    """
    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        fields = ", ".join(errors.keys())
        super().__init__(f"Resume data failed validation for field(s): {fields}")


# ------------------------ Render Errors ------------------------
class RenderError(Exception):
    """
    Raised when the layout engine cannot produce a document.

    Attributes:
        field_name (str | None): Name of the missing/invalid field, if any.
        message (str): Human-readable description of the error.
    """
    def __init__(self, field_name: str | None = None, message: str = "Failed to render resume"):
        self.field_name = field_name
        self.message = message
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.field_name:
            return f"{self.message}: {self.field_name}"
        return self.message


class MissingRequiredFieldError(RenderError):
    """Raised when a field the engine cannot render without is missing or blank."""
    def __init__(self, field_name: str):
        super().__init__(field_name=field_name, message="missing required field")


# ------------------------ Delivery Errors ------------------------
class DeliveryError(Exception):
    """Raised when a rendered artifact cannot be written or streamed to the caller."""
    def __init__(self, file_path: str, original_error: str):
        super().__init__(
            f"Failed to deliver rendered file: {file_path}. Original error: {original_error}"
        )
        self.file_path = file_path
        self.original_error = original_error


# ------------------------ Auth Errors ------------------------
class AuthError(Exception):
    """Base exception for bearer token errors."""
    pass

class MissingTokenError(AuthError):
    """Raised when a protected request carries no bearer token."""
    def __init__(self):
        super().__init__("No bearer token was provided with the request.")

class InvalidTokenError(AuthError):
    """Raised when a bearer token is malformed, badly signed or expired."""
    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        message = "Bearer token is invalid or expired."
        if reason:
            message += f" Reason: {reason}"
        super().__init__(message)

class AuthConfigError(AuthError):
    """Raised when the token signing secret is missing from the environment."""
    def __init__(self, variable_name: str = "JWT_SECRET"):
        self.variable_name = variable_name
        super().__init__(
            f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        )


# ------------------------ Account Errors ------------------------
class AccountError(Exception):
    """Base exception for account sign-up and login errors."""
    pass

class UserAlreadyExistsError(AccountError):
    """Raised when signing up with an email that is already registered."""
    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists.")

class UserNotFoundError(AccountError):
    """Raised when logging in with an email that is not registered."""
    def __init__(self, email: str):
        self.email = email
        super().__init__("User doesn't exist.")

class InvalidCredentialsError(AccountError):
    """Raised when the password does not match the stored hash."""
    def __init__(self):
        super().__init__("Invalid email or password.")


# ------------------------ Suggestion Errors ------------------------
class SuggestionError(Exception):
    """Base exception for AI content suggestion errors."""
    pass

class SuggestionRequestError(SuggestionError):
    """Raised when a suggestion request is malformed (unknown section, blank prompt)."""
    def __init__(self, message: str):
        super().__init__(message)

class UpstreamGenerationError(SuggestionError):
    """
    Raised when the text-generation backend fails.

    Attributes:
        section (str | None): Section the suggestion was requested for.
        original_exception (Exception | None): Underlying backend error.
    """
    def __init__(
        self,
        section: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.section = section
        self.original_exception = original_exception
        message = "Failed to generate suggestions"
        if section:
            message += f" for section `{section}`"
        if original_exception:
            message += f" | Original Exception: {original_exception}"
        super().__init__(message)


# ------------------------ LLM Querying Errors ------------------------
class LLMConfigError(Exception):
    """Raised when a required configuration (in .env by default) for LLMCLient to function
    is missing or invalid."""

    def __init__(
        self,
        variable_name: str,
        message: str = None,
        extra_info: str = None
    ):
        """
        Args:
            variable_name: Name of the config variable.
            message: Optional custom message for the error.
            extra_info: Additional information to append to the error message.
        """
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        if extra_info:
            message += f" | {extra_info}"
        super().__init__(message)
        self.variable_name = variable_name
        self.extra_info = extra_info

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"

class LLMError(Exception):
    """Base exception for all LLM-related errors."""
    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.model = model
        self.original_exception = original_exception

        base_msg = message
        if provider:
            base_msg += f" | Provider: {provider}"
        if model:
            base_msg += f" | Model: {model}"
        if original_exception:
            base_msg += f" | Original Exception: {original_exception}"

        super().__init__(base_msg)


class LLMInitializationError(LLMError):
    """Raised when the LLM client fails to initialize."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message="Failed to initialize LLM client",
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMQueryError(LLMError):
    """Raised when a query to the LLM fails."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Exception = None,
    ):
        message = "LLM query failed"
        if additional_message:
            message += f": {additional_message}"

        super().__init__(
            message=message,
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMEmptyResponse(LLMError):
    """Raised when the LLM returns an empty response."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ):
        super().__init__(
            message="LLM returned an empty response",
            provider=provider,
            model=model,
        )
