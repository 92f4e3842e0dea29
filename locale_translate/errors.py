"""Error types for locale translation.

Every error carries a structured ``context`` mapping so that failures can
be logged and reported without string parsing.
"""

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Classification of translation errors.

    - CONFIGURATION: invalid or missing settings, raised before dispatch
    - VALIDATION: malformed input to a backend call
    - API: non-2xx backend response or transport failure
    - RATE_LIMIT: backend answered 429
    - TRANSLATION: terminal failure after retries or unparseable response
    - FILE: locale file missing or unwritable
    - FORMAT: locale file content is malformed
    """

    CONFIGURATION = "CONFIGURATION"
    VALIDATION = "VALIDATION"
    API = "API"
    RATE_LIMIT = "RATE_LIMIT"
    TRANSLATION = "TRANSLATION"
    FILE = "FILE"
    FORMAT = "FORMAT"


class LocaleTranslateError(Exception):
    """Base exception for all locale translation errors."""

    error_class: ErrorClass = ErrorClass.TRANSLATION

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            context: Additional structured details about the failure.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "error_type": type(self).__name__,
            "message": self.message,
            "context": {key: _stringify(value) for key, value in self.context.items()},
        }


class ConfigurationError(LocaleTranslateError):
    """Raised when configuration is invalid or incomplete.

    Attributes:
        reasons: Every validation failure found, in discovery order.
    """

    error_class = ErrorClass.CONFIGURATION

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        reasons: list[str] | None = None,
    ) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error message.
            context: Additional structured details.
            reasons: Individual validation failures.
        """
        super().__init__(message, context)
        self.reasons = reasons or [message]


class ProviderNotFoundError(ConfigurationError):
    """Raised when a provider identifier has no registered backend."""


class ValidationError(LocaleTranslateError):
    """Raised when input to a backend call is malformed."""

    error_class = ErrorClass.VALIDATION


class ApiError(LocaleTranslateError):
    """Backend call failure.

    Attributes:
        status_code: HTTP status code, 0 for transport-level failures.
        retryable: Whether another attempt may succeed.
    """

    error_class = ErrorClass.API

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        context: dict[str, Any] | None = None,
        *,
        retryable: bool = False,
    ) -> None:
        """Initialize the API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the response.
            context: Additional structured details.
            retryable: Whether the failure is transient.
        """
        super().__init__(message, context)
        self.status_code = status_code
        self.retryable = retryable


class RateLimitError(ApiError):
    """Backend answered 429 Too Many Requests. Always retryable."""

    error_class = ErrorClass.RATE_LIMIT

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the rate limit error.

        Args:
            message: Human-readable error message.
            context: Additional structured details.
        """
        super().__init__(message, status_code=429, context=context, retryable=True)


class TranslationError(LocaleTranslateError):
    """Terminal translation failure, wrapping the underlying cause."""

    error_class = ErrorClass.TRANSLATION

    @property
    def original_error(self) -> BaseException | None:
        """Get the wrapped error, if any."""
        original = self.context.get("original_error")
        return original if isinstance(original, BaseException) else None


class FileError(LocaleTranslateError):
    """Locale file is missing, unreadable or unwritable."""

    error_class = ErrorClass.FILE


class FormatError(LocaleTranslateError):
    """Locale file content could not be parsed."""

    error_class = ErrorClass.FORMAT


class YamlFormatError(FormatError):
    """YAML locale file has invalid syntax or shape."""


class JsonFormatError(FormatError):
    """JSON locale file has invalid syntax or shape."""


def _stringify(value: Any) -> Any:
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return value
