"""Unit tests for the error hierarchy."""

import pytest

from locale_translate.errors import (
    ApiError,
    ConfigurationError,
    ErrorClass,
    FormatError,
    JsonFormatError,
    LocaleTranslateError,
    ProviderNotFoundError,
    RateLimitError,
    TranslationError,
    YamlFormatError,
)


class TestErrors:
    """Tests for error classes."""

    @pytest.mark.parametrize(
        ("error", "error_class"),
        [
            (ConfigurationError("x"), ErrorClass.CONFIGURATION),
            (ProviderNotFoundError("x"), ErrorClass.CONFIGURATION),
            (ApiError("x", 500), ErrorClass.API),
            (RateLimitError("x"), ErrorClass.RATE_LIMIT),
            (TranslationError("x"), ErrorClass.TRANSLATION),
            (YamlFormatError("x"), ErrorClass.FORMAT),
            (JsonFormatError("x"), ErrorClass.FORMAT),
        ],
    )
    def test_classification(
        self, error: LocaleTranslateError, error_class: ErrorClass
    ) -> None:
        """Each error reports its class."""
        assert error.error_class == error_class

    def test_rate_limit_is_retryable_api_error(self) -> None:
        """429 responses are always retryable."""
        error = RateLimitError("slow down")
        assert isinstance(error, ApiError)
        assert error.status_code == 429
        assert error.retryable

    def test_format_errors_share_base(self) -> None:
        """YAML and JSON errors can be caught together."""
        assert issubclass(YamlFormatError, FormatError)
        assert issubclass(JsonFormatError, FormatError)

    def test_configuration_reasons_default_to_message(self) -> None:
        """A bare configuration error has one reason."""
        assert ConfigurationError("bad").reasons == ["bad"]

    def test_original_error(self) -> None:
        """Wrapped causes are exposed."""
        cause = ApiError("boom", 503, retryable=True)
        error = TranslationError("failed", {"original_error": cause})
        assert error.original_error is cause
        not_an_error = TranslationError("failed", {"original_error": "text"})
        assert not_an_error.original_error is None

    def test_to_dict_stringifies_exceptions(self) -> None:
        """Exceptions in context serialize as text."""
        cause = ApiError("boom", 503)
        data = TranslationError("failed", {"original_error": cause, "n": 1}).to_dict()

        assert data == {
            "error_class": "TRANSLATION",
            "error_type": "TranslationError",
            "message": "failed",
            "context": {"original_error": "ApiError: boom", "n": 1},
        }
