"""User-facing hints for configuration validation errors."""

from typing import Final


ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown setting. Check the spelling against the documented keys.",
    "enum": "Check the allowed values in the documentation.",
    "int_type": "This field must be an integer (whole number).",
    "int_parsing": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "bool_type": "This field must be true or false.",
    "bool_parsing": "This field must be true or false.",
    "list_type": "This field must be a list/array.",
    "dict_type": "This field must be an object/mapping.",
    "greater_than": "The value must be positive.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_too_short": "The text is too short. Check minimum length requirement.",
    "value_error": "Check the value format.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
    "file_unreadable": "Check that the path is a readable file, not a directory.",
    "encoding_error": "Save the configuration file as UTF-8.",
    "env_settings": "Check the API key variables in the environment and .env file.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "provider": "Must be one of: openai (alias chatgpt), gemini, anthropic (alias claude).",
    "code": "Use a two-letter code with an optional region, e.g. 'fr', 'pt-BR', 'zh_TW'.",
    "short_name": "Use a two-letter code with an optional region, e.g. 'fr', 'pt-BR', 'zh_TW'.",
    "source_language": "Use a two-letter code with an optional region, e.g. 'en'.",
    "translation_mode": "Must be 'override' or 'incremental'.",
    "output_format": "Must be 'yml' or 'json'.",
    "max_concurrent_requests": "Must be between 1 and 64.",
    "max_retries": "Total attempts per request, between 1 and 20.",
    "batch_size": "Must be between 1 and 200.",
}

_DEFAULT_HINT = "Check the configuration documentation for valid values."


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'enum').
        field_name: Optional dotted field location for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]
    return ERROR_HINTS.get(error_type, _DEFAULT_HINT)


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'target_languages.0.code').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        return f"{base}\n    Hint: {get_error_hint(error_type, location)}"
    return base
