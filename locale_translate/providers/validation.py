"""Input validation for backend calls."""

import re

from locale_translate.errors import ValidationError


# Two letters, optionally followed by a region or script suffix (pt-BR, zh_TW)
LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}(?:[-_][a-z0-9]{2,4})?$", re.IGNORECASE)


def validate_text(text: object) -> str:
    """Validate text for translation.

    Args:
        text: Value to validate.

    Returns:
        The text unchanged.

    Raises:
        ValidationError: If text is not a non-blank string.
    """
    if text is None:
        msg = "Text cannot be None"
        raise ValidationError(msg)
    if not isinstance(text, str):
        msg = "Text must be a string"
        raise ValidationError(msg, {"type": type(text).__name__})
    if not text.strip():
        msg = "Text cannot be empty"
        raise ValidationError(msg)
    return text


def validate_language_code(code: object) -> str:
    """Validate a target language code.

    Args:
        code: Value to validate.

    Returns:
        The code unchanged.

    Raises:
        ValidationError: If code is not a well-formed language code.
    """
    if code is None:
        msg = "Language code cannot be None"
        raise ValidationError(msg)
    if not isinstance(code, str):
        msg = "Language code must be a string"
        raise ValidationError(msg, {"type": type(code).__name__})
    if not code:
        msg = "Language code cannot be empty"
        raise ValidationError(msg)
    if not LANGUAGE_CODE_PATTERN.match(code):
        msg = f"Language code must be 2 letters with an optional region: {code!r}"
        raise ValidationError(msg, {"language_code": code})
    return code


def is_valid_language_code(code: object) -> bool:
    """Check a language code without raising."""
    try:
        validate_language_code(code)
    except ValidationError:
        return False
    return True
