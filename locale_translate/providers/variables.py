"""Protection of interpolation variables across translation.

LLM backends tend to translate or reformat placeholders such as
``%{count}``. Variables are swapped for opaque tokens before the call and
restored afterwards.
"""

import re

from locale_translate.errors import ValidationError


VARIABLE_PATTERNS: dict[str, str] = {
    "rails_template": r"%\{[^}]+\}",  # %{name}
    "rails_annotated": r"%<[^>]+>(?i:[a-z])",  # %<count>d
    "i18n_js": r"\{\{[^}]+\}\}",  # {{user}}
    "es6": r"\$\{[^}]+\}",  # ${var}
    "simple": r"\{[a-zA-Z_][a-zA-Z0-9_]*\}",  # {name}, not {1,2}
}

COMBINED_PATTERN = re.compile("|".join(VARIABLE_PATTERNS.values()))

PLACEHOLDER_PREFIX = "__VAR_"
PLACEHOLDER_SUFFIX = "__"


class VariableExtractor:
    """Replaces interpolation variables with placeholders and back.

    Attributes:
        original_text: Text the variables were extracted from.
        variables: Variables in order of appearance.
        placeholder_map: Placeholder token to original variable.
    """

    def __init__(self, text: str) -> None:
        """Initialize the extractor.

        Args:
            text: Source text that may contain variables.
        """
        self.original_text = text
        self.variables: list[str] = []
        self.placeholder_map: dict[str, str] = {}

    def extract(self) -> str:
        """Swap every variable for a numbered placeholder.

        Returns:
            Text safe to send to a backend.
        """
        self.variables = []
        self.placeholder_map = {}

        def _replace(match: re.Match[str]) -> str:
            index = len(self.variables)
            placeholder = f"{PLACEHOLDER_PREFIX}{index}{PLACEHOLDER_SUFFIX}"
            self.variables.append(match.group(0))
            self.placeholder_map[placeholder] = match.group(0)
            return placeholder

        return COMBINED_PATTERN.sub(_replace, self.original_text)

    def restore(self, translated_text: str, *, strict: bool = True) -> str:
        """Put the original variables back into a translation.

        Args:
            translated_text: Backend output containing placeholders.
            strict: Whether to verify the variable set afterwards.

        Returns:
            Translation with variables restored.

        Raises:
            ValidationError: In strict mode, if variables went missing or
                unexpected ones appeared.
        """
        result = translated_text
        for placeholder, variable in self.placeholder_map.items():
            result = result.replace(placeholder, variable)

        if strict:
            self.validate_variables(result)
        return result

    @property
    def has_variables(self) -> bool:
        """Check whether extraction found any variables."""
        return bool(self.variables)

    def validate_variables(self, text: str) -> None:
        """Check that text carries exactly the extracted variables.

        Raises:
            ValidationError: If variables are missing or unexpected.
        """
        missing = [var for var in self.variables if var not in text]
        extra = [var for var in find_variables(text) if var not in self.variables]
        if not missing and not extra:
            return

        problems: list[str] = []
        if missing:
            problems.append(f"Missing variables: {', '.join(missing)}")
        if extra:
            problems.append(f"Unexpected variables: {', '.join(extra)}")
        msg = f"Variable validation failed: {'; '.join(problems)}"
        raise ValidationError(
            msg,
            {
                "original_variables": list(self.variables),
                "missing": missing,
                "extra": extra,
                "text": text,
            },
        )


def find_variables(text: str) -> list[str]:
    """List every interpolation variable in text."""
    if not text:
        return []
    return COMBINED_PATTERN.findall(text)


def contains_variables(text: str) -> bool:
    """Check whether text contains any interpolation variable."""
    return bool(text) and COMBINED_PATTERN.search(text) is not None
