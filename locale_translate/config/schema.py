"""Translation run configuration schema."""

from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from locale_translate.errors import ConfigurationError, ProviderNotFoundError
from locale_translate.providers.factory import resolve_provider_name
from locale_translate.providers.validation import is_valid_language_code


class TranslationMode(str, Enum):
    """How translated keys are reconciled with an existing target file.

    - OVERRIDE: the target file is replaced by the fresh translation
    - INCREMENTAL: existing target values win; only new keys are added
    """

    OVERRIDE = "override"
    INCREMENTAL = "incremental"


class OutputFormat(str, Enum):
    """Locale file format written for each target language."""

    YAML = "yml"
    JSON = "json"


class TargetLanguage(BaseModel):
    """A language to translate into.

    Attributes:
        code: Language code, also the output file stem and root key.
        name: Display name used in prompts and progress output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    code: Annotated[
        str,
        Field(min_length=2, validation_alias=AliasChoices("code", "short_name")),
    ]
    name: Annotated[str, Field(min_length=1)]

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        """Validate the language code format."""
        if not is_valid_language_code(v):
            msg = f"Invalid language code: {v!r} (expected e.g. 'fr', 'pt-BR')"
            raise ValueError(msg)
        return v


class TranslationConfig(BaseModel):
    """Immutable settings for a translation run.

    Field constraints reject malformed values at construction. Cross-field
    requirements (an API key for the chosen provider, an existing input
    file) are checked by ``validate()`` so that every problem is reported
    at once.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: Annotated[str, Field(min_length=1)] = "openai"
    openai_api_key: Annotated[str | None, Field(repr=False)] = None
    gemini_api_key: Annotated[str | None, Field(repr=False)] = None
    anthropic_api_key: Annotated[str | None, Field(repr=False)] = None
    model: str | None = None

    source_language: Annotated[str, Field(min_length=2)] = "en"
    target_languages: list[TargetLanguage] = Field(default_factory=list)
    input_file: Path | None = None
    output_folder: Path | None = None
    output_format: OutputFormat | None = None

    translation_mode: TranslationMode = TranslationMode.OVERRIDE
    translation_context: str | None = None
    prune_removed_keys: bool = False
    preserve_variables: bool = True

    max_concurrent_requests: Annotated[int, Field(ge=1, le=64)] = 3
    request_timeout: Annotated[float, Field(gt=0)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0)] = 10.0
    max_retries: Annotated[int, Field(ge=1, le=20)] = 3
    retry_delay: Annotated[float, Field(ge=0)] = 2.0
    rate_limit_delay: Annotated[float, Field(ge=0)] = 0.5

    cache_enabled: bool = True
    cache_size: Annotated[int, Field(gt=0)] = 1000
    cache_ttl: Annotated[float, Field(gt=0)] | None = None

    batch_size: Annotated[int, Field(ge=1, le=200)] = 10
    strategy_threshold: Annotated[int, Field(ge=1)] = 50

    global_exclusions: list[str] = Field(default_factory=list)
    exclusions_per_language: dict[str, list[str]] = Field(default_factory=dict)

    verbose: bool = False
    dry_run: bool = False
    create_backup: bool = True
    max_backups: Annotated[int, Field(ge=1, le=100)] = 3

    @field_validator("source_language")
    @classmethod
    def validate_source_language(cls, v: str) -> str:
        """Validate the source language code format."""
        if not is_valid_language_code(v):
            msg = f"Invalid language code: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Normalize the provider identifier to lowercase."""
        return v.strip().lower()

    @model_validator(mode="after")
    def validate_unique_targets(self) -> "TranslationConfig":
        """Ensure target language codes are unique."""
        codes = [lang.code for lang in self.target_languages]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            msg = f"Duplicate target language codes: {duplicates}"
            raise ValueError(msg)
        return self

    def api_key_for_provider(self) -> str | None:
        """Return the API key for the configured provider.

        Returns:
            The key, or None when unset or the provider is unknown.
        """
        keys = {
            "openai": self.openai_api_key,
            "gemini": self.gemini_api_key,
            "anthropic": self.anthropic_api_key,
        }
        try:
            return keys.get(resolve_provider_name(self.provider))
        except ProviderNotFoundError:
            return None

    def resolved_output_format(self) -> OutputFormat:
        """Return the output format, inferred from the input file if unset."""
        if self.output_format is not None:
            return self.output_format
        if self.input_file is not None and self.input_file.suffix.lower() == ".json":
            return OutputFormat.JSON
        return OutputFormat.YAML

    def validation_errors(self, *, check_files: bool = True) -> list[str]:
        """Collect every cross-field configuration problem.

        Args:
            check_files: Whether to require the input file on disk.

        Returns:
            Human-readable reasons, empty when the configuration is usable.
        """
        reasons: list[str] = []

        provider: str | None
        try:
            provider = resolve_provider_name(self.provider)
        except ProviderNotFoundError as exc:
            provider = None
            reasons.append(exc.message)

        api_key = (self.api_key_for_provider() or "").strip()
        if provider in _API_KEY_LABELS and not api_key:
            reasons.append(f"{_API_KEY_LABELS[provider]} API key is required")

        if not self.target_languages:
            reasons.append("At least one target language is required")
        elif any(lang.code == self.source_language for lang in self.target_languages):
            reasons.append(
                f"Source language {self.source_language!r} is also a target language"
            )

        if self.input_file is None:
            reasons.append("Input file must be set")
        elif check_files and not self.input_file.is_file():
            reasons.append(f"Input file does not exist: {self.input_file}")

        if self.output_folder is None:
            reasons.append("Output folder must be set")

        for code in self.exclusions_per_language:
            if not is_valid_language_code(code):
                reasons.append(f"Invalid language code in exclusions: {code!r}")

        return reasons

    def validate(self, *, check_files: bool = True) -> None:  # type: ignore[override]
        """Validate cross-field requirements.

        Args:
            check_files: Whether to require the input file on disk.

        Raises:
            ConfigurationError: Listing every problem found.
        """
        reasons = self.validation_errors(check_files=check_files)
        if reasons:
            msg = f"Invalid configuration: {len(reasons)} problem(s)"
            raise ConfigurationError(msg, {"reasons": reasons}, reasons=reasons)

    def with_api_keys(self, **keys: str | None) -> "TranslationConfig":
        """Return a copy with unset API keys filled in.

        Args:
            **keys: Candidate values keyed by field name.

        Returns:
            New configuration; keys already set are left untouched.
        """
        update = {
            field: value
            for field, value in keys.items()
            if value and getattr(self, field) is None
        }
        return self.model_copy(update=update) if update else self

    def target_codes(self) -> list[str]:
        """Return target language codes in configured order."""
        return [lang.code for lang in self.target_languages]


_API_KEY_LABELS = {
    "openai": "OpenAI",
    "gemini": "Google Gemini",
    "anthropic": "Anthropic",
}
