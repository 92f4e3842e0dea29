"""API key settings powered by Pydantic BaseSettings."""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from locale_translate.errors import ConfigurationError


class ApiKeySettings(BaseSettings):
    """Provider API keys read from the environment or a .env file.

    Unrelated entries in a shared .env file are ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    anthropic_api_key: str | None = Field(
        default=None, validation_alias="ANTHROPIC_API_KEY"
    )

    def as_config_keys(self) -> dict[str, str | None]:
        """Return keys named after TranslationConfig fields."""
        return {
            "openai_api_key": self.openai_api_key,
            "gemini_api_key": self.gemini_api_key,
            "anthropic_api_key": self.anthropic_api_key,
        }


def get_api_key_settings() -> ApiKeySettings:
    """Get an API key settings instance.

    Raises:
        ConfigurationError: If the environment or .env file cannot be read
            into settings.
    """
    try:
        return ApiKeySettings()
    except ValidationError as e:
        reasons = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        msg = "Invalid API key settings in the environment or .env file"
        raise ConfigurationError(msg, reasons=reasons) from e
    except (SettingsError, UnicodeDecodeError) as e:
        msg = "Cannot read API key settings from the environment or .env file"
        raise ConfigurationError(msg, {"error": str(e)}, reasons=[str(e)]) from e
