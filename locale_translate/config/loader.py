"""Configuration loader with validation and state machine."""

import hashlib
import json
import time
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from locale_translate.config.error_hints import format_validation_error
from locale_translate.config.schema import TranslationConfig
from locale_translate.config.settings import ApiKeySettings, get_api_key_settings
from locale_translate.config.state_machine import ConfigState, ConfigStateMachine
from locale_translate.errors import ConfigurationError


logger = structlog.get_logger()


class ConfigLoader:
    """Loads and validates a translation configuration file.

    Each load walks the stages of ConfigStateMachine:
    UNLOADED -> READING -> PARSED -> VALIDATED -> KEYS_RESOLVED -> READY

    Every failure, whatever the stage, surfaces as ConfigurationError and
    leaves the loader in FAILED with the failing stage recorded.
    """

    def __init__(
        self,
        run_id: str | None = None,
        settings: ApiKeySettings | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            run_id: Optional run identifier for log correlation.
            settings: API key source; read from the environment when omitted.
        """
        self._run_id = run_id
        self._settings = settings
        self._state_machine = ConfigStateMachine(run_id)
        self._file_checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def failed_stage(self) -> ConfigState | None:
        """Get the stage at which loading failed, if it did."""
        return self._state_machine.failed_stage

    @property
    def file_checksum(self) -> str | None:
        """Get the SHA-256 checksum of the loaded file."""
        return self._file_checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    def load(
        self,
        config_path: Path,
        overrides: dict[str, Any] | None = None,
        *,
        check_files: bool = True,
    ) -> TranslationConfig:
        """Load and validate a configuration file.

        Args:
            config_path: Path to the YAML configuration.
            overrides: Values that replace file settings (e.g. CLI flags).
            check_files: Whether the input file must exist.

        Returns:
            Validated, immutable TranslationConfig.

        Raises:
            ConfigurationError: If the file is missing, unreadable, malformed
                or invalid, or the API key settings cannot be read.
            ConfigStateError: If the loader was already used.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.READING)
        config_path = Path(config_path)
        log = logger.bind(
            run_id=self._run_id, component="config", file_path=str(config_path)
        )
        log.info("loading_config_file", stage=self.state.value)

        data = self._read_mapping(config_path, log)
        data.update(overrides or {})
        self._state_machine.transition(ConfigState.PARSED)

        config = self._validate_schema(config_path, data, log)
        self._state_machine.transition(ConfigState.VALIDATED)
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "config_validation_complete",
            stage=self.state.value,
            file_sha256=self._file_checksum,
            config_validation_duration_ms=self._validation_duration_ms,
        )

        config = self._resolve_api_keys(config, log)
        self._state_machine.transition(ConfigState.KEYS_RESOLVED)

        try:
            config.validate(check_files=check_files)
        except ConfigurationError as e:
            self._validation_errors.extend(
                {"loc": "config", "msg": reason, "type": "value_error"}
                for reason in e.reasons
            )
            log.error("config_invalid", stage=self.state.value, reasons=e.reasons)
            self._state_machine.fail()
            raise

        self._state_machine.transition(ConfigState.READY)
        log.info(
            "config_ready",
            stage=self.state.value,
            provider=config.provider,
            target_languages=config.target_codes(),
        )
        return config

    def _read_mapping(
        self, config_path: Path, log: structlog.stdlib.BoundLogger
    ) -> dict[str, Any]:
        """Read, decode and parse the file into a top-level mapping."""
        try:
            content_bytes = config_path.read_bytes()
        except FileNotFoundError as e:
            self._fail("file", str(e), "file_not_found", log)
            msg = f"Configuration file not found: {config_path}"
            raise self._error(msg, config_path) from e
        except OSError as e:
            self._fail("file", str(e), "file_unreadable", log)
            msg = f"Cannot read configuration file: {config_path}"
            raise self._error(msg, config_path) from e

        self._file_checksum = hashlib.sha256(content_bytes).hexdigest()

        try:
            data = yaml.safe_load(content_bytes.decode("utf-8")) or {}
        except UnicodeDecodeError as e:
            self._fail("file", str(e), "encoding_error", log)
            msg = f"Configuration file is not valid UTF-8: {config_path}"
            raise self._error(msg, config_path) from e
        except yaml.YAMLError as e:
            self._fail("yaml", str(e), "yaml_parse_error", log)
            msg = f"Invalid YAML in configuration file: {config_path}"
            raise self._error(msg, config_path) from e

        if not isinstance(data, dict):
            self._fail("file", "Top level must be a mapping", "dict_type", log)
            msg = f"Configuration file must contain a mapping: {config_path}"
            raise self._error(msg, config_path)
        return data

    def _validate_schema(
        self,
        config_path: Path,
        data: dict[str, Any],
        log: structlog.stdlib.BoundLogger,
    ) -> TranslationConfig:
        try:
            return TranslationConfig.model_validate(data)
        except ValidationError as e:
            for err in e.errors():
                self._validation_errors.append(
                    {
                        "loc": ".".join(str(loc) for loc in err["loc"]),
                        "msg": err["msg"],
                        "type": err["type"],
                    }
                )
            log.error(
                "config_validation_failed",
                stage=self.state.value,
                validation_error_count=len(self._validation_errors),
                errors=self._validation_errors,
            )
            self._state_machine.fail()
            msg = f"Validation failed for {config_path}: {len(e.errors())} errors"
            raise self._error(msg, config_path) from e

    def _resolve_api_keys(
        self, config: TranslationConfig, log: structlog.stdlib.BoundLogger
    ) -> TranslationConfig:
        """Fill API keys missing from the file from the environment."""
        try:
            settings = self._settings or get_api_key_settings()
        except ConfigurationError as e:
            self._validation_errors.extend(
                {"loc": "environment", "msg": reason, "type": "env_settings"}
                for reason in e.reasons
            )
            log.error(
                "config_env_unreadable", stage=self.state.value, reasons=e.reasons
            )
            self._state_machine.fail()
            raise ConfigurationError(
                e.message, e.context, reasons=self._reasons()
            ) from e
        return config.with_api_keys(**settings.as_config_keys())

    def _fail(
        self,
        loc: str,
        message: str,
        error_type: str,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        self._validation_errors.append({"loc": loc, "msg": message, "type": error_type})
        log.error(
            "config_load_failed", stage=self.state.value, error=message, type=error_type
        )
        self._state_machine.fail()

    def _error(self, message: str, config_path: Path) -> ConfigurationError:
        return ConfigurationError(
            message, {"file_path": str(config_path)}, reasons=self._reasons()
        )

    def _reasons(self) -> list[str]:
        return [
            format_validation_error(err["loc"], err["msg"], err["type"])
            for err in self._validation_errors
        ]

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process.

        Returns:
            Dictionary with validation summary.
        """
        failed_stage = self._state_machine.failed_stage
        return {
            "run_id": self._run_id,
            "state": self._state_machine.state.name,
            "failed_stage": failed_stage.name if failed_stage else None,
            "file_sha256": self._file_checksum,
            "validation_error_count": len(self._validation_errors),
            "validation_errors": self._validation_errors,
            "validation_duration_ms": self._validation_duration_ms,
        }

    def get_validation_summary_json(self) -> str:
        """Get validation summary as JSON string with stable ordering."""
        return json.dumps(self.get_validation_summary(), sort_keys=True, indent=2)
