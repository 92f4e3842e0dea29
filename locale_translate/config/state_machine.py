"""Lifecycle of a single configuration load."""

from enum import Enum
from typing import ClassVar

import structlog


logger = structlog.get_logger()


class ConfigState(Enum):
    """Stages a ConfigLoader passes through.

    State transitions:
        UNLOADED -> READING: Config file bytes are being read and decoded
        READING -> PARSED: YAML decoded to a top-level mapping
        PARSED -> VALIDATED: Mapping accepted by the TranslationConfig schema
        VALIDATED -> KEYS_RESOLVED: Missing API keys filled from the environment
        KEYS_RESOLVED -> READY: Cross-field checks passed
        Any stage before READY -> FAILED: Loading stopped at that stage
    """

    UNLOADED = "unloaded"
    READING = "reading"
    PARSED = "parsed"
    VALIDATED = "validated"
    KEYS_RESOLVED = "keys_resolved"
    READY = "ready"
    FAILED = "failed"


class ConfigStateError(Exception):
    """Raised when a loader is driven out of order, e.g. reused after a load."""

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        """Initialize the error.

        Args:
            from_state: The current stage.
            to_state: The stage that was requested.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Config loader cannot move from {from_state.name} to {to_state.name}"
        )


_PIPELINE = (
    ConfigState.UNLOADED,
    ConfigState.READING,
    ConfigState.PARSED,
    ConfigState.VALIDATED,
    ConfigState.KEYS_RESOLVED,
    ConfigState.READY,
)


class ConfigStateMachine:
    """Tracks how far a configuration load got.

    Stages advance strictly in pipeline order. READY and FAILED are final,
    so a loader instance is single use. On failure the stage that was
    active is kept in ``failed_stage`` for error reporting.
    """

    VALID_TRANSITIONS: ClassVar[dict[ConfigState, set[ConfigState]]] = {
        current: {following, ConfigState.FAILED}
        for current, following in zip(_PIPELINE, _PIPELINE[1:], strict=False)
    } | {ConfigState.READY: set(), ConfigState.FAILED: set()}

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize in UNLOADED.

        Args:
            run_id: Optional run identifier for log correlation.
        """
        self._state = ConfigState.UNLOADED
        self._failed_stage: ConfigState | None = None
        self._history: list[ConfigState] = [ConfigState.UNLOADED]
        self._log = logger.bind(component="config", run_id=run_id)

    @property
    def state(self) -> ConfigState:
        """Get the current stage."""
        return self._state

    @property
    def failed_stage(self) -> ConfigState | None:
        """Get the stage that was active when loading failed."""
        return self._failed_stage

    @property
    def history(self) -> list[ConfigState]:
        """Get every stage entered, in order."""
        return list(self._history)

    def can_transition(self, to_state: ConfigState) -> bool:
        """Check if the given stage may follow the current one."""
        return to_state in self.VALID_TRANSITIONS[self._state]

    def transition(self, to_state: ConfigState) -> None:
        """Advance to the next stage.

        Args:
            to_state: The stage to enter.

        Raises:
            ConfigStateError: If the stage does not follow the current one.
        """
        if not self.can_transition(to_state):
            self._log.warning(
                "config_stage_out_of_order",
                from_state=self._state.value,
                to_state=to_state.value,
            )
            raise ConfigStateError(self._state, to_state)
        if to_state == ConfigState.FAILED:
            self._failed_stage = self._state
        self._log.debug(
            "config_stage_entered",
            from_state=self._state.value,
            to_state=to_state.value,
        )
        self._state = to_state
        self._history.append(to_state)

    def fail(self) -> None:
        """Stop loading at the current stage."""
        self.transition(ConfigState.FAILED)

    def is_ready(self) -> bool:
        """Check if the configuration is usable."""
        return self._state == ConfigState.READY

    def is_failed(self) -> bool:
        """Check if loading failed."""
        return self._state == ConfigState.FAILED
