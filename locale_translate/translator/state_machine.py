"""Per-language translation job state machine."""

from enum import Enum, auto
from typing import ClassVar

import structlog


logger = structlog.get_logger()


class JobState(Enum):
    """Language job lifecycle states.

    State transitions:
        PENDING -> FILTERED: Source read and exclusions applied
        FILTERED -> DISPATCHED: Strategy translated every string
        DISPATCHED -> MERGED: Result reconciled with the existing target
        MERGED -> PERSISTED: Target file written
        PERSISTED -> DONE: Job complete
        MERGED -> DONE: Job complete without writing (dry-run)
        Any non-terminal -> FAILED: Job failed
    """

    PENDING = auto()
    FILTERED = auto()
    DISPATCHED = auto()
    MERGED = auto()
    PERSISTED = auto()
    DONE = auto()
    FAILED = auto()


class JobStateError(Exception):
    """Raised when an invalid job state transition is attempted."""

    def __init__(self, from_state: JobState, to_state: JobState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid job state transition: {from_state.name} -> {to_state.name}"
        )


class JobStateMachine:
    """State machine for one language job.

    Logs invariant violations when invalid transitions are attempted.
    """

    VALID_TRANSITIONS: ClassVar[dict[JobState, set[JobState]]] = {
        JobState.PENDING: {JobState.FILTERED, JobState.FAILED},
        JobState.FILTERED: {JobState.DISPATCHED, JobState.FAILED},
        JobState.DISPATCHED: {JobState.MERGED, JobState.FAILED},
        JobState.MERGED: {JobState.PERSISTED, JobState.DONE, JobState.FAILED},
        JobState.PERSISTED: {JobState.DONE, JobState.FAILED},
        JobState.DONE: set(),  # Terminal state
        JobState.FAILED: set(),  # Terminal state
    }

    def __init__(self, language: str, run_id: str | None = None) -> None:
        """Initialize the state machine in PENDING state.

        Args:
            language: Target language code.
            run_id: Optional run identifier for logging.
        """
        self._language = language
        self._state = JobState.PENDING
        self._log = logger.bind(
            run_id=run_id, component="translator", language=language
        )

    @property
    def state(self) -> JobState:
        """Get the current state."""
        return self._state

    @property
    def language(self) -> str:
        """Get the language code."""
        return self._language

    def can_transition(self, to_state: JobState) -> bool:
        """Check if a transition to the given state is valid."""
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: JobState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            JobStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            self._log.error(
                "invariant_violation",
                error_type="illegal_state_transition",
                from_state=self._state.name,
                to_state=to_state.name,
            )
            raise JobStateError(self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.debug(
            "job_state_transition",
            from_state=old_state.name,
            to_state=to_state.name,
        )

    def to_filtered(self) -> None:
        """Transition to FILTERED state."""
        self.transition(JobState.FILTERED)

    def to_dispatched(self) -> None:
        """Transition to DISPATCHED state."""
        self.transition(JobState.DISPATCHED)

    def to_merged(self) -> None:
        """Transition to MERGED state."""
        self.transition(JobState.MERGED)

    def to_persisted(self) -> None:
        """Transition to PERSISTED state."""
        self.transition(JobState.PERSISTED)

    def to_done(self) -> None:
        """Transition to DONE state."""
        self.transition(JobState.DONE)

    def to_failed(self) -> None:
        """Transition to FAILED state."""
        self.transition(JobState.FAILED)

    def is_terminal(self) -> bool:
        """Check if the current state is terminal."""
        return self._state in (JobState.DONE, JobState.FAILED)
