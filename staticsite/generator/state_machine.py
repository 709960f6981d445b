"""Generation lifecycle state machine implementation."""

from enum import Enum, auto
from typing import ClassVar

import structlog

from staticsite.constants import COMPONENT_GENERATOR


logger = structlog.get_logger()


class GenerationState(Enum):
    """Generation lifecycle states.

    State transitions:
        PENDING -> BINDING_IMAGES: Point image processing at the output tree
        BINDING_IMAGES -> CLEARING: Empty the destination directory
        CLEARING -> GENERATING_PAGES: Render and write every page
        GENERATING_PAGES -> LINKING: Create configured symlinks
        LINKING -> COPYING: Copy configured directories
        COPYING -> DONE: Run complete
        Any non-terminal -> FAILED: A fatal error aborted the run
    """

    PENDING = auto()
    BINDING_IMAGES = auto()
    CLEARING = auto()
    GENERATING_PAGES = auto()
    LINKING = auto()
    COPYING = auto()
    DONE = auto()
    FAILED = auto()


class GenerationStateError(Exception):
    """Raised when an invalid generation state transition is attempted."""

    def __init__(self, from_state: GenerationState, to_state: GenerationState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid generation state transition: {from_state.name} -> {to_state.name}"
        )


class GenerationStateMachine:
    """State machine for the generation lifecycle.

    Enforces the step order of a run. Logs invariant violations when
    invalid transitions are attempted.
    """

    VALID_TRANSITIONS: ClassVar[dict[GenerationState, set[GenerationState]]] = {
        GenerationState.PENDING: {
            GenerationState.BINDING_IMAGES,
            GenerationState.FAILED,
        },
        GenerationState.BINDING_IMAGES: {
            GenerationState.CLEARING,
            GenerationState.FAILED,
        },
        GenerationState.CLEARING: {
            GenerationState.GENERATING_PAGES,
            GenerationState.FAILED,
        },
        GenerationState.GENERATING_PAGES: {
            GenerationState.LINKING,
            GenerationState.FAILED,
        },
        GenerationState.LINKING: {
            GenerationState.COPYING,
            GenerationState.FAILED,
        },
        GenerationState.COPYING: {
            GenerationState.DONE,
            GenerationState.FAILED,
        },
        GenerationState.DONE: set(),  # Terminal state
        GenerationState.FAILED: set(),  # Terminal state
    }

    def __init__(self, run_id: str) -> None:
        """Initialize the state machine in PENDING state.

        Args:
            run_id: Unique run identifier for logging.
        """
        self._run_id = run_id
        self._state = GenerationState.PENDING
        self._log = logger.bind(run_id=run_id, component=COMPONENT_GENERATOR)

    @property
    def state(self) -> GenerationState:
        """Get the current state."""
        return self._state

    @property
    def run_id(self) -> str:
        """Get the run ID."""
        return self._run_id

    def can_transition(self, to_state: GenerationState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: The target state.

        Returns:
            True if the transition is valid, False otherwise.
        """
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: GenerationState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            GenerationStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            self._log.error(
                "invariant_violation",
                error_type="illegal_state_transition",
                from_state=self._state.name,
                to_state=to_state.name,
            )
            raise GenerationStateError(self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.debug(
            "generation_state_transition",
            from_state=old_state.name,
            to_state=to_state.name,
        )

    def is_terminal(self) -> bool:
        """Check if the current state is terminal."""
        return self._state in (GenerationState.DONE, GenerationState.FAILED)

    def is_done(self) -> bool:
        """Check if the run completed."""
        return self._state == GenerationState.DONE

    def is_failed(self) -> bool:
        """Check if the run was aborted."""
        return self._state == GenerationState.FAILED
