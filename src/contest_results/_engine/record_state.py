# Area: Engine
"""
contest_results._engine.record_state — Backfill Record State Machine
====================================================================

Tracks one Progress record through a backfill run. Every record starts
PENDING and ends in exactly one terminal state: SKIPPED, CREATED or
FAILED.
"""

import logging

from .enums import RecordEvent, RecordState

logger = logging.getLogger("contest_results.engine.record_state")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    RecordState.PENDING: {
        RecordEvent.RESULT_EXISTS: RecordState.SKIPPED,
        RecordEvent.INSERT_CONFLICT: RecordState.SKIPPED,
        RecordEvent.RESULT_INSERTED: RecordState.CREATED,
        RecordEvent.ERROR: RecordState.FAILED,
    },
    RecordState.SKIPPED: {},
    RecordState.CREATED: {},
    RecordState.FAILED: {},
}

TERMINAL_STATES = frozenset({RecordState.SKIPPED, RecordState.CREATED, RecordState.FAILED})


class RecordStateMachine:
    """
    State machine for a single (contest_id, user_id) record.

    Attributes:
        contest_id: Contest of the record
        user_id: Participant of the record
        current_state: Where the record is now
    """

    def __init__(self, contest_id: str, user_id: str):
        self.contest_id = contest_id
        self.user_id = user_id
        self.current_state = RecordState.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.current_state in TERMINAL_STATES

    def can_transition(self, event: RecordEvent) -> bool:
        """Check if the event is valid from the current state."""
        return event in TRANSITIONS.get(self.current_state, {})

    def transition(self, event: RecordEvent) -> RecordState:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_state.value} "
                f"(contest={self.contest_id} user={self.user_id})"
            )
        self.current_state = TRANSITIONS[self.current_state][event]
        logger.debug(
            "Record contest=%s user=%s -> %s",
            self.contest_id, self.user_id, self.current_state.value,
        )
        return self.current_state
