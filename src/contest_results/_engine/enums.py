# Area: Engine
"""
contest_results._engine.enums — Engine Enums
============================================

Status and verdict values shared by the upstream models, the compiled
Result, and the per-record backfill state machine.
"""

from enum import Enum


class ProgressStatus(str, Enum):
    """Lifecycle of a participant's contest attempt (IN_PROGRESS -> SUBMITTED)."""
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"


class Verdict(str, Enum):
    """Judge verdicts. Only ACCEPTED attempts are ever scored."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    WRONG_ANSWER = "WRONG_ANSWER"
    TIME_LIMIT_EXCEEDED = "TIME_LIMIT_EXCEEDED"
    MEMORY_LIMIT_EXCEEDED = "MEMORY_LIMIT_EXCEEDED"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    COMPILATION_ERROR = "COMPILATION_ERROR"


class RecordState(Enum):
    """
    States of one Progress record during a backfill run.

    State transitions:
    PENDING -> SKIPPED (on RESULT_EXISTS or INSERT_CONFLICT)
    PENDING -> CREATED (on RESULT_INSERTED)
    PENDING -> FAILED (on ERROR)
    SKIPPED, CREATED and FAILED are terminal.
    """
    PENDING = "PENDING"
    SKIPPED = "SKIPPED"
    CREATED = "CREATED"
    FAILED = "FAILED"


class RecordEvent(Enum):
    """
    Events that move a record out of PENDING.

    - RESULT_EXISTS: a Result for the key was found before compiling
    - INSERT_CONFLICT: the insert lost a race for the key
    - RESULT_INSERTED: the compiled Result was written
    - ERROR: an unexpected error while compiling this record
    """
    RESULT_EXISTS = "RESULT_EXISTS"
    INSERT_CONFLICT = "INSERT_CONFLICT"
    RESULT_INSERTED = "RESULT_INSERTED"
    ERROR = "ERROR"
