# Area: Engine
"""
contest_results._engine.result_compiler — Result Compiler
=========================================================

Merges the MCQ and coding reconciliations of one submitted Progress
record into the immutable Result aggregate. Persistence is left to
the orchestrator.

Elapsed-time policy
-------------------
``total_time_spent`` wins when it is present and non-zero. Otherwise the
duration is ``floor(submitted_at - started_at)`` in whole seconds. A
negative tracked time, a missing timestamp, or submitted_at preceding
started_at gives a duration of 0 and a warning. The compiler never raises for
timing data.
"""

import logging
import math

from ..errors import CompilationError
from .coding_reconciler import CodingReconciliation
from .enums import ProgressStatus
from .mcq_reconciler import McqReconciliation
from .models import Progress
from .result import Result
from .totals import sum_scores

logger = logging.getLogger("contest_results.engine.compiler")

INVALID_DURATION_SECONDS = 0


def compute_time_taken(progress: Progress) -> int:
    """Elapsed seconds for a submitted attempt (see module docstring)."""
    if progress.total_time_spent:
        if progress.total_time_spent < 0:
            logger.warning(
                "Negative total_time_spent for contest=%s user=%s, time taken set to %d",
                progress.contest_id, progress.user_id, INVALID_DURATION_SECONDS,
            )
            return INVALID_DURATION_SECONDS
        return progress.total_time_spent

    if progress.started_at is None or progress.submitted_at is None:
        logger.warning(
            "Missing timestamps for contest=%s user=%s, time taken set to %d",
            progress.contest_id, progress.user_id, INVALID_DURATION_SECONDS,
        )
        return INVALID_DURATION_SECONDS

    try:
        elapsed = (progress.submitted_at - progress.started_at).total_seconds()
    except TypeError:
        # naive vs aware datetimes
        logger.warning(
            "Incomparable timestamps for contest=%s user=%s, time taken set to %d",
            progress.contest_id, progress.user_id, INVALID_DURATION_SECONDS,
        )
        return INVALID_DURATION_SECONDS

    if elapsed < 0:
        logger.warning(
            "submitted_at precedes started_at for contest=%s user=%s",
            progress.contest_id, progress.user_id,
        )
        return INVALID_DURATION_SECONDS
    return math.floor(elapsed)


def compile_result(
    progress: Progress,
    mcq: McqReconciliation,
    coding: CodingReconciliation,
) -> Result:
    """
    Assemble the Result for one submitted Progress record.

    Args:
        progress: The participant's submitted progress
        mcq: Output of reconcile_mcq() for the same record
        coding: Output of reconcile_coding() for the same record

    Returns:
        The compiled Result

    Raises:
        CompilationError: If the progress is not SUBMITTED
    """
    if progress.status != ProgressStatus.SUBMITTED:
        raise CompilationError(
            progress.contest_id, progress.user_id,
            f"progress status is {progress.status.value}, expected SUBMITTED",
        )

    return Result(
        contest_id=progress.contest_id,
        user_id=progress.user_id,
        mcq_score=mcq.mcq_score,
        mcq_answer_details=mcq.details,
        coding_score=coding.coding_score,
        coding_submission_details=coding.details,
        total_score=sum_scores((mcq.mcq_score, coding.coding_score)),
        time_taken_seconds=compute_time_taken(progress),
        started_at=progress.started_at,
        submitted_at=progress.submitted_at,
        status=ProgressStatus.SUBMITTED,
    )
