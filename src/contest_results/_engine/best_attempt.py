# Area: Engine
"""
contest_results._engine.best_attempt — Best-Attempt Selector
============================================================

Reduces an unordered stream of submission attempts to the single
highest-scoring ACCEPTED attempt per problem.
"""

from typing import Dict, Iterable

from .enums import Verdict
from .models import SubmissionAttempt


def select_best_attempts(
    attempts: Iterable[SubmissionAttempt],
) -> Dict[str, SubmissionAttempt]:
    """
    Pick the best accepted attempt for every problem.

    Ties keep the attempt seen first: a later attempt replaces the
    current best only with a strictly greater score. Problems without
    any ACCEPTED attempt are left out.

    Args:
        attempts: Attempts for one (user, contest) pair, any order

    Returns:
        problem_id -> selected attempt, ordered by first accepted attempt
    """
    best: Dict[str, SubmissionAttempt] = {}
    for attempt in attempts:
        if attempt.verdict != Verdict.ACCEPTED:
            continue
        current = best.get(attempt.problem_id)
        if current is None or attempt.score > current.score:
            best[attempt.problem_id] = attempt
    return best
