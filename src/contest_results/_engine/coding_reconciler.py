# Area: Engine
"""
contest_results._engine.coding_reconciler — Coding Reconciler
=============================================================

Scores the coding round from the best accepted attempt per problem.
Problems that were never accepted produce no detail entry.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .best_attempt import select_best_attempts
from .models import Score, SubmissionAttempt
from .result import CodingSubmissionDetail
from .totals import sum_scores


@dataclass(frozen=True)
class CodingReconciliation:
    coding_score: Score
    details: Tuple[CodingSubmissionDetail, ...]


def reconcile_coding(attempts: Iterable[SubmissionAttempt]) -> CodingReconciliation:
    """Score all attempts of one (user, contest) pair."""
    best = select_best_attempts(attempts)
    details = tuple(
        CodingSubmissionDetail(
            problem_id=problem_id,
            best_attempt_id=attempt.id,
            score=attempt.score,
            solved=True,
        )
        for problem_id, attempt in best.items()
    )
    return CodingReconciliation(
        coding_score=sum_scores(d.score for d in details),
        details=details,
    )
