# Area: Engine
"""
contest_results._engine.mcq_reconciler — MCQ Reconciler
=======================================================

Turns the MCQ answers of one Progress record into scored details.
Questions that cannot be resolved are left out of both the score
and the details.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .models import GradableMCQ, McqAnswer, Score
from .result import McqAnswerDetail
from .score_rule import evaluate_selection
from .totals import sum_scores

logger = logging.getLogger("contest_results.engine.mcq")

McqResolver = Callable[[str], Optional[GradableMCQ]]


@dataclass(frozen=True)
class McqReconciliation:
    mcq_score: Score
    details: Tuple[McqAnswerDetail, ...]
    unresolved: Tuple[str, ...] = ()


def reconcile_mcq(
    answers: Iterable[McqAnswer],
    resolve: McqResolver,
) -> McqReconciliation:
    """
    Score every answered question.

    Args:
        answers: Progress answers, in the order they were given
        resolve: Looks up a question by id, None when it does not exist

    Returns:
        McqReconciliation with the summed score and one detail per
        resolved answer, in input order
    """
    details = []
    unresolved = []
    for answer in answers:
        mcq = resolve(answer.question_id)
        if mcq is None:
            logger.warning("Question %s not found, excluded from score", answer.question_id)
            unresolved.append(answer.question_id)
            continue
        outcome = evaluate_selection(answer.selected_option_indices, mcq)
        details.append(McqAnswerDetail(
            question_id=mcq.id,
            selected_option_indices=answer.selected_option_indices,
            is_correct=outcome.is_correct,
            marks_awarded=outcome.marks_awarded,
            time_spent_seconds=answer.time_spent_seconds,
        ))

    return McqReconciliation(
        mcq_score=sum_scores(d.marks_awarded for d in details),
        details=tuple(details),
        unresolved=tuple(unresolved),
    )
