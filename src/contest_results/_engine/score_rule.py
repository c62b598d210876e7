# Area: Engine
"""
contest_results._engine.score_rule — ScoreRule Evaluator
========================================================

Pure scoring of one MCQ selection against the question's correct
options and marking scheme. No partial credit.
"""

from dataclasses import dataclass
from typing import Iterable

from .models import GradableMCQ, Score


@dataclass(frozen=True)
class ScoreOutcome:
    is_correct: bool
    marks_awarded: Score


def is_exact_match(selected: Iterable[int], mcq: GradableMCQ) -> bool:
    """True iff the selection equals the set of correct option indices."""
    return frozenset(selected) == mcq.correct_indices


def evaluate_selection(selected: Iterable[int], mcq: GradableMCQ) -> ScoreOutcome:
    """
    Score one selection.

    Args:
        selected: Option indices the participant picked
        mcq: The resolved question

    Returns:
        ScoreOutcome with marks_on_correct when correct, otherwise the
        negated wrong-answer penalty (zero when none is configured)
    """
    if is_exact_match(selected, mcq):
        return ScoreOutcome(is_correct=True, marks_awarded=mcq.marks)
    return ScoreOutcome(is_correct=False, marks_awarded=-mcq.penalty)
