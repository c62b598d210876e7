# Area: Engine
"""
Result Aggregation Engine - scoring and reconciliation of contest attempts.

This package handles:
- MCQ scoring with exact-match correctness and negative marking
- Best accepted attempt selection per coding problem
- Compiling one write-once Result per (contest, user)
- Ranking compiled Results

The backfill orchestrator lives in ``orchestrator`` and is imported
from there directly, since it depends on the store layer.
"""

from .enums import ProgressStatus, Verdict, RecordState, RecordEvent
from .models import GradableMCQ, McqAnswer, McqOption, Progress, SubmissionAttempt
from .result import CodingSubmissionDetail, McqAnswerDetail, Result, RunSummary
from .score_rule import ScoreOutcome, evaluate_selection
from .best_attempt import select_best_attempts
from .mcq_reconciler import McqReconciliation, reconcile_mcq
from .coding_reconciler import CodingReconciliation, reconcile_coding
from .result_compiler import compile_result, compute_time_taken
from .record_state import RecordStateMachine
from .leaderboard import ContestStats, RankedResult, contest_stats, rank_results

__all__ = [
    "ProgressStatus",
    "Verdict",
    "RecordState",
    "RecordEvent",
    "GradableMCQ",
    "McqAnswer",
    "McqOption",
    "Progress",
    "SubmissionAttempt",
    "CodingSubmissionDetail",
    "McqAnswerDetail",
    "Result",
    "RunSummary",
    "ScoreOutcome",
    "evaluate_selection",
    "select_best_attempts",
    "McqReconciliation",
    "reconcile_mcq",
    "CodingReconciliation",
    "reconcile_coding",
    "compile_result",
    "compute_time_taken",
    "RecordStateMachine",
    "ContestStats",
    "RankedResult",
    "contest_stats",
    "rank_results",
]
