# Area: Engine
"""
contest_results._engine.result — Result Dataclasses
===================================================

Defines the Result aggregate the compiler produces for one
(contest, user) pair, its detail records, and the RunSummary the
orchestrator reports at the end of a backfill run.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from .enums import ProgressStatus

Score = Union[int, float]


@dataclass(frozen=True)
class McqAnswerDetail:
    """
    Scored view of one answered MCQ.

    Attributes:
        question_id: The resolved question
        selected_option_indices: What the participant picked
        is_correct: Exact-set match against the correct options
        marks_awarded: marks_on_correct, or minus the wrong-answer penalty
        time_spent_seconds: Time the participant spent on the question
    """

    question_id: str
    selected_option_indices: FrozenSet[int]
    is_correct: bool
    marks_awarded: Score
    time_spent_seconds: int = 0


@dataclass(frozen=True)
class CodingSubmissionDetail:
    """Best accepted attempt for one problem."""

    problem_id: str
    best_attempt_id: str
    score: Score
    solved: bool = True


@dataclass(frozen=True)
class Result:
    """
    Authoritative scoring record for one participant's contest attempt.

    Write-once per (contest_id, user_id). Built by compile_result() and
    inserted by the orchestrator; never updated in place.

    Attributes:
        contest_id: Contest identifier
        user_id: Participant identifier
        mcq_score: Sum of marks_awarded over resolved MCQ answers
        mcq_answer_details: One entry per resolved answer, in answer order
        coding_score: Sum of best accepted attempt scores
        coding_submission_details: One entry per solved problem
        total_score: mcq_score + coding_score
        time_taken_seconds: Elapsed time, never negative
        started_at: Copied from Progress
        submitted_at: Copied from Progress
        status: Always SUBMITTED for compiled results
    """

    contest_id: str
    user_id: str
    mcq_score: Score
    mcq_answer_details: Tuple[McqAnswerDetail, ...]
    coding_score: Score
    coding_submission_details: Tuple[CodingSubmissionDetail, ...]
    total_score: Score
    time_taken_seconds: int
    started_at: Optional[datetime]
    submitted_at: Optional[datetime]
    status: ProgressStatus = ProgressStatus.SUBMITTED

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly representation (used by the store and CLI)."""
        data = asdict(self)
        for detail in data["mcq_answer_details"]:
            detail["selected_option_indices"] = sorted(detail["selected_option_indices"])
        data["started_at"] = self.started_at.isoformat() if self.started_at else None
        data["submitted_at"] = self.submitted_at.isoformat() if self.submitted_at else None
        data["status"] = self.status.value
        return data


@dataclass
class RunSummary:
    """
    End-of-run report for a backfill.

    Attributes:
        created: Results inserted by this run
        skipped: Keys that already had a Result (or lost an insert race)
        failed: Records that raised while being compiled
        stopped: True when the run ended early on a stop request
    """

    created: int = 0
    skipped: int = 0
    failed: int = 0
    stopped: bool = False
    failed_keys: list = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.created + self.skipped + self.failed

    def as_report(self) -> Dict[str, int]:
        return {
            "createdCount": self.created,
            "skippedCount": self.skipped,
            "failedCount": self.failed,
        }
