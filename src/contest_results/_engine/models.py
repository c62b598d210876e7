# Area: Engine
"""
contest_results._engine.models — Upstream record models
========================================================

Pydantic models for the records this engine reads but never writes:
contest progress, gradable MCQs and judged submission attempts.
All models are frozen so a reconciliation pass can never mutate the
objects it was handed.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import FrozenSet, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ProgressStatus, Verdict

Score = Union[int, float]

DEFAULT_MARKS_ON_CORRECT = 1
DEFAULT_NEGATIVE_MARKS_ON_WRONG = 0


def _whole_seconds(value):
    """Floor fractional second counts; upstream timers are JS numbers."""
    if isinstance(value, float) and math.isfinite(value):
        return math.floor(value)
    return value


class McqAnswer(BaseModel):
    """One answered question inside a Progress record."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    selected_option_indices: FrozenSet[int] = frozenset()
    time_spent_seconds: int = 0

    @field_validator("selected_option_indices", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return frozenset() if value is None else value

    @field_validator("time_spent_seconds", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return 0 if value is None else _whole_seconds(value)


class Progress(BaseModel):
    """
    Live or submitted state of one participant's contest attempt.

    Attributes:
        contest_id: Contest identifier
        user_id: Participant identifier
        status: IN_PROGRESS or SUBMITTED
        started_at: When the attempt began (may be missing upstream)
        submitted_at: When the attempt was submitted
        total_time_spent: Seconds tracked by the live flow, if any
        mcq_answers: Answers in the order the participant gave them
    """

    model_config = ConfigDict(frozen=True)

    contest_id: str
    user_id: str
    status: ProgressStatus
    started_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    total_time_spent: Optional[int] = None
    mcq_answers: List[McqAnswer] = Field(default_factory=list)

    @field_validator("total_time_spent", mode="before")
    @classmethod
    def _floor_total_time(cls, value):
        return _whole_seconds(value)

    @field_validator("mcq_answers", mode="before")
    @classmethod
    def _none_is_no_answers(cls, value):
        return [] if value is None else value


class McqOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_correct: bool = False


class GradableMCQ(BaseModel):
    """
    A multiple-choice question with its marking scheme.

    Null marks fall back to DEFAULT_MARKS_ON_CORRECT and
    DEFAULT_NEGATIVE_MARKS_ON_WRONG.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    options: List[McqOption] = Field(default_factory=list)
    marks_on_correct: Optional[Score] = None
    negative_marks_on_wrong: Optional[Score] = None

    @property
    def correct_indices(self) -> FrozenSet[int]:
        return frozenset(i for i, opt in enumerate(self.options) if opt.is_correct)

    @property
    def marks(self) -> Score:
        if self.marks_on_correct is None:
            return DEFAULT_MARKS_ON_CORRECT
        return self.marks_on_correct

    @property
    def penalty(self) -> Score:
        if self.negative_marks_on_wrong is None:
            return DEFAULT_NEGATIVE_MARKS_ON_WRONG
        return self.negative_marks_on_wrong


class SubmissionAttempt(BaseModel):
    """One judged submission for one coding problem."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    contest_id: str
    problem_id: str
    verdict: Verdict
    score: Score = 0

    @field_validator("score", mode="before")
    @classmethod
    def _none_is_zero(cls, value):
        return 0 if value is None else value
