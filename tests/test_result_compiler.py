# Area: Engine Tests
"""Tests for the Result Compiler."""

import dataclasses
import logging
from datetime import datetime, timedelta, timezone

import pytest
from contest_results._engine.coding_reconciler import CodingReconciliation, reconcile_coding
from contest_results._engine.enums import ProgressStatus, Verdict
from contest_results._engine.mcq_reconciler import McqReconciliation, reconcile_mcq
from contest_results._engine.models import (
    GradableMCQ, McqAnswer, McqOption, Progress, SubmissionAttempt,
)
from contest_results._engine.result import CodingSubmissionDetail
from contest_results._engine.result_compiler import compile_result, compute_time_taken
from contest_results.errors import CompilationError

STARTED = datetime(2026, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


def make_progress(**overrides):
    data = {
        "contest_id": "C1",
        "user_id": "U1",
        "status": ProgressStatus.SUBMITTED,
        "started_at": STARTED,
        "submitted_at": STARTED + timedelta(minutes=30),
        "total_time_spent": None,
        "mcq_answers": [],
    }
    data.update(overrides)
    return Progress(**data)


EMPTY_MCQ = McqReconciliation(mcq_score=0, details=())
EMPTY_CODING = CodingReconciliation(coding_score=0, details=())


class TestComputeTimeTaken:
    """Tests for compute_time_taken() fallback chain."""

    def test_total_time_spent_wins(self):
        assert compute_time_taken(make_progress(total_time_spent=1234)) == 1234

    def test_zero_total_time_falls_back_to_timestamps(self):
        assert compute_time_taken(make_progress(total_time_spent=0)) == 1800

    def test_fractional_seconds_floored(self):
        progress = make_progress(submitted_at=STARTED + timedelta(seconds=59, milliseconds=999))
        assert compute_time_taken(progress) == 59

    def test_missing_started_at_is_zero(self, caplog):
        with caplog.at_level(logging.WARNING, logger="contest_results"):
            assert compute_time_taken(make_progress(started_at=None)) == 0
        assert "Missing timestamps" in caplog.text

    def test_missing_submitted_at_is_zero(self):
        assert compute_time_taken(make_progress(submitted_at=None)) == 0

    def test_negative_duration_is_zero(self):
        progress = make_progress(submitted_at=STARTED - timedelta(seconds=5))
        assert compute_time_taken(progress) == 0

    def test_mixed_naive_and_aware_is_zero(self):
        progress = make_progress(submitted_at=datetime(2026, 3, 1, 11, 0, 0))
        assert compute_time_taken(progress) == 0

    def test_negative_total_time_spent_is_zero(self, caplog):
        with caplog.at_level(logging.WARNING, logger="contest_results"):
            assert compute_time_taken(make_progress(total_time_spent=-30)) == 0
        assert "Negative total_time_spent" in caplog.text

    def test_fractional_total_time_spent_floored(self):
        assert compute_time_taken(make_progress(total_time_spent=1234.5)) == 1234

    def test_fractional_answer_time_floored(self):
        answer = McqAnswer(question_id="Q1", selected_option_indices=[0], time_spent_seconds=12.5)
        assert answer.time_spent_seconds == 12


class TestCompileResult:
    """Tests for compile_result()."""

    def test_end_to_end_correct_answer(self):
        q1 = GradableMCQ(
            id="Q1",
            options=[McqOption(is_correct=True), McqOption(is_correct=False)],
            marks_on_correct=4,
            negative_marks_on_wrong=1,
        )
        progress = make_progress(mcq_answers=[McqAnswer(question_id="Q1", selected_option_indices={0})])
        mcq = reconcile_mcq(progress.mcq_answers, {"Q1": q1}.get)
        result = compile_result(progress, mcq, EMPTY_CODING)

        assert result.mcq_score == 4
        assert result.mcq_answer_details[0].is_correct is True
        assert result.mcq_answer_details[0].marks_awarded == 4
        assert result.total_score == 4
        assert result.status == ProgressStatus.SUBMITTED

    def test_total_is_sum_of_parts(self):
        mcq = McqReconciliation(mcq_score=2.5, details=())
        coding = CodingReconciliation(
            coding_score=97.3,
            details=(CodingSubmissionDetail("P1", "S1", 97.3),),
        )
        result = compile_result(make_progress(), mcq, coding)
        assert result.total_score == 99.8

    def test_total_has_no_float_drift(self):
        mcq = McqReconciliation(mcq_score=0.1, details=())
        coding = CodingReconciliation(
            coding_score=0.2,
            details=(CodingSubmissionDetail("P1", "S1", 0.2),),
        )
        result = compile_result(make_progress(), mcq, coding)
        assert result.total_score == 0.3

    def test_integral_total_is_int(self):
        mcq = McqReconciliation(mcq_score=2.5, details=())
        coding = CodingReconciliation(
            coding_score=97.5,
            details=(CodingSubmissionDetail("P1", "S1", 97.5),),
        )
        result = compile_result(make_progress(), mcq, coding)
        assert result.total_score == 100
        assert isinstance(result.total_score, int)

    def test_copies_key_and_timestamps(self):
        progress = make_progress()
        result = compile_result(progress, EMPTY_MCQ, EMPTY_CODING)
        assert (result.contest_id, result.user_id) == ("C1", "U1")
        assert result.started_at == progress.started_at
        assert result.submitted_at == progress.submitted_at
        assert result.time_taken_seconds == 1800

    def test_in_progress_raises(self):
        with pytest.raises(CompilationError):
            compile_result(make_progress(status=ProgressStatus.IN_PROGRESS), EMPTY_MCQ, EMPTY_CODING)

    def test_result_is_immutable(self):
        result = compile_result(make_progress(), EMPTY_MCQ, EMPTY_CODING)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_score = 100

    def test_coding_details_from_attempts(self):
        attempts = [
            SubmissionAttempt(id="S1", user_id="U1", contest_id="C1", problem_id="P1",
                              verdict=Verdict.ACCEPTED, score=60),
            SubmissionAttempt(id="S2", user_id="U1", contest_id="C1", problem_id="P2",
                              verdict=Verdict.RUNTIME_ERROR, score=0),
        ]
        result = compile_result(make_progress(), EMPTY_MCQ, reconcile_coding(attempts))
        assert result.coding_score == 60
        assert [d.problem_id for d in result.coding_submission_details] == ["P1"]

    def test_to_dict_is_json_friendly(self):
        import json
        answers = [McqAnswer(question_id="Q1", selected_option_indices={2, 0})]
        q1 = GradableMCQ(id="Q1", options=[McqOption(is_correct=True)] * 3)
        progress = make_progress(mcq_answers=answers)
        result = compile_result(progress, reconcile_mcq(answers, {"Q1": q1}.get), EMPTY_CODING)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["mcq_answer_details"][0]["selected_option_indices"] == [0, 2]
        assert data["status"] == "SUBMITTED"
        assert data["started_at"] == STARTED.isoformat()
