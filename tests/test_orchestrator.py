# Area: Engine Tests
"""Tests for the Backfill Orchestrator."""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from contest_results._engine.enums import ProgressStatus, RecordState, Verdict
from contest_results._engine.models import (
    GradableMCQ, McqAnswer, McqOption, Progress, SubmissionAttempt,
)
from contest_results._engine.orchestrator import BackfillOrchestrator
from contest_results._store.database import get_connection, init_database
from contest_results._store.repo_mcqs import McqRepository
from contest_results._store.repo_progress import ProgressRepository
from contest_results._store.repo_results import ResultRepository
from contest_results._store.repo_submissions import SubmissionRepository
from contest_results.errors import StoreUnavailableError

STARTED = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_path():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_database(path)
    yield path
    os.unlink(path)


def seed_contest(db_path, users=("U1", "U2", "U3")):
    """Seed one contest with two questions, two problems and submitted users."""
    mcqs = McqRepository(db_path)
    mcqs.save_mcq(GradableMCQ(
        id="Q1", options=[McqOption(is_correct=True), McqOption(is_correct=False)],
        marks_on_correct=4, negative_marks_on_wrong=1,
    ))
    mcqs.save_mcq(GradableMCQ(
        id="Q2", options=[McqOption(is_correct=False), McqOption(is_correct=True)],
        marks_on_correct=2,
    ))

    progress = ProgressRepository(db_path)
    submissions = SubmissionRepository(db_path)
    for n, user in enumerate(users):
        progress.save_progress(Progress(
            contest_id="C1", user_id=user, status=ProgressStatus.SUBMITTED,
            started_at=STARTED, submitted_at=STARTED + timedelta(minutes=20 + n),
            mcq_answers=[
                McqAnswer(question_id="Q1", selected_option_indices={n % 2}),
                McqAnswer(question_id="Q2", selected_option_indices={1}),
            ],
        ))
        for i, (problem, score, verdict) in enumerate([
            ("P1", 40, Verdict.ACCEPTED),
            ("P1", 90, Verdict.ACCEPTED),
            ("P2", 0, Verdict.WRONG_ANSWER),
        ]):
            submissions.save_attempt(SubmissionAttempt(
                id=f"{user}-S{i}", user_id=user, contest_id="C1",
                problem_id=problem, verdict=verdict, score=score,
            ))

    progress.save_progress(Progress(
        contest_id="C1", user_id="LATE", status=ProgressStatus.IN_PROGRESS, started_at=STARTED,
    ))


class TestBackfillRun:
    """End-to-end runs against a SQLite store."""

    def test_creates_results_for_submitted_only(self, db_path):
        seed_contest(db_path)
        summary = BackfillOrchestrator.from_db_path(db_path).run()

        assert summary.as_report() == {"createdCount": 3, "skippedCount": 0, "failedCount": 0}
        results = ResultRepository(db_path)
        assert results.count() == 3
        assert results.exists("C1", "LATE") is False

    def test_scores_are_compiled(self, db_path):
        seed_contest(db_path, users=("U1", "U2"))
        BackfillOrchestrator.from_db_path(db_path).run()

        u1 = ResultRepository(db_path).get_result("C1", "U1")
        # U1 picks option 0 on Q1 (correct, +4) and Q2 correct (+2); best P1 = 90
        assert u1.mcq_score == 6
        assert u1.coding_score == 90
        assert u1.total_score == 96
        assert u1.time_taken_seconds == 20 * 60
        assert [d.problem_id for d in u1.coding_submission_details] == ["P1"]
        assert u1.coding_submission_details[0].best_attempt_id == "U1-S1"

        u2 = ResultRepository(db_path).get_result("C1", "U2")
        # U2 picks option 1 on Q1 (wrong, -1)
        assert u2.mcq_score == 1
        assert u2.total_score == 91

    def test_second_run_is_idempotent(self, db_path):
        seed_contest(db_path)
        BackfillOrchestrator.from_db_path(db_path).run()
        first = ResultRepository(db_path).get_all_results()

        summary = BackfillOrchestrator.from_db_path(db_path).run()

        assert summary.created == 0
        assert summary.skipped == 3
        assert ResultRepository(db_path).get_all_results() == first

    def test_late_submission_does_not_recompute(self, db_path):
        seed_contest(db_path, users=("U1",))
        BackfillOrchestrator.from_db_path(db_path).run()
        SubmissionRepository(db_path).save_attempt(SubmissionAttempt(
            id="U1-LATE", user_id="U1", contest_id="C1", problem_id="P2",
            verdict=Verdict.ACCEPTED, score=100,
        ))

        BackfillOrchestrator.from_db_path(db_path).run()

        assert ResultRepository(db_path).get_result("C1", "U1").coding_score == 90

    def test_missing_question_does_not_fail_record(self, db_path):
        ProgressRepository(db_path).save_progress(Progress(
            contest_id="C1", user_id="U1", status=ProgressStatus.SUBMITTED,
            started_at=STARTED, submitted_at=STARTED + timedelta(minutes=1),
            mcq_answers=[McqAnswer(question_id="DELETED", selected_option_indices={0})],
        ))
        summary = BackfillOrchestrator.from_db_path(db_path).run()

        assert summary.created == 1
        result = ResultRepository(db_path).get_result("C1", "U1")
        assert result.mcq_score == 0
        assert result.mcq_answer_details == ()

    def test_malformed_progress_fails_only_that_record(self, db_path):
        seed_contest(db_path, users=("U1",))
        conn = get_connection(db_path)
        conn.execute(
            "INSERT INTO contest_progress (contest_id, user_id, status, mcq_answers) VALUES (?, ?, ?, ?)",
            ("C1", "BROKEN", "SUBMITTED", "[{\"question_id\": "),
        )
        conn.commit()
        conn.close()

        summary = BackfillOrchestrator.from_db_path(db_path).run()

        assert summary.created == 1
        assert summary.failed == 1
        assert summary.failed_keys == [("C1", "BROKEN")]
        assert ResultRepository(db_path).exists("C1", "BROKEN") is False

    def test_parallel_workers_create_each_result_once(self, db_path):
        users = tuple(f"U{i}" for i in range(12))
        seed_contest(db_path, users=users)

        summary = BackfillOrchestrator.from_db_path(db_path, workers=4).run()

        assert summary.created == len(users)
        assert ResultRepository(db_path).count() == len(users)

    def test_fractional_time_values_compile(self, db_path):
        conn = get_connection(db_path)
        conn.execute(
            "INSERT INTO contest_progress (contest_id, user_id, status, started_at, submitted_at,"
            " total_time_spent, mcq_answers) VALUES (?, ?, ?, ?, ?, ?, ?)",
            ("C1", "U1", "SUBMITTED", STARTED.isoformat(), (STARTED + timedelta(minutes=30)).isoformat(),
             1234.5, '[{"question_id": "Q1", "selected_option_indices": [0], "time_spent_seconds": 12.5}]'),
        )
        conn.commit()
        conn.close()
        McqRepository(db_path).save_mcq(GradableMCQ(
            id="Q1", options=[McqOption(is_correct=True), McqOption(is_correct=False)],
        ))

        summary = BackfillOrchestrator.from_db_path(db_path).run()

        assert summary.as_report() == {"createdCount": 1, "skippedCount": 0, "failedCount": 0}
        result = ResultRepository(db_path).get_result("C1", "U1")
        assert result.time_taken_seconds == 1234
        assert result.mcq_answer_details[0].time_spent_seconds == 12
        assert result.mcq_score == 1

    def test_missing_database_aborts(self, tmp_path):
        orchestrator = BackfillOrchestrator.from_db_path(str(tmp_path / "missing.db"))
        with pytest.raises(StoreUnavailableError):
            orchestrator.run()

    def test_corrupt_database_aborts(self, tmp_path):
        corrupt = tmp_path / "corrupt.db"
        corrupt.write_bytes(b"this is not a sqlite database file" * 64)
        orchestrator = BackfillOrchestrator.from_db_path(str(corrupt))
        with pytest.raises(StoreUnavailableError):
            orchestrator.run()


def make_row(user_id):
    return {
        "contest_id": "C1",
        "user_id": user_id,
        "status": "SUBMITTED",
        "started_at": "2026-03-01T10:00:00+00:00",
        "submitted_at": "2026-03-01T10:10:00+00:00",
        "total_time_spent": None,
        "mcq_answers": "[]",
    }


def make_orchestrator(rows, workers=1):
    """Orchestrator wired to mock repositories."""
    progress_repo = MagicMock()
    progress_repo.get_submitted.return_value = rows
    mcq_repo = MagicMock()
    mcq_repo.get_mcq.return_value = None
    submission_repo = MagicMock()
    submission_repo.get_accepted.return_value = []
    result_repo = MagicMock()
    result_repo.exists.return_value = False
    result_repo.insert_if_absent.return_value = True
    orchestrator = BackfillOrchestrator(progress_repo, mcq_repo, submission_repo, result_repo,
                                        workers=workers)
    return orchestrator, result_repo


class TestBackfillFailureHandling:
    """Failure isolation with mocked repositories."""

    def test_insert_conflict_counts_as_skipped(self):
        orchestrator, result_repo = make_orchestrator([make_row("U1")])
        result_repo.insert_if_absent.return_value = False

        summary = orchestrator.run()

        assert (summary.created, summary.skipped, summary.failed) == (0, 1, 0)

    def test_unexpected_error_isolated(self):
        orchestrator, result_repo = make_orchestrator([make_row("U1"), make_row("U2"), make_row("U3")])
        result_repo.insert_if_absent.side_effect = [True, RuntimeError("boom"), True]

        summary = orchestrator.run()

        assert (summary.created, summary.skipped, summary.failed) == (2, 0, 1)
        assert summary.failed_keys == [("C1", "U2")]

    def test_store_unavailable_mid_run_propagates(self):
        orchestrator, result_repo = make_orchestrator([make_row("U1"), make_row("U2")])
        result_repo.exists.side_effect = [False, StoreUnavailableError("x.db", "disk I/O error")]

        with pytest.raises(StoreUnavailableError):
            orchestrator.run()

    def test_store_unavailable_in_parallel_propagates(self):
        orchestrator, result_repo = make_orchestrator([make_row(f"U{i}") for i in range(5)], workers=2)
        result_repo.exists.side_effect = StoreUnavailableError("x.db", "disk I/O error")

        with pytest.raises(StoreUnavailableError):
            orchestrator.run()

    def test_stop_between_records(self):
        orchestrator, result_repo = make_orchestrator([make_row("U1"), make_row("U2"), make_row("U3")])

        def insert_then_stop(result):
            orchestrator.stop()
            return True

        result_repo.insert_if_absent.side_effect = insert_then_stop

        summary = orchestrator.run()

        assert summary.created == 1
        assert summary.stopped is True
        assert result_repo.insert_if_absent.call_count == 1

    def test_process_record_returns_terminal_state(self):
        orchestrator, result_repo = make_orchestrator([])
        result_repo.exists.return_value = True
        assert orchestrator.process_record(make_row("U1")) == RecordState.SKIPPED
        result_repo.insert_if_absent.assert_not_called()

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            make_orchestrator([], workers=0)
