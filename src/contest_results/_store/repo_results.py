# Area: Store
"""
contest_results._store.repo_results — Results Repository
========================================================

Repository for the results table. Results are write-once: the only
write is an insert that leaves an existing row for the same
(contest_id, user_id) untouched.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from .._engine.enums import ProgressStatus
from .._engine.result import CodingSubmissionDetail, McqAnswerDetail, Result
from .database import BaseRepository


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def row_to_result(row: Dict[str, Any]) -> Result:
    """Rebuild a Result from a results row."""
    mcq_details = tuple(
        McqAnswerDetail(
            question_id=d["question_id"],
            selected_option_indices=frozenset(d["selected_option_indices"]),
            is_correct=d["is_correct"],
            marks_awarded=d["marks_awarded"],
            time_spent_seconds=d.get("time_spent_seconds", 0),
        )
        for d in json.loads(row["mcq_answer_details"])
    )
    coding_details = tuple(
        CodingSubmissionDetail(**d) for d in json.loads(row["coding_submission_details"])
    )
    return Result(
        contest_id=row["contest_id"],
        user_id=row["user_id"],
        mcq_score=row["mcq_score"],
        mcq_answer_details=mcq_details,
        coding_score=row["coding_score"],
        coding_submission_details=coding_details,
        total_score=row["total_score"],
        time_taken_seconds=row["time_taken_seconds"],
        started_at=_parse_datetime(row["started_at"]),
        submitted_at=_parse_datetime(row["submitted_at"]),
        status=ProgressStatus(row["status"]),
    )


class ResultRepository(BaseRepository):
    """
    Repository for results table.

    The UNIQUE(contest_id, user_id) constraint is the only guard
    concurrent backfill workers rely on.
    """

    def insert_if_absent(self, result: Result) -> bool:
        """
        Insert a compiled Result unless one already exists for its key.

        Args:
            result: The compiled Result

        Returns:
            True if inserted, False if the key was already present
        """
        data = result.to_dict()
        query = """
            INSERT OR IGNORE INTO results
            (contest_id, user_id, mcq_score, mcq_answer_details,
             coding_score, coding_submission_details, total_score,
             time_taken_seconds, started_at, submitted_at, status)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """
        inserted = self._execute_rowcount(query, (
            data["contest_id"],
            data["user_id"],
            data["mcq_score"],
            json.dumps(data["mcq_answer_details"]),
            data["coding_score"],
            json.dumps(data["coding_submission_details"]),
            data["total_score"],
            data["time_taken_seconds"],
            data["started_at"],
            data["submitted_at"],
            data["status"],
        ))
        return inserted > 0

    def exists(self, contest_id: str, user_id: str) -> bool:
        """Check if a Result exists for the key."""
        query = "SELECT 1 FROM results WHERE contest_id = ? AND user_id = ?"
        return self._execute_one(query, (contest_id, user_id)) is not None

    def get_result(self, contest_id: str, user_id: str) -> Optional[Result]:
        """
        Get the Result for one key.

        Returns:
            The stored Result or None if not found
        """
        query = "SELECT * FROM results WHERE contest_id = ? AND user_id = ?"
        row = self._execute_one(query, (contest_id, user_id))
        return row_to_result(row) if row else None

    def get_results_for_contest(self, contest_id: str) -> List[Result]:
        """Get all Results of a contest, leaderboard order."""
        query = """
            SELECT * FROM results WHERE contest_id = ?
            ORDER BY total_score DESC, time_taken_seconds ASC
        """
        rows = self._execute(query, (contest_id,), fetch=True) or []
        return [row_to_result(row) for row in rows]

    def get_all_results(self) -> List[Result]:
        """Get every stored Result."""
        rows = self._execute("SELECT * FROM results ORDER BY contest_id, user_id", fetch=True) or []
        return [row_to_result(row) for row in rows]

    def count(self) -> int:
        row = self._execute_one("SELECT COUNT(*) AS n FROM results")
        return row["n"] if row else 0
