# Area: Store
"""
contest_results._store.repo_submissions — Submissions Repository
================================================================

Repository for the submissions table written by the judging backend.
"""

import logging
from typing import List

from pydantic import ValidationError

from .._engine.enums import Verdict
from .._engine.models import SubmissionAttempt
from .database import BaseRepository

logger = logging.getLogger("contest_results.store.submissions")


class SubmissionRepository(BaseRepository):
    """Repository for submissions table."""

    def save_attempt(self, attempt: SubmissionAttempt) -> None:
        """
        Save a judged attempt.

        Args:
            attempt: Attempt to store
        """
        query = """
            INSERT OR REPLACE INTO submissions
            (id, user_id, contest_id, problem_id, verdict, score)
            VALUES (?, ?, ?, ?, ?, ?)
        """
        self._execute(query, (
            attempt.id,
            attempt.user_id,
            attempt.contest_id,
            attempt.problem_id,
            attempt.verdict.value,
            attempt.score,
        ))

    def get_accepted(self, user_id: str, contest_id: str) -> List[SubmissionAttempt]:
        """
        Get ACCEPTED attempts of one user in one contest.

        Malformed rows are logged and left out.

        Args:
            user_id: Participant identifier
            contest_id: Contest identifier

        Returns:
            Validated attempts in insertion order
        """
        query = """
            SELECT id, user_id, contest_id, problem_id, verdict, score
            FROM submissions
            WHERE user_id = ? AND contest_id = ? AND verdict = ?
            ORDER BY rowid
        """
        rows = self._execute(query, (user_id, contest_id, Verdict.ACCEPTED.value), fetch=True) or []
        attempts = []
        for row in rows:
            try:
                attempts.append(SubmissionAttempt.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Malformed submission {row.get('id')}: {e}")
        return attempts
