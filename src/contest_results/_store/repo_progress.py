# Area: Store
"""
contest_results._store.repo_progress — Progress Repository
==========================================================

Repository for the contest_progress table. The backfill only reads it;
save_progress() exists for seeding and tests.
"""

import json
from typing import Any, Dict, List, Optional

from .._engine.enums import ProgressStatus
from .._engine.models import Progress
from .database import BaseRepository


def parse_progress(row: Dict[str, Any]) -> Progress:
    """
    Build a validated Progress from a raw contest_progress row.

    Raises:
        ValueError: If the row is malformed (bad JSON or failed validation)
    """
    data = dict(row)
    data.pop("created_at", None)
    answers = data.get("mcq_answers")
    if isinstance(answers, str):
        data["mcq_answers"] = json.loads(answers)
    return Progress.model_validate(data)


class ProgressRepository(BaseRepository):
    """Repository for contest_progress table."""

    def save_progress(self, progress: Progress) -> None:
        """
        Save a progress record, replacing any previous one for the key.

        Args:
            progress: Progress to store
        """
        data = progress.model_dump(mode="json")
        query = """
            INSERT OR REPLACE INTO contest_progress
            (contest_id, user_id, status, started_at, submitted_at,
             total_time_spent, mcq_answers)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """
        self._execute(query, (
            data["contest_id"],
            data["user_id"],
            data["status"],
            data["started_at"],
            data["submitted_at"],
            data["total_time_spent"],
            json.dumps(data["mcq_answers"]),
        ))

    def get_submitted(self) -> List[Dict[str, Any]]:
        """
        Get all SUBMITTED progress rows, unparsed.

        Rows are returned raw so a single malformed record fails on its
        own when the orchestrator parses it.

        Returns:
            List of row dicts ordered by contest then user
        """
        query = """
            SELECT * FROM contest_progress
            WHERE status = ?
            ORDER BY contest_id, user_id
        """
        return self._execute(query, (ProgressStatus.SUBMITTED.value,), fetch=True) or []

    def get_progress(self, contest_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the raw progress row for one key, or None."""
        query = "SELECT * FROM contest_progress WHERE contest_id = ? AND user_id = ?"
        return self._execute_one(query, (contest_id, user_id))
