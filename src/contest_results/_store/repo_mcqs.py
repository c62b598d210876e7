# Area: Store
"""
contest_results._store.repo_mcqs — MCQ Repository
=================================================

Repository for the mcqs table. Lookups fail soft: a missing or
malformed question resolves to None so the reconciler can exclude it.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from .._engine.models import GradableMCQ
from .database import BaseRepository

logger = logging.getLogger("contest_results.store.mcqs")


class McqRepository(BaseRepository):
    """Repository for mcqs table."""

    def save_mcq(self, mcq: GradableMCQ, contest_id: Optional[str] = None) -> None:
        """
        Save a question with its options and marking scheme.

        Args:
            mcq: Question to store
            contest_id: Owning contest, None for library questions
        """
        query = """
            INSERT OR REPLACE INTO mcqs
            (id, contest_id, options, marks_on_correct, negative_marks_on_wrong)
            VALUES (?, ?, ?, ?, ?)
        """
        self._execute(query, (
            mcq.id,
            contest_id,
            json.dumps([opt.model_dump() for opt in mcq.options]),
            mcq.marks_on_correct,
            mcq.negative_marks_on_wrong,
        ))

    def get_mcq(self, mcq_id: str) -> Optional[GradableMCQ]:
        """
        Resolve a question by ID.

        Args:
            mcq_id: Question identifier

        Returns:
            The validated question, or None if it is missing or malformed
        """
        row = self._execute_one(
            "SELECT id, options, marks_on_correct, negative_marks_on_wrong FROM mcqs WHERE id = ?",
            (mcq_id,),
        )
        if row is None:
            return None
        try:
            row["options"] = json.loads(row["options"] or "[]")
            return GradableMCQ.model_validate(row)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Malformed question {mcq_id}: {e}")
            return None
