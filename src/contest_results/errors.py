"""
contest_results.errors — Custom exception classes
==================================================

Defines the exception hierarchy for the aggregation engine.
Each exception stores its context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class ContestResultsError(Exception):
    """Base exception for all contest_results package errors."""
    pass


class StoreUnavailableError(ContestResultsError):
    """Raised when the upstream store cannot be reached.

    Fatal to a backfill run: the orchestrator never swallows it.
    """

    def __init__(self, db_path: str, reason: str):
        self.db_path = db_path
        self.reason = reason
        super().__init__(f"Store at '{db_path}' is unavailable: {reason}")

    def context(self) -> Dict[str, Any]:
        return {"error_type": "STORE_UNAVAILABLE", "db_path": self.db_path, "reason": self.reason}


class CompilationError(ContestResultsError):
    """Raised when a single Progress record cannot be compiled into a Result."""

    def __init__(
        self,
        contest_id: Optional[str],
        user_id: Optional[str],
        reason: str,
    ):
        self.contest_id = contest_id
        self.user_id = user_id
        self.reason = reason
        super().__init__(
            f"Cannot compile result for contest={contest_id} user={user_id}: {reason}"
        )

    def context(self) -> Dict[str, Any]:
        return {
            "error_type": "COMPILATION_FAILURE",
            "contest_id": self.contest_id,
            "user_id": self.user_id,
            "reason": self.reason,
        }


class ConfigError(ContestResultsError, ValueError):
    """Raised when configuration values are missing or invalid."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid config '{key}': {reason}")
