# Area: Store
"""
SQLite persistence for the aggregation engine.

This package contains:
- Schema initialization and connection handling
- Read repositories for progress, MCQs and submissions
- The write-once results repository
"""

from .database import init_database, get_connection, BaseRepository
from .repo_progress import ProgressRepository, parse_progress
from .repo_mcqs import McqRepository
from .repo_submissions import SubmissionRepository
from .repo_results import ResultRepository

__all__ = [
    "init_database",
    "get_connection",
    "BaseRepository",
    "ProgressRepository",
    "parse_progress",
    "McqRepository",
    "SubmissionRepository",
    "ResultRepository",
]
