"""
contest_results — Contest Result Aggregation Engine
===================================================

Compiles one authoritative, write-once Result per (contest, user) from
submitted contest progress, MCQ answers and judged coding submissions.

Quick Start:
    from contest_results import BackfillOrchestrator, init_database
    init_database("contest.db")
    summary = BackfillOrchestrator.from_db_path("contest.db").run()
    print(summary.as_report())

Pure scoring (no store):
    from contest_results import reconcile_mcq, reconcile_coding, compile_result
    result = compile_result(progress, reconcile_mcq(answers, lookup),
                            reconcile_coding(attempts))
"""

from ._engine import (
    ProgressStatus,
    Verdict,
    RecordState,
    GradableMCQ,
    McqAnswer,
    McqOption,
    Progress,
    SubmissionAttempt,
    CodingSubmissionDetail,
    McqAnswerDetail,
    Result,
    RunSummary,
    evaluate_selection,
    select_best_attempts,
    reconcile_mcq,
    reconcile_coding,
    compile_result,
    rank_results,
    contest_stats,
)
from ._engine.orchestrator import BackfillOrchestrator
from ._store import (
    init_database,
    ProgressRepository,
    McqRepository,
    SubmissionRepository,
    ResultRepository,
)
from ._shared.logging_config import setup_logging
from .errors import (
    ContestResultsError,
    StoreUnavailableError,
    CompilationError,
    ConfigError,
)

__all__ = [
    # Orchestration
    "BackfillOrchestrator",
    "init_database",
    "setup_logging",
    # Repositories
    "ProgressRepository",
    "McqRepository",
    "SubmissionRepository",
    "ResultRepository",
    # Models
    "ProgressStatus",
    "Verdict",
    "RecordState",
    "GradableMCQ",
    "McqAnswer",
    "McqOption",
    "Progress",
    "SubmissionAttempt",
    "CodingSubmissionDetail",
    "McqAnswerDetail",
    "Result",
    "RunSummary",
    # Engine functions
    "evaluate_selection",
    "select_best_attempts",
    "reconcile_mcq",
    "reconcile_coding",
    "compile_result",
    "rank_results",
    "contest_stats",
    # Errors
    "ContestResultsError",
    "StoreUnavailableError",
    "CompilationError",
    "ConfigError",
]
__version__ = "1.0.0"
