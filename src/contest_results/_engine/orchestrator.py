# Area: Engine
"""Backfill orchestrator — compiles a Result for every submitted Progress."""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from ..errors import StoreUnavailableError
from .._store.repo_mcqs import McqRepository
from .._store.repo_progress import ProgressRepository, parse_progress
from .._store.repo_results import ResultRepository
from .._store.repo_submissions import SubmissionRepository
from .coding_reconciler import reconcile_coding
from .enums import RecordEvent, RecordState
from .mcq_reconciler import reconcile_mcq
from .record_state import RecordStateMachine
from .result import Result, RunSummary
from .result_compiler import compile_result

logger = logging.getLogger("contest_results.engine.orchestrator")
Row = Dict[str, Any]


class BackfillOrchestrator:
    def __init__(self, progress_repo: ProgressRepository, mcq_repo: McqRepository,
                 submission_repo: SubmissionRepository, result_repo: ResultRepository,
                 workers: int = 1):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.progress_repo, self.mcq_repo = progress_repo, mcq_repo
        self.submission_repo, self.result_repo = submission_repo, result_repo
        self.workers = workers
        self._stop_requested = threading.Event()
    @classmethod
    def from_db_path(cls, db_path: str, workers: int = 1) -> "BackfillOrchestrator":
        return cls(ProgressRepository(db_path), McqRepository(db_path),
                   SubmissionRepository(db_path), ResultRepository(db_path), workers=workers)
    def stop(self) -> None:
        """Request a clean stop; records already started still finish."""
        self._stop_requested.set()
    @property
    def stop_requested(self) -> bool:
        return self._stop_requested.is_set()
    def run(self) -> RunSummary:
        """Run one backfill pass. StoreUnavailableError aborts the run."""
        self._stop_requested.clear()
        rows = self.progress_repo.get_submitted()
        logger.info("Found %d submitted progress records", len(rows))
        summary = RunSummary()
        if self.workers == 1:
            self._run_serial(rows, summary)
        else:
            self._run_parallel(rows, summary)
        logger.info("Backfill done: created=%d skipped=%d failed=%d%s", summary.created,
                    summary.skipped, summary.failed, " (stopped early)" if summary.stopped else "")
        return summary
    def _run_serial(self, rows: List[Row], summary: RunSummary) -> None:
        for row in rows:
            if self.stop_requested:
                summary.stopped = True
                return
            self._count(summary, row, self.process_record(row))
    def _run_parallel(self, rows: List[Row], summary: RunSummary) -> None:
        pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="backfill")
        try:
            futures = [pool.submit(self._process_unless_stopped, row) for row in rows]
            for row, future in zip(rows, futures):
                state = future.result()
                if state is None:
                    summary.stopped = True
                else:
                    self._count(summary, row, state)
        except StoreUnavailableError:
            self._stop_requested.set()
            raise
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
    def _process_unless_stopped(self, row: Row) -> Optional[RecordState]:
        if self.stop_requested:
            return None
        return self.process_record(row)
    @staticmethod
    def _count(summary: RunSummary, row: Row, state: RecordState) -> None:
        if state == RecordState.CREATED:
            summary.created += 1
        elif state == RecordState.SKIPPED:
            summary.skipped += 1
        elif state == RecordState.FAILED:
            summary.failed += 1
            summary.failed_keys.append((row.get("contest_id"), row.get("user_id")))
    def process_record(self, row: Row) -> RecordState:
        """Drive one progress row to SKIPPED, CREATED or FAILED."""
        contest_id, user_id = row.get("contest_id"), row.get("user_id")
        record = RecordStateMachine(contest_id, user_id)
        try:
            if self.result_repo.exists(contest_id, user_id):
                logger.debug("Result exists for contest=%s user=%s, skipping", contest_id, user_id)
                return record.transition(RecordEvent.RESULT_EXISTS)
            result = self.compile_record(row)
            if not self.result_repo.insert_if_absent(result):
                logger.info("Result for contest=%s user=%s created concurrently, skipping",
                            contest_id, user_id)
                return record.transition(RecordEvent.INSERT_CONFLICT)
        except StoreUnavailableError:
            raise
        except Exception:
            logger.error("Failed to compile result for contest=%s user=%s",
                         contest_id, user_id, exc_info=True)
            return record.transition(RecordEvent.ERROR)
        logger.info("Created result for contest=%s user=%s (total=%s)",
                    contest_id, user_id, result.total_score)
        return record.transition(RecordEvent.RESULT_INSERTED)
    def compile_record(self, row: Row) -> Result:
        """Parse, reconcile and compile one progress row without persisting."""
        progress = parse_progress(row)
        mcq = reconcile_mcq(progress.mcq_answers, self.mcq_repo.get_mcq)
        attempts = self.submission_repo.get_accepted(progress.user_id, progress.contest_id)
        coding = reconcile_coding(attempts)
        return compile_result(progress, mcq, coding)
