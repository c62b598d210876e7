# Area: Shared
"""
contest_results.cli — Command-line interface
============================================

Provides the CLI entry point for the backfill job.

Usage:
    python -m contest_results init-db --db contest.db
    python -m contest_results backfill --db contest.db --workers 4
    python -m contest_results results --contest C1

Settings come from (lowest to highest priority):
    1. Built-in defaults
    2. A .env file / environment (CONTEST_RESULTS_DB, CONTEST_RESULTS_WORKERS,
       CONTEST_RESULTS_LOG_FILE, CONTEST_RESULTS_LOG_LEVEL)
    3. CLI flags

Exit codes for backfill: 0 all records handled, 1 some records failed,
2 the run could not proceed (bad config or store unavailable).
"""

import argparse
import json
import logging
import signal
import sys
from typing import Any, Dict, List, Optional

from ._config import load_config, validate_config
from ._engine.leaderboard import contest_stats, rank_results
from ._engine.orchestrator import BackfillOrchestrator
from ._shared.logging_config import log_fatal_error, setup_logging
from ._store.database import init_database
from ._store.repo_results import ResultRepository
from .errors import ConfigError, StoreUnavailableError

EXIT_OK = 0
EXIT_RECORDS_FAILED = 1
EXIT_CANNOT_RUN = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="contest_results",
        description="Compile contest Results from submitted progress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m contest_results init-db --db contest.db
  python -m contest_results backfill --db contest.db
  python -m contest_results backfill --workers 4 --verbose
  python -m contest_results results --contest C1 --json
        """,
    )
    parser.add_argument("--db", type=str, help="Path to the SQLite database")
    parser.add_argument("--env-file", type=str, help="Path to a .env file")
    parser.add_argument("--log-file", type=str, help="Path to the JSON log file")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database schema")

    backfill = sub.add_parser("backfill", help="Create missing Results")
    backfill.add_argument("--workers", type=int, help="Parallel workers (default: 1)")

    results = sub.add_parser("results", help="Print ranked Results of a contest")
    results.add_argument("--contest", type=str, required=True, help="Contest ID")
    results.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge CLI flags over environment config and validate."""
    config = load_config(args.env_file)
    if args.db:
        config["db_path"] = args.db
    if args.log_file:
        config["log_file"] = args.log_file
    if getattr(args, "workers", None) is not None:
        config["workers"] = args.workers
    if args.verbose:
        config["log_level"] = "DEBUG"
    return validate_config(config)


def run_backfill(config: Dict[str, Any]) -> int:
    """Run one backfill pass and print the summary report."""
    orchestrator = BackfillOrchestrator.from_db_path(config["db_path"], workers=config["workers"])

    def _request_stop(signum, frame):
        logging.getLogger("contest_results").warning("Stop requested, finishing current records")
        orchestrator.stop()

    previous = signal.signal(signal.SIGINT, _request_stop)
    try:
        summary = orchestrator.run()
    except StoreUnavailableError as e:
        log_fatal_error(e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANNOT_RUN
    finally:
        signal.signal(signal.SIGINT, previous)

    report = summary.as_report()
    if summary.stopped:
        report["stopped"] = True
    print(json.dumps(report))
    return EXIT_RECORDS_FAILED if summary.failed else EXIT_OK


def print_results(config: Dict[str, Any], contest_id: str, as_json: bool) -> int:
    """Print the ranked Results of one contest."""
    try:
        results = ResultRepository(config["db_path"]).get_results_for_contest(contest_id)
    except StoreUnavailableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANNOT_RUN

    ranked = rank_results(results)
    stats = contest_stats(results)
    if as_json:
        print(json.dumps({
            "contest_id": contest_id,
            "submitted": stats.submitted,
            "average_score": stats.average_score,
            "leaderboard": [dict(r.result.to_dict(), rank=r.rank) for r in ranked],
        }, indent=2))
        return EXIT_OK

    print(f"Contest {contest_id}: {stats.submitted} submitted, average {stats.average_score}")
    print(f"{'RANK':>4}  {'USER':<24} {'MCQ':>8} {'CODING':>8} {'TOTAL':>8} {'TIME(s)':>8}")
    for r in ranked:
        res = r.result
        print(f"{r.rank:>4}  {res.user_id:<24} {res.mcq_score:>8} {res.coding_score:>8} "
              f"{res.total_score:>8} {res.time_taken_seconds:>8}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANNOT_RUN

    setup_logging(config["log_file"], getattr(logging, config["log_level"]))

    if args.command == "init-db":
        init_database(config["db_path"])
        print(f"Initialized {config['db_path']}")
        return EXIT_OK
    if args.command == "backfill":
        return run_backfill(config)
    return print_results(config, args.contest, args.json)
