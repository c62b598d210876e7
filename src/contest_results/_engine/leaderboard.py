# Area: Engine
"""
contest_results._engine.leaderboard — Contest Ranking
=====================================================

Read-only ranking and statistics over compiled Results. Ranks are
computed on demand and never written back to a Result.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .result import Result, Score
from .totals import sum_scores


@dataclass(frozen=True)
class RankedResult:
    rank: int
    result: Result


@dataclass(frozen=True)
class ContestStats:
    submitted: int
    average_score: Score


def rank_results(results: Iterable[Result]) -> List[RankedResult]:
    """
    Rank results by total score (desc), then time taken (asc).

    Rows tied on both keys share a rank; the next distinct row is
    ranked by its 1-based position (1, 2, 2, 4).
    """
    ordered = sorted(results, key=lambda r: (-r.total_score, r.time_taken_seconds))
    ranked: List[RankedResult] = []
    for i, result in enumerate(ordered):
        if i > 0:
            prev = ordered[i - 1]
            if (result.total_score == prev.total_score
                    and result.time_taken_seconds == prev.time_taken_seconds):
                ranked.append(RankedResult(rank=ranked[-1].rank, result=result))
                continue
        ranked.append(RankedResult(rank=i + 1, result=result))
    return ranked


def contest_stats(results: Iterable[Result]) -> ContestStats:
    """Submitted count and mean total score (0 for an empty contest)."""
    scores = [r.total_score for r in results]
    if not scores:
        return ContestStats(submitted=0, average_score=0)
    return ContestStats(submitted=len(scores), average_score=sum_scores(scores) / len(scores))
