"""
Presentation helpers for a patient's test history.

Pure functions: they take already-fetched results and return plain data for the
templates, so they can be unit-tested without the database.
"""
from __future__ import annotations

from typing import Iterable

SUCCESS = "success"
WARNING = "warning"
DESTRUCTIVE = "destructive"

TREND_UP = "up"
TREND_DOWN = "down"
TREND_STABLE = "stable"


def score_variant(score: int) -> str:
    """Badge colour for a 0-100 score."""
    if score >= 80:
        return SUCCESS
    if score >= 60:
        return WARNING
    return DESTRUCTIVE


def trend_between(current: int, previous: int | None) -> str | None:
    if previous is None:
        return None
    if current > previous:
        return TREND_UP
    if current < previous:
        return TREND_DOWN
    return TREND_STABLE


def with_trends(results: Iterable, next_older=None) -> list[dict]:
    """
    Pair each result with its variant and the trend against the next older one.

    ``results`` must be ordered newest first. ``next_older`` is the result that
    follows the last one when ``results`` is a single page of a longer history;
    without it the oldest entry has no trend.
    """
    page = list(results)
    chain = page + [next_older] if next_older is not None else page
    rows = []
    for index, result in enumerate(page):
        older = chain[index + 1] if index + 1 < len(chain) else None
        rows.append(
            {
                "result": result,
                "variant": score_variant(result.score),
                "trend": trend_between(result.score, older.score if older is not None else None),
            }
        )
    return rows
