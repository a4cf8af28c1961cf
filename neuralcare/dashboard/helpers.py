"""
Pure aggregation helpers for the dashboard.

Rounding is half-up, so 72.5 shows as 73 rather than Python's banker's 72.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Iterable

from django.utils import timezone

from neuralcare.assessments.engine import round_half_up
from neuralcare.assessments.helpers.history import DESTRUCTIVE
from neuralcare.assessments.helpers.history import SUCCESS
from neuralcare.assessments.helpers.history import WARNING
from neuralcare.assessments.helpers.history import score_variant

TIME_RANGES = (7, 30, 90)
DEFAULT_TIME_RANGE = 7


@dataclass(frozen=True, slots=True)
class Kpi:
    label: str
    value: int | float
    unit: str
    variant: str


def parse_time_range(raw) -> int:
    """Return one of TIME_RANGES; anything else falls back to the default."""
    try:
        days = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIME_RANGE
    return days if days in TIME_RANGES else DEFAULT_TIME_RANGE


def range_start(days: int, today: datetime.date | None = None) -> datetime.date:
    today = today or timezone.localdate()
    return today - datetime.timedelta(days=days)


def _round_to(value: float, places: int) -> float:
    factor = 10**places
    return round_half_up(value * factor) / factor


def sleep_variant(hours: float) -> str:
    return SUCCESS if hours >= 7 else WARNING


def reaction_variant(ms: int) -> str:
    if ms <= 300:
        return SUCCESS
    if ms <= 400:
        return WARNING
    return DESTRUCTIVE


def tremor_variant(level: float) -> str:
    if level <= 0.3:
        return SUCCESS
    if level <= 0.6:
        return WARNING
    return DESTRUCTIVE


def severity_variant(severity: str) -> str:
    if severity == "high":
        return DESTRUCTIVE
    if severity == "medium":
        return WARNING
    return SUCCESS


def compute_kpis(measurements: Iterable) -> list[Kpi]:
    """
    Average a patient's measurements into the four dashboard KPIs.

    Returns an empty list when there are no measurements.
    """
    measurements = list(measurements)
    if not measurements:
        return []
    count = len(measurements)
    avg_score = sum(float(m.cognitive_score) for m in measurements) / count
    avg_sleep = sum(float(m.sleep_hours) for m in measurements) / count
    avg_reaction = sum(m.reaction_ms for m in measurements) / count
    avg_tremor = sum(float(m.tremor_level) for m in measurements) / count

    cognitive_score = round_half_up(avg_score)
    sleep_quality = _round_to(avg_sleep, 1)
    reaction_time = round_half_up(avg_reaction)
    tremor_index = _round_to(avg_tremor, 2)
    return [
        Kpi("Cognitive Score", cognitive_score, "/100", score_variant(cognitive_score)),
        Kpi("Sleep Quality", sleep_quality, "h", sleep_variant(sleep_quality)),
        Kpi("Reaction Time", reaction_time, "ms", reaction_variant(reaction_time)),
        Kpi("Tremor Index", tremor_index, "", tremor_variant(tremor_index)),
    ]


def risk_counts(risk_levels: Iterable[str | None]) -> dict[str, int]:
    """Count patients per risk level; unassessed patients go under ``unassessed``."""
    counts = {"low": 0, "medium": 0, "high": 0, "unassessed": 0}
    for level in risk_levels:
        counts[level if level in counts else "unassessed"] += 1
    return counts
