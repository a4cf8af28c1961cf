"""Derive clinician-facing insights from consecutive test scores."""
from __future__ import annotations

from dataclasses import dataclass

from neuralcare.patients.models import RiskLevel


@dataclass(frozen=True, slots=True)
class DerivedInsight:
    severity: str
    title: str
    body: str


def derive_score_insight(
    previous: int | None,
    current: int,
    threshold: int,
    test_label: str = "test",
) -> DerivedInsight | None:
    """
    Return an insight when ``current`` dropped by at least ``threshold`` points.

    A drop of twice the threshold or more is high severity, otherwise medium.
    No previous score, or a smaller drop, yields None.
    """
    if previous is None or threshold <= 0:
        return None
    drop = previous - current
    if drop < threshold:
        return None
    severity = RiskLevel.HIGH if drop >= 2 * threshold else RiskLevel.MEDIUM
    return DerivedInsight(
        severity=str(severity),
        title=f"{test_label} score dropped by {drop} points",
        body=(
            f"The latest {test_label} score was {current}/100, down from {previous}/100. "
            "Consider reviewing recent measurements and assigned exercises."
        ),
    )
