# gst_compliance/domain/services/compliance_score.py
"""
Filing compliance score (0-100).

A product heuristic, not GST policy: start at 100, subtract for overdue
and late returns, add a capped bonus for on-time returns. All weights
and rating thresholds live in ``ScoreWeights`` and can be overridden
through settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

SUGGESTION_OVERDUE = "File overdue returns immediately"
SUGGESTION_LATE = "Try to file before due dates"
SUGGESTION_OK = "Keep up the good work!"


@dataclass(frozen=True)
class ScoreWeights:
    base: int = 100
    overdue_penalty: int = 15
    late_penalty: int = 5
    on_time_bonus: int = 2
    bonus_cap: int = 10
    excellent_threshold: int = 90
    good_threshold: int = 70
    fair_threshold: int = 50

    @classmethod
    def from_settings(cls) -> "ScoreWeights":
        from gst_compliance.core.config import settings

        return cls(
            overdue_penalty=settings.SCORE_OVERDUE_PENALTY,
            late_penalty=settings.SCORE_LATE_PENALTY,
            on_time_bonus=settings.SCORE_ON_TIME_BONUS,
            bonus_cap=settings.SCORE_BONUS_CAP,
            excellent_threshold=settings.SCORE_EXCELLENT_THRESHOLD,
            good_threshold=settings.SCORE_GOOD_THRESHOLD,
            fair_threshold=settings.SCORE_FAIR_THRESHOLD,
        )


@dataclass
class ComplianceScore:
    score: int
    rating: str
    overdue_count: int = 0
    late_count: int = 0
    on_time_count: int = 0
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "rating": self.rating,
            "overdue_count": self.overdue_count,
            "late_count": self.late_count,
            "on_time_count": self.on_time_count,
            "suggestions": list(self.suggestions),
        }


def is_overdue(filing: Any, today: date) -> bool:
    return filing.status == "pending" and filing.due_date < today


def is_filed_late(filing: Any) -> bool:
    return filing.status == "filed" and filing.filed_date is not None and filing.filed_date > filing.due_date


def is_filed_on_time(filing: Any) -> bool:
    return filing.status == "filed" and filing.filed_date is not None and filing.filed_date <= filing.due_date


def rating_for(score: int, weights: ScoreWeights) -> str:
    if score >= weights.excellent_threshold:
        return "Excellent"
    if score >= weights.good_threshold:
        return "Good"
    if score >= weights.fair_threshold:
        return "Fair"
    return "Poor"


def score_filings(
    filings: Iterable[Any],
    today: date | None = None,
    weights: ScoreWeights | None = None,
) -> ComplianceScore:
    """Score a business's filing history.

    ``filings`` are objects with ``status`` ("pending"/"filed"),
    ``due_date`` and ``filed_date`` (dates).
    """
    today = today or date.today()
    weights = weights or ScoreWeights()
    filings = list(filings)

    overdue = sum(1 for f in filings if is_overdue(f, today))
    late = sum(1 for f in filings if is_filed_late(f))
    on_time = sum(1 for f in filings if is_filed_on_time(f))

    score = weights.base
    score -= overdue * weights.overdue_penalty
    score -= late * weights.late_penalty
    score += min(on_time * weights.on_time_bonus, weights.bonus_cap)
    score = max(0, min(100, score))

    if overdue:
        suggestions = [SUGGESTION_OVERDUE]
    elif late:
        suggestions = [SUGGESTION_LATE]
    else:
        suggestions = [SUGGESTION_OK]

    return ComplianceScore(
        score=score,
        rating=rating_for(score, weights),
        overdue_count=overdue,
        late_count=late,
        on_time_count=on_time,
        suggestions=suggestions,
    )
