from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CategoryStats:
    answers: int
    hits: int

    @property
    def accuracy_pct(self) -> float:
        return accuracy_pct(self.hits, self.answers)


@dataclass(frozen=True)
class SummaryStats:
    answers: int
    hits: int
    accuracy_pct: float
    streak: int
    best_streak: int
    mixed_answers: int
    by_category: dict[str, CategoryStats] = field(default_factory=dict)


def accuracy_pct(hits: int, answers: int) -> float:
    if answers <= 0:
        return 0.0
    return 100.0 * hits / answers


def _streaks(records: Sequence[Mapping[str, Any]]) -> tuple[int, int]:
    current = 0
    best = 0
    for record in records:
        if record.get("correct"):
            current += 1
            best = max(best, current)
        else:
            current = 0
    return current, best


def summarize_records(records: Sequence[Mapping[str, Any]]) -> SummaryStats:
    """Aggregate answer records (oldest first) into session totals."""

    answers = len(records)
    hits = sum(1 for record in records if record.get("correct"))
    streak, best_streak = _streaks(records)

    per_category: dict[str, list[int]] = {}
    for record in records:
        bucket = per_category.setdefault(str(record.get("category", "")), [0, 0])
        bucket[0] += 1
        if record.get("correct"):
            bucket[1] += 1

    return SummaryStats(
        answers=answers,
        hits=hits,
        accuracy_pct=accuracy_pct(hits, answers),
        streak=streak,
        best_streak=best_streak,
        mixed_answers=sum(1 for record in records if record.get("mixed")),
        by_category={name: CategoryStats(answers=n, hits=h) for name, (n, h) in per_category.items()},
    )
