from __future__ import annotations

from dataclasses import dataclass

from ..core.hands import RANKS, hand_at
from ..core.models import Category, Decision
from .resolver import RangeResolver

__all__ = ["ChartCell", "range_chart"]


@dataclass(frozen=True)
class ChartCell:
    hand: str
    decision: Decision


def range_chart(resolver: RangeResolver, category: Category | str, scenario_key: str) -> list[list[ChartCell]]:
    """13x13 grid of decisions, rows and columns ordered A..2."""

    size = len(RANKS)
    return [
        [
            ChartCell(hand=hand, decision=resolver.get_correct_action(hand, category, scenario_key))
            for hand in (hand_at(row, col) for col in range(size))
        ]
        for row in range(size)
    ]
