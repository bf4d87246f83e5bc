"""Boundary scoring: how close each hand sits to a range's fold line.

Hands one rank (or one suitedness flip) away from the other side of the
range are the ones worth drilling. Scores are recomputed per request.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.hands import PAIR, RANK_VALUES, parse_hand
from ..core.models import ActionKind, Category
from .resolver import RangeResolver

__all__ = [
    "UNRELATED_DISTANCE",
    "HandScore",
    "hand_distance",
    "obvious_hands",
    "score_all_hands",
]

UNRELATED_DISTANCE = 10

_OBVIOUS_OPEN = frozenset({"AA", "KK", "QQ", "JJ", "TT", "AKs", "AKo", "AQs", "AQo", "AJs", "KQs"})
_OBVIOUS_3BET = frozenset({"AA", "KK", "QQ", "AKs", "AKo"})
_OBVIOUS_4BET = frozenset({"AA", "KK", "AKs", "AKo"})
_OBVIOUS_5BET = frozenset({"AA", "KK"})

_OBVIOUS_BY_CATEGORY: dict[Category, frozenset[str]] = {
    Category.OPEN: _OBVIOUS_OPEN,
    Category.VS_OPEN: _OBVIOUS_3BET,
    Category.VS_3BET: _OBVIOUS_4BET,
    Category.COLD_4BET: _OBVIOUS_4BET,
    Category.VS_4BET: _OBVIOUS_5BET,
}


@dataclass(frozen=True)
class HandScore:
    hand: str
    action: ActionKind
    distance: float
    is_obvious: bool
    is_fold: bool


def obvious_hands(category: Category | str) -> frozenset[str]:
    parsed = Category.parse(category)
    if parsed is None:
        return frozenset()
    return _OBVIOUS_BY_CATEGORY[parsed]


def hand_distance(hand_a: str, hand_b: str) -> int:
    """Heuristic rank distance between two hands; 0 only for identical hands."""

    a = parse_hand(hand_a)
    b = parse_hand(hand_b)

    if a.kind != b.kind:
        # AKs -> AKo is a one-step change; anything else is unrelated.
        if a.ranks == b.ranks:
            return 1
        return UNRELATED_DISTANCE

    high = abs(RANK_VALUES[a.rank1] - RANK_VALUES[b.rank1])
    if a.kind == PAIR:
        return high
    return high + abs(RANK_VALUES[a.rank2] - RANK_VALUES[b.rank2])


def _nearest(hand: str, others: Sequence[str]) -> float:
    if not others:
        return math.inf
    return float(min(hand_distance(hand, other) for other in others))


def score_all_hands(
    category: Category | str,
    scenario_key: str,
    all_hands: Iterable[str],
    *,
    resolver: RangeResolver,
) -> list[HandScore]:
    """Score every hand by its distance to the nearest hand on the other side of the range."""

    obvious = obvious_hands(category)
    in_range: list[tuple[str, ActionKind]] = []
    folds: list[str] = []
    for hand in all_hands:
        decision = resolver.get_correct_action(hand, category, scenario_key)
        if decision.action is ActionKind.FOLD:
            folds.append(hand)
        else:
            in_range.append((hand, decision.action))

    in_range_hands = [hand for hand, _ in in_range]
    scores: list[HandScore] = [
        HandScore(
            hand=hand,
            action=action,
            distance=_nearest(hand, folds),
            is_obvious=hand in obvious,
            is_fold=False,
        )
        for hand, action in in_range
    ]
    scores.extend(
        HandScore(
            hand=hand,
            action=ActionKind.FOLD,
            distance=_nearest(hand, in_range_hands),
            is_obvious=False,
            is_fold=True,
        )
        for hand in folds
    )
    return scores
