"""Difficulty-aware hand selection for quiz rounds.

Candidates are filtered by boundary distance and an "obvious hand" policy,
then drawn with a bias toward hands that continue (raise/call).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from ..core.hands import generate_all_hands, random_hand
from ..core.models import Category
from ..data.range_table import RangeTable
from .boundary import HandScore, score_all_hands
from .resolver import RangeResolver, default_resolver

__all__ = [
    "DEFAULT_DIFFICULTY",
    "DIFFICULTY_PROFILES",
    "IN_RANGE_SHARE",
    "DifficultyProfile",
    "DifficultySampler",
    "candidate_pool",
    "get_smart_random_hand",
    "resolve_profile",
]

logger = logging.getLogger(__name__)

IN_RANGE_SHARE = 0.65


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    max_distance: float
    include_obvious: bool

    def admits(self, score: HandScore) -> bool:
        if score.distance > self.max_distance:
            return False
        return self.include_obvious or not score.is_obvious


DEFAULT_DIFFICULTY = "medium"

DIFFICULTY_PROFILES = MappingProxyType(
    {
        "easy": DifficultyProfile("easy", float("inf"), True),
        "medium": DifficultyProfile("medium", 5, False),
        "hard": DifficultyProfile("hard", 2, False),
    }
)


def resolve_profile(difficulty: str | None) -> DifficultyProfile:
    key = (difficulty or DEFAULT_DIFFICULTY).strip().lower()
    return DIFFICULTY_PROFILES.get(key, DIFFICULTY_PROFILES[DEFAULT_DIFFICULTY])


Stage = tuple[str, Callable[[HandScore], bool]]


def _stages(profile: DifficultyProfile) -> list[Stage]:
    fallback = DIFFICULTY_PROFILES["medium"]
    return [
        (profile.name, profile.admits),
        ("medium", fallback.admits),
        ("non_obvious", lambda score: not score.is_obvious),
        ("any", lambda score: True),
    ]


def candidate_pool(scores: Sequence[HandScore], profile: DifficultyProfile) -> list[HandScore]:
    """First non-empty pool along the fallback cascade; empty only when ``scores`` is."""

    for stage, predicate in _stages(profile):
        pool = [score for score in scores if predicate(score)]
        if pool:
            if stage != profile.name:
                logger.debug("Sampler fell back", extra={"requested": profile.name, "stage": stage})
            return pool
    return []


class DifficultySampler:
    def __init__(self, resolver: RangeResolver, rng: random.Random | None = None) -> None:
        self.resolver = resolver
        self.rng = rng or random.Random()

    def score(self, category: Category | str, scenario_key: str) -> list[HandScore]:
        return score_all_hands(category, scenario_key, generate_all_hands(), resolver=self.resolver)

    def get_smart_random_hand(
        self,
        category: Category | str,
        scenario_key: str,
        difficulty: str = DEFAULT_DIFFICULTY,
    ) -> str:
        profile = resolve_profile(difficulty)
        pool = candidate_pool(self.score(category, scenario_key), profile)
        if not pool:
            return random_hand(self.rng)

        in_range = [score for score in pool if not score.is_fold]
        folds = [score for score in pool if score.is_fold]

        if self.rng.random() < IN_RANGE_SHARE and in_range:
            return self.rng.choice(in_range).hand
        if folds:
            return self.rng.choice(folds).hand
        return self.rng.choice(pool).hand


def get_smart_random_hand(
    category: Category | str,
    scenario_key: str,
    difficulty: str = DEFAULT_DIFFICULTY,
    *,
    table: RangeTable | None = None,
    rng: random.Random | None = None,
) -> str:
    sampler = DifficultySampler(default_resolver(table), rng=rng)
    return sampler.get_smart_random_hand(category, scenario_key, difficulty)
