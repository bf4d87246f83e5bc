"""Canonical starting-hand notation.

A hand is one of the 169 preflop classes: a pocket pair ("AA"), a suited
holding ("AKs") or an offsuit holding ("AKo"). Tokens always list the higher
rank first and pairs never carry a suffix.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from functools import lru_cache

RANKS = "AKQJT98765432"
RANK_VALUES: dict[str, int] = {rank: 14 - idx for idx, rank in enumerate(RANKS)}

PAIR = "pair"
SUITED = "suited"
OFFSUIT = "offsuit"


@dataclass(frozen=True)
class HandShape:
    rank1: str
    rank2: str
    kind: str

    @property
    def ranks(self) -> tuple[str, str]:
        return self.rank1, self.rank2


@lru_cache(maxsize=1)
def generate_all_hands() -> tuple[str, ...]:
    """Return the 169 canonical hands: pairs first, then suited/offsuit by rank."""

    hands: list[str] = [rank + rank for rank in RANKS]
    for i, high in enumerate(RANKS):
        for low in RANKS[i + 1 :]:
            hands.append(f"{high}{low}s")
            hands.append(f"{high}{low}o")
    return tuple(hands)


@lru_cache(maxsize=1)
def _hand_set() -> frozenset[str]:
    return frozenset(generate_all_hands())


def is_valid_hand(token: object) -> bool:
    return isinstance(token, str) and token in _hand_set()


def random_hand(rng: random.Random | None = None) -> str:
    """Uniform draw over the hand universe."""

    local_rng = rng or random
    hands = generate_all_hands()
    return hands[local_rng.randrange(len(hands))]


@lru_cache(maxsize=256)
def parse_hand(hand: str) -> HandShape:
    if not is_valid_hand(hand):
        raise ValueError(f"invalid hand token: {hand!r}")
    if len(hand) == 2:
        return HandShape(hand[0], hand[1], PAIR)
    return HandShape(hand[0], hand[1], SUITED if hand[2] == "s" else OFFSUIT)


def hand_at(row: int, col: int) -> str:
    """Hand in a 13x13 chart cell: pairs on the diagonal, suited above, offsuit below."""

    if not (0 <= row < len(RANKS) and 0 <= col < len(RANKS)):
        raise ValueError("chart coordinates out of range")
    if row == col:
        return RANKS[row] * 2
    if row < col:
        return f"{RANKS[row]}{RANKS[col]}s"
    return f"{RANKS[col]}{RANKS[row]}o"
