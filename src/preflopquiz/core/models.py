from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ActionKind(str, Enum):
    FOLD = "Fold"
    CALL = "Call"
    RAISE = "Raise"
    THREE_BET = "3bet"
    FOUR_BET = "4bet"
    FIVE_BET = "5bet"

    def __str__(self) -> str:
        return self.value


# Highest tier first; a scenario models at most one of these.
RAISE_TIERS: tuple[ActionKind, ...] = (ActionKind.FIVE_BET, ActionKind.FOUR_BET, ActionKind.THREE_BET)


class Category(str, Enum):
    OPEN = "open_ranges"
    VS_OPEN = "vs_open_ranges"
    VS_3BET = "vs_3bet_ranges"
    COLD_4BET = "cold_4bet_ranges"
    VS_4BET = "vs_4bet_ranges"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Category) -> Category | None:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Decision:
    action: ActionKind
    alt_action: ActionKind | None = None
    is_mixed: bool = False

    def __post_init__(self) -> None:
        if self.is_mixed != (self.alt_action is not None):
            raise ValueError("alt_action must be set exactly when the decision is mixed")

    def accepts(self, answer: ActionKind | str) -> bool:
        if answer == self.action:
            return True
        return self.is_mixed and answer == self.alt_action

    def display(self) -> str:
        if self.is_mixed and self.alt_action is not None:
            return f"{self.action.value}/{self.alt_action.value}"
        return self.action.value


FOLD_DECISION = Decision(ActionKind.FOLD)


@dataclass(frozen=True)
class FlatRange:
    """Open-raise range: members raise, everything else folds."""

    hands: frozenset[str]


@dataclass(frozen=True)
class TieredRange:
    """Facing-action range with a single raise tier plus optional call/mixed sets."""

    raise_tier: ActionKind | None
    raise_hands: frozenset[str] = frozenset()
    call_hands: frozenset[str] = frozenset()
    mixed_hands: frozenset[str] = frozenset()


ScenarioRange = Union[FlatRange, TieredRange]
