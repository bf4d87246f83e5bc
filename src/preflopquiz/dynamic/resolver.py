"""Hand + scenario to the accepted preflop action(s).

Missing range data never raises: an unknown category or scenario resolves to
a pure fold so the quiz loop keeps running on partial content.
"""

from __future__ import annotations

from ..core.models import (
    FOLD_DECISION,
    ActionKind,
    Category,
    Decision,
    FlatRange,
    TieredRange,
)
from ..data.range_table import RangeTable, get_range_table

__all__ = [
    "RangeResolver",
    "default_resolver",
    "get_correct_action",
    "get_correct_action_display",
    "is_answer_correct",
]


class RangeResolver:
    def __init__(self, table: RangeTable) -> None:
        self.table = table

    def get_correct_action(self, hand: str, category: Category | str, scenario_key: str) -> Decision:
        scenario = self.table.lookup(category, scenario_key)
        if scenario is None:
            return FOLD_DECISION
        if isinstance(scenario, FlatRange):
            return Decision(ActionKind.RAISE) if hand in scenario.hands else FOLD_DECISION
        return _resolve_tiered(hand, scenario)

    def is_answer_correct(
        self,
        user_answer: ActionKind | str,
        hand: str,
        category: Category | str,
        scenario_key: str,
    ) -> bool:
        return self.get_correct_action(hand, category, scenario_key).accepts(user_answer)

    def get_correct_action_display(self, hand: str, category: Category | str, scenario_key: str) -> str:
        return self.get_correct_action(hand, category, scenario_key).display()


def _resolve_tiered(hand: str, scenario: TieredRange) -> Decision:
    tier = scenario.raise_tier
    mixed = hand in scenario.mixed_hands

    if tier is not None and hand in scenario.raise_hands:
        if mixed:
            return Decision(tier, ActionKind.CALL, True)
        return Decision(tier)

    if hand in scenario.call_hands:
        if mixed and tier is not None:
            return Decision(ActionKind.CALL, tier, True)
        return Decision(ActionKind.CALL)

    # Listed only as mixed: treat as a raise/call split.
    if mixed and tier is not None:
        return Decision(tier, ActionKind.CALL, True)

    return FOLD_DECISION


def default_resolver(table: RangeTable | None = None) -> RangeResolver:
    return RangeResolver(table if table is not None else get_range_table())


def get_correct_action(
    hand: str,
    category: Category | str,
    scenario_key: str,
    *,
    table: RangeTable | None = None,
) -> Decision:
    return default_resolver(table).get_correct_action(hand, category, scenario_key)


def is_answer_correct(
    user_answer: ActionKind | str,
    hand: str,
    category: Category | str,
    scenario_key: str,
    *,
    table: RangeTable | None = None,
) -> bool:
    return default_resolver(table).is_answer_correct(user_answer, hand, category, scenario_key)


def get_correct_action_display(
    hand: str,
    category: Category | str,
    scenario_key: str,
    *,
    table: RangeTable | None = None,
) -> str:
    """``"Call"`` for a pure action, ``"Call/3bet"`` for a mixed one."""

    return default_resolver(table).get_correct_action_display(hand, category, scenario_key)
