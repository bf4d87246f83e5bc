from __future__ import annotations

import pytest

from preflopquiz.core.hands import generate_all_hands
from preflopquiz.core.models import ActionKind, Decision
from preflopquiz.data.range_table import RangeTable, load_range_table
from preflopquiz.dynamic.resolver import (
    RangeResolver,
    get_correct_action,
    get_correct_action_display,
    is_answer_correct,
)

_ALL_ACTIONS = tuple(ActionKind)


def _fixture_table() -> RangeTable:
    return RangeTable.from_payload(
        {
            "open_ranges": {"tiny_open": ["AA", "AKs"]},
            "vs_open_ranges": {
                "split": {
                    "3bet": ["AA", "KK", "A5s"],
                    "call": ["QQ", "JJ", "AQs", "A5s"],
                    "mixed": ["KK", "JJ", "76s"],
                },
                "no_tier": {"call": ["99"], "mixed": ["99", "88"]},
            },
        }
    )


@pytest.fixture(scope="module")
def bundled() -> RangeResolver:
    return RangeResolver(load_range_table())


@pytest.fixture()
def resolver() -> RangeResolver:
    return RangeResolver(_fixture_table())


def test_open_ranges_raise_or_fold(bundled: RangeResolver) -> None:
    assert bundled.get_correct_action("AA", "open_ranges", "ep_open") == Decision(ActionKind.RAISE)
    assert bundled.get_correct_action("72o", "open_ranges", "ep_open") == Decision(ActionKind.FOLD)
    assert bundled.get_correct_action("AKs", "open_ranges", "hj_open").action is ActionKind.RAISE
    assert bundled.get_correct_action("32s", "open_ranges", "hj_open").action is ActionKind.FOLD


def test_bundled_fixture_scenarios(bundled: RangeResolver) -> None:
    aa = bundled.get_correct_action("AA", "vs_3bet_ranges", "oop_vs_passive_3bet")
    assert aa.action is ActionKind.FOUR_BET
    assert not aa.is_mixed and aa.alt_action is None

    a7s = bundled.get_correct_action("A7s", "vs_open_ranges", "btn_vs_aggro_open")
    assert a7s.action is ActionKind.CALL
    assert a7s.is_mixed
    assert a7s.alt_action is ActionKind.THREE_BET
    assert bundled.get_correct_action_display("A7s", "vs_open_ranges", "btn_vs_aggro_open") == "Call/3bet"

    # 33 sits in both the 3bet and mixed lists.
    assert bundled.get_correct_action_display("33", "vs_open_ranges", "btn_vs_aggro_open") == "3bet/Call"
    assert bundled.get_correct_action_display("AKs", "vs_open_ranges", "btn_vs_aggro_open") == "3bet"
    assert bundled.get_correct_action("AA", "vs_open_ranges", "hj_vs_ep_open").action is ActionKind.THREE_BET
    assert bundled.get_correct_action("72o", "vs_open_ranges", "btn_vs_aggro_open").action is ActionKind.FOLD


def test_vs_4bet_and_cold_4bet(bundled: RangeResolver) -> None:
    assert bundled.get_correct_action("AA", "vs_4bet_ranges", "ip_vs_aggro_4bet").action is ActionKind.FIVE_BET
    assert bundled.get_correct_action_display("KK", "vs_4bet_ranges", "ip_vs_aggro_4bet") == "Call/5bet"
    assert bundled.get_correct_action("AQs", "vs_4bet_ranges", "oop_vs_passive_4bet").action is ActionKind.FOLD
    assert bundled.get_correct_action("AA", "cold_4bet_ranges", "oop_cold_4bet_vs_tight").action is ActionKind.FOUR_BET
    assert bundled.get_correct_action("KQs", "cold_4bet_ranges", "oop_cold_4bet_vs_tight").action is ActionKind.FOLD


def test_raise_tier_wins_over_call_when_listed_in_both(bundled: RangeResolver) -> None:
    decision = bundled.get_correct_action("KTo", "vs_open_ranges", "bb_vs_aggro_open")
    assert decision == Decision(ActionKind.THREE_BET)


def test_resolution_branches(resolver: RangeResolver) -> None:
    cat = "vs_open_ranges"
    assert resolver.get_correct_action("AA", cat, "split") == Decision(ActionKind.THREE_BET)
    assert resolver.get_correct_action("KK", cat, "split") == Decision(ActionKind.THREE_BET, ActionKind.CALL, True)
    assert resolver.get_correct_action("A5s", cat, "split") == Decision(ActionKind.THREE_BET)
    assert resolver.get_correct_action("QQ", cat, "split") == Decision(ActionKind.CALL)
    assert resolver.get_correct_action("JJ", cat, "split") == Decision(ActionKind.CALL, ActionKind.THREE_BET, True)
    # Mixed-only hands split between the raise tier and a call.
    assert resolver.get_correct_action("76s", cat, "split") == Decision(ActionKind.THREE_BET, ActionKind.CALL, True)
    assert resolver.get_correct_action("72o", cat, "split") == Decision(ActionKind.FOLD)


def test_mixed_without_raise_tier_stays_pure(resolver: RangeResolver) -> None:
    assert resolver.get_correct_action("99", "vs_open_ranges", "no_tier") == Decision(ActionKind.CALL)
    assert resolver.get_correct_action("88", "vs_open_ranges", "no_tier") == Decision(ActionKind.FOLD)


def test_unknown_category_or_scenario_folds(resolver: RangeResolver) -> None:
    assert resolver.get_correct_action("AA", "limp_ranges", "split") == Decision(ActionKind.FOLD)
    assert resolver.get_correct_action("AA", "vs_open_ranges", "missing") == Decision(ActionKind.FOLD)
    assert resolver.get_correct_action("AA", "vs_3bet_ranges", "split") == Decision(ActionKind.FOLD)


def test_answer_checks_accept_primary_and_alt(resolver: RangeResolver) -> None:
    cat = "vs_open_ranges"
    assert resolver.is_answer_correct("3bet", "KK", cat, "split")
    assert resolver.is_answer_correct(ActionKind.CALL, "KK", cat, "split")
    assert not resolver.is_answer_correct("Fold", "KK", cat, "split")
    assert resolver.is_answer_correct("Call", "QQ", cat, "split")
    assert not resolver.is_answer_correct("3bet", "QQ", cat, "split")
    assert resolver.get_correct_action_display("KK", cat, "split") == "3bet/Call"
    assert resolver.get_correct_action_display("JJ", cat, "split") == "Call/3bet"
    assert resolver.get_correct_action_display("QQ", cat, "split") == "Call"


def test_decision_invariants_hold_for_every_bundled_hand(bundled: RangeResolver) -> None:
    for category, key in bundled.table:
        for hand in generate_all_hands():
            decision = bundled.get_correct_action(hand, category, key)
            assert decision.is_mixed == (decision.alt_action is not None)
            assert bundled.is_answer_correct(decision.action, hand, category, key)
            if decision.is_mixed:
                assert bundled.is_answer_correct(decision.alt_action, hand, category, key)
            accepted = {decision.action, decision.alt_action}
            for other in _ALL_ACTIONS:
                if other not in accepted:
                    assert not bundled.is_answer_correct(other, hand, category, key)


def test_resolution_is_idempotent(bundled: RangeResolver) -> None:
    first = bundled.get_correct_action("A7s", "vs_open_ranges", "btn_vs_aggro_open")
    second = bundled.get_correct_action("A7s", "vs_open_ranges", "btn_vs_aggro_open")
    assert first == second


def test_decision_rejects_inconsistent_alt() -> None:
    with pytest.raises(ValueError):
        Decision(ActionKind.CALL, ActionKind.THREE_BET, False)
    with pytest.raises(ValueError):
        Decision(ActionKind.CALL, None, True)


def test_module_functions_use_bundled_table() -> None:
    assert get_correct_action("AA", "open_ranges", "ep_open").action is ActionKind.RAISE
    assert is_answer_correct("Call", "A7s", "vs_open_ranges", "btn_vs_aggro_open")
    assert get_correct_action_display("A7s", "vs_open_ranges", "btn_vs_aggro_open") == "Call/3bet"
    table = _fixture_table()
    assert get_correct_action("AKs", "open_ranges", "tiny_open", table=table).action is ActionKind.RAISE
