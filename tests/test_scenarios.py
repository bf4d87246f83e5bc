from __future__ import annotations

import pytest

from preflopquiz.core.models import ActionKind, Category
from preflopquiz.data.range_table import load_range_table
from preflopquiz.data.scenarios import (
    action_choices,
    available_scenarios,
    get_scenario,
    hero_position,
    iter_scenarios,
    situation_description,
)


def test_catalog_covers_every_range_table_entry() -> None:
    table = load_range_table()
    table_entries = {(category, key) for category, key in table}
    catalog_entries = {(info.category, info.key) for info in iter_scenarios()}
    assert table_entries == catalog_entries


def test_filter_by_position_and_situation() -> None:
    keys = {info.key for info in available_scenarios(["btn"], ["open"])}
    assert keys == {"btn_open", "btn_vs_limp", "btn_vs_2_fish"}

    blinds_vs_4bet = {info.key for info in available_scenarios(["SB"], ["vs_4bet"])}
    assert blinds_vs_4bet == {"oop_vs_passive_4bet", "oop_vs_aggro_4bet"}

    assert len(available_scenarios()) == len(iter_scenarios())
    assert available_scenarios([], ["open"]) == []
    assert available_scenarios(["BTN"], []) == []


def test_situation_matches_category() -> None:
    assert get_scenario("ep_open").situation == "open"
    assert get_scenario("btn_squeeze").situation == "vs_open"
    assert get_scenario("ip_cold_4bet_vs_aggro").category is Category.COLD_4BET
    with pytest.raises(KeyError):
        get_scenario("nope")


def test_action_choices_per_category() -> None:
    assert action_choices("open_ranges") == (ActionKind.RAISE, ActionKind.FOLD)
    assert action_choices(Category.VS_OPEN)[0] is ActionKind.THREE_BET
    assert action_choices(Category.COLD_4BET)[0] is ActionKind.FOUR_BET
    assert action_choices("vs_4bet_ranges") == (ActionKind.FIVE_BET, ActionKind.CALL, ActionKind.FOLD)
    assert action_choices("unknown") == ()


def test_hero_position_prefers_selected_seat() -> None:
    info = get_scenario("oop_vs_passive_3bet")
    assert hero_position(info) == "EP"
    assert hero_position(info, ["co"]) == "CO"
    assert hero_position(info, ["BB"]) == "EP"


def test_situation_descriptions() -> None:
    assert situation_description(get_scenario("ep_open")) == "You are EP. Action on you."
    assert situation_description(get_scenario("btn_squeeze")) == "HJ opens, CO calls. You are BTN."
    assert situation_description(get_scenario("oop_vs_aggro_3bet"), "HJ") == "BB 3-bet. You are HJ."
    assert situation_description(get_scenario("ip_vs_passive_4bet")) == "CO 4-bet. You are BTN."
    assert situation_description(get_scenario("oop_cold_4bet_vs_tight")) == "EP opened, HJ 3bet. You are CO."
    assert situation_description(get_scenario("bb_vs_sb_open")) == "SB opened. You are BB."
