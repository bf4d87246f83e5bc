"""Scenario catalog: who is in the pot and what the hero is asked to do.

Every range table entry has one catalog entry. The catalog drives scenario
selection for quiz sessions (by hero position and situation) and the short
text that sets up each round.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import ActionKind, Category

__all__ = [
    "POSITIONS",
    "SITUATIONS",
    "ScenarioInfo",
    "action_choices",
    "available_scenarios",
    "get_scenario",
    "hero_position",
    "iter_scenarios",
    "situation_description",
]

POSITIONS: tuple[str, ...] = ("EP", "HJ", "CO", "BTN", "SB", "BB")

SITUATIONS: dict[str, Category] = {
    "open": Category.OPEN,
    "vs_open": Category.VS_OPEN,
    "vs_3bet": Category.VS_3BET,
    "cold_4bet": Category.COLD_4BET,
    "vs_4bet": Category.VS_4BET,
}

_ACTION_CHOICES: dict[Category, tuple[ActionKind, ...]] = {
    Category.OPEN: (ActionKind.RAISE, ActionKind.FOLD),
    Category.VS_OPEN: (ActionKind.THREE_BET, ActionKind.CALL, ActionKind.FOLD),
    Category.VS_3BET: (ActionKind.FOUR_BET, ActionKind.CALL, ActionKind.FOLD),
    Category.COLD_4BET: (ActionKind.FOUR_BET, ActionKind.CALL, ActionKind.FOLD),
    Category.VS_4BET: (ActionKind.FIVE_BET, ActionKind.CALL, ActionKind.FOLD),
}

_VILLAIN_VERBS = {"open": "opened", "3bet": "3-bet", "4bet": "4-bet"}


@dataclass(frozen=True)
class ScenarioInfo:
    key: str
    category: Category
    label: str
    positions: tuple[str, ...]
    villain: str | None = None
    villain_action: str | None = None
    villain2: str | None = None
    villain2_action: str | None = None
    caller: str | None = None

    @property
    def situation(self) -> str:
        for name, category in SITUATIONS.items():
            if category is self.category:
                return name
        raise ValueError(f"no situation for category {self.category}")


def _open(key: str, label: str, position: str) -> ScenarioInfo:
    return ScenarioInfo(key=key, category=Category.OPEN, label=label, positions=(position,))


def _vs_open(key: str, label: str, position: str, villain: str, caller: str | None = None) -> ScenarioInfo:
    return ScenarioInfo(
        key=key,
        category=Category.VS_OPEN,
        label=label,
        positions=(position,),
        villain=villain,
        villain_action="open",
        caller=caller,
    )


def _facing(key: str, category: Category, label: str, positions: tuple[str, ...], villain: str) -> ScenarioInfo:
    action = "4bet" if category is Category.VS_4BET else "3bet"
    return ScenarioInfo(
        key=key,
        category=category,
        label=label,
        positions=positions,
        villain=villain,
        villain_action=action,
    )


def _cold_4bet(key: str, label: str, position: str) -> ScenarioInfo:
    return ScenarioInfo(
        key=key,
        category=Category.COLD_4BET,
        label=label,
        positions=(position,),
        villain="EP",
        villain_action="open",
        villain2="HJ",
        villain2_action="3bet",
    )


_OOP_OPENERS = ("EP", "HJ", "CO")
_BLINDS = ("BB", "SB")

_CATALOG: tuple[ScenarioInfo, ...] = (
    _open("ep_open", "EP Open", "EP"),
    _open("hj_open", "HJ Open", "HJ"),
    _open("co_open", "CO Open", "CO"),
    _open("btn_open", "BTN Open", "BTN"),
    _open("sb_open", "SB Open", "SB"),
    _open("btn_vs_limp", "BTN vs Limp", "BTN"),
    _open("btn_vs_2_fish", "BTN vs 2 Fish", "BTN"),
    _vs_open("hj_vs_ep_open", "HJ vs EP Open", "HJ", "EP"),
    _vs_open("btn_vs_aggro_open", "BTN vs Aggro Open", "BTN", "CO"),
    _vs_open("btn_vs_passive_open", "BTN vs Passive Open", "BTN", "CO"),
    _vs_open("bb_vs_passive_open", "BB vs Passive Open", "BB", "BTN"),
    _vs_open("bb_vs_aggro_open", "BB vs Aggro Open", "BB", "BTN"),
    _vs_open("btn_squeeze", "BTN Squeeze", "BTN", "HJ", caller="CO"),
    _vs_open("ep_vs_pro_open", "EP vs Pro Open", "EP", "UTG"),
    _vs_open("btn_vs_co_pro_open", "BTN vs CO Pro Open", "BTN", "CO"),
    _vs_open("btn_vs_ep_open", "BTN vs EP Open", "BTN", "EP"),
    _vs_open("co_vs_hj_open", "CO vs HJ Open", "CO", "HJ"),
    _vs_open("bb_vs_sb_open", "BB vs SB Open", "BB", "SB"),
    _vs_open("sb_3bet_vs_btn", "SB 3bet vs BTN", "SB", "BTN"),
    _vs_open("bb_squeeze", "BB Squeeze", "BB", "BTN", caller="SB"),
    _facing("oop_vs_passive_3bet", Category.VS_3BET, "OOP vs Passive 3bet", _OOP_OPENERS, "BB"),
    _facing("oop_vs_aggro_3bet", Category.VS_3BET, "OOP vs Aggro 3bet", _OOP_OPENERS, "BB"),
    _facing("ip_vs_passive_3bet", Category.VS_3BET, "IP vs Passive 3bet", ("BTN",), "BB"),
    _facing("ip_vs_aggro_3bet", Category.VS_3BET, "IP vs Aggro 3bet", ("BTN",), "BB"),
    _facing("sb_vs_bb_3bet", Category.VS_3BET, "SB vs BB 3bet", ("SB",), "BB"),
    _cold_4bet("oop_cold_4bet_vs_tight", "OOP Cold 4bet vs Tight", "CO"),
    _cold_4bet("ip_cold_4bet_vs_tight", "IP Cold 4bet vs Tight", "BTN"),
    _cold_4bet("oop_cold_4bet_vs_aggro", "OOP Cold 4bet vs Aggro", "CO"),
    _cold_4bet("ip_cold_4bet_vs_aggro", "IP Cold 4bet vs Aggro", "BTN"),
    _facing("oop_vs_passive_4bet", Category.VS_4BET, "OOP vs Passive 4bet", _BLINDS, "BTN"),
    _facing("ip_vs_passive_4bet", Category.VS_4BET, "IP vs Passive 4bet", ("BTN",), "CO"),
    _facing("oop_vs_aggro_4bet", Category.VS_4BET, "OOP vs Aggro 4bet", _BLINDS, "BTN"),
    _facing("ip_vs_aggro_4bet", Category.VS_4BET, "IP vs Aggro 4bet", ("BTN",), "CO"),
)

_BY_KEY: dict[str, ScenarioInfo] = {info.key: info for info in _CATALOG}


def iter_scenarios() -> tuple[ScenarioInfo, ...]:
    return _CATALOG


def get_scenario(key: str) -> ScenarioInfo:
    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"scenario '{key}' not found") from None


def _normalise(values: Iterable[str] | None) -> set[str] | None:
    if values is None:
        return None
    return {value.strip() for value in values if value and value.strip()}


def available_scenarios(
    positions: Iterable[str] | None = None,
    situations: Iterable[str] | None = None,
) -> list[ScenarioInfo]:
    """Scenarios where the hero may sit in one of ``positions`` facing one of ``situations``.

    ``None`` leaves that dimension unfiltered; an empty selection matches nothing.
    """

    wanted_positions = _normalise(positions)
    if wanted_positions is not None:
        wanted_positions = {pos.upper() for pos in wanted_positions}
    wanted_situations = _normalise(situations)
    if wanted_situations is not None:
        wanted_situations = {sit.lower() for sit in wanted_situations}

    selected: list[ScenarioInfo] = []
    for info in _CATALOG:
        if wanted_positions is not None and not wanted_positions.intersection(info.positions):
            continue
        if wanted_situations is not None and info.situation not in wanted_situations:
            continue
        selected.append(info)
    return selected


def action_choices(category: Category | str) -> tuple[ActionKind, ...]:
    parsed = Category.parse(category)
    if parsed is None:
        return ()
    return _ACTION_CHOICES[parsed]


def hero_position(info: ScenarioInfo, preferred: Iterable[str] | None = None) -> str:
    wanted = {pos.upper() for pos in (preferred or ())}
    for position in info.positions:
        if position in wanted:
            return position
    return info.positions[0]


def situation_description(info: ScenarioInfo, hero: str | None = None) -> str:
    seat = hero or info.positions[0]
    if info.villain is None:
        return f"You are {seat}. Action on you."
    if info.caller:
        return f"{info.villain} opens, {info.caller} calls. You are {seat}."
    if info.villain2:
        return f"{info.villain} opened, {info.villain2} {info.villain2_action}. You are {seat}."
    verb = _VILLAIN_VERBS.get(info.villain_action or "", info.villain_action or "acted")
    return f"{info.villain} {verb}. You are {seat}."
