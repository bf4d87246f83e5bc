from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from ..core.hands import is_valid_hand
from ..core.models import RAISE_TIERS, ActionKind, Category, FlatRange, ScenarioRange, TieredRange

__all__ = [
    "DEFAULT_RESOURCE",
    "RangeTable",
    "RangeTableConfig",
    "get_range_table",
    "load_range_table",
]

logger = logging.getLogger(__name__)

_ENV_VAR = "PREFLOPQUIZ_RANGES"
DEFAULT_RESOURCE = Path(__file__).with_name("ranges") / "preflop_ranges.json"

_CALL_KEY = "call"
_MIXED_KEY = "mixed"
_TIER_KEYS = {tier.value: tier for tier in RAISE_TIERS}


@dataclass(frozen=True)
class RangeTableConfig:
    """Where the range payload lives."""

    resource: Path


class RangeTable:
    """Immutable ``category -> scenario_key -> range`` lookup."""

    def __init__(self, entries: Mapping[Category, Mapping[str, ScenarioRange]]) -> None:
        self._entries: Mapping[Category, Mapping[str, ScenarioRange]] = MappingProxyType(
            {category: MappingProxyType(dict(scenarios)) for category, scenarios in entries.items()}
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RangeTable:
        if not isinstance(payload, Mapping):
            raise ValueError("Invalid range data payload")
        entries: dict[Category, dict[str, ScenarioRange]] = {}
        for raw_category, scenarios in payload.items():
            category = Category.parse(raw_category)
            if category is None:
                raise ValueError(f"unknown range category: {raw_category!r}")
            if not isinstance(scenarios, Mapping):
                raise ValueError(f"category {raw_category!r} must map scenario keys to ranges")
            entries[category] = {
                str(key): _decode_scenario(category, str(key), value) for key, value in scenarios.items()
            }
        return cls(entries)

    def lookup(self, category: Category | str, scenario_key: str) -> ScenarioRange | None:
        parsed = Category.parse(category)
        if parsed is None:
            return None
        scenarios = self._entries.get(parsed)
        if scenarios is None:
            return None
        return scenarios.get(scenario_key)

    def categories(self) -> tuple[Category, ...]:
        return tuple(self._entries)

    def scenario_keys(self, category: Category | str) -> tuple[str, ...]:
        parsed = Category.parse(category)
        if parsed is None:
            return ()
        return tuple(self._entries.get(parsed, {}))

    def __iter__(self) -> Iterator[tuple[Category, str]]:
        for category, scenarios in self._entries.items():
            for key in scenarios:
                yield category, key

    def __len__(self) -> int:
        return sum(len(scenarios) for scenarios in self._entries.values())


def _decode_hands(values: Any, where: str) -> frozenset[str]:
    if not isinstance(values, list):
        raise ValueError(f"{where}: expected a list of hands")
    hands: set[str] = set()
    for token in values:
        if not is_valid_hand(token):
            raise ValueError(f"{where}: invalid hand token {token!r}")
        hands.add(token)
    return frozenset(hands)


def _decode_scenario(category: Category, key: str, value: Any) -> ScenarioRange:
    where = f"{category.value}/{key}"
    if category is Category.OPEN:
        return FlatRange(hands=_decode_hands(value, where))
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}: expected an object of action lists")

    unknown = set(value) - set(_TIER_KEYS) - {_CALL_KEY, _MIXED_KEY}
    if unknown:
        raise ValueError(f"{where}: unknown action keys {sorted(unknown)}")

    tiers = [tier for tier in RAISE_TIERS if tier.value in value]
    if len(tiers) > 1:
        raise ValueError(f"{where}: more than one raise tier ({', '.join(t.value for t in tiers)})")
    raise_tier: ActionKind | None = tiers[0] if tiers else None

    raise_hands = _decode_hands(value[raise_tier.value], f"{where}/{raise_tier.value}") if raise_tier else frozenset()
    call_hands = _decode_hands(value.get(_CALL_KEY, []), f"{where}/{_CALL_KEY}")
    mixed_hands = _decode_hands(value.get(_MIXED_KEY, []), f"{where}/{_MIXED_KEY}")

    overlap = raise_hands & call_hands
    if overlap:
        logger.warning(
            "Hands listed in both raise tier and call; raise tier wins",
            extra={"scenario": where, "hands": sorted(overlap)},
        )
    if mixed_hands and raise_tier is None:
        logger.warning("Mixed hands without a raise tier resolve as pure actions", extra={"scenario": where})

    return TieredRange(
        raise_tier=raise_tier,
        raise_hands=raise_hands,
        call_hands=call_hands,
        mixed_hands=mixed_hands,
    )


def load_range_table(config: RangeTableConfig | None = None) -> RangeTable:
    resource = config.resource if config else DEFAULT_RESOURCE
    with resource.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("Invalid range data payload")
    table = RangeTable.from_payload(data)
    logger.debug("Loaded range table", extra={"resource": str(resource), "scenarios": len(table)})
    return table


_TABLE: Optional[RangeTable] = None
_TABLE_STAMP: Optional[tuple[str, float]] = None


def _resource_path() -> Path:
    override = os.getenv(_ENV_VAR)
    if not override:
        return DEFAULT_RESOURCE
    path = Path(override)
    if not path.is_file():
        raise FileNotFoundError(f"{_ENV_VAR} points to a missing range file: {path}")
    return path


def get_range_table() -> RangeTable:
    """Return the shared table, reloading when the resource changes on disk.

    A bad ``PREFLOPQUIZ_RANGES`` path is a configuration error: it raises
    ``FileNotFoundError`` here, and the web app checks it once at startup.
    """

    global _TABLE, _TABLE_STAMP
    path = _resource_path()
    stamp = (str(path), path.stat().st_mtime)
    if _TABLE is None or _TABLE_STAMP != stamp:
        _TABLE = load_range_table(RangeTableConfig(resource=path))
        _TABLE_STAMP = stamp
    return _TABLE
