from __future__ import annotations

import logging
import random
import secrets
import string
import threading
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ...core.models import ActionKind, Decision
from ...core.scoring import SummaryStats, summarize_records
from ...data.range_table import RangeTable, get_range_table
from ...data.scenarios import (
    ScenarioInfo,
    action_choices,
    available_scenarios,
    get_scenario,
    hero_position,
    situation_description,
)
from ...dynamic.resolver import RangeResolver
from ...dynamic.sampler import DifficultySampler, resolve_profile
from .concurrency import run_blocking
from .schemas import (
    AnswerResult,
    CategorySummaryPayload,
    DecisionPayload,
    FeedbackPayload,
    HistoryEntryPayload,
    HistoryPayload,
    RoundPayload,
    RoundResponse,
    ScenarioPayload,
    SummaryPayload,
)

__all__ = [
    "QuizConfig",
    "QuizManager",
    "QuizRound",
    "QuizState",
    "decision_payload",
    "scenario_payload",
    "select_scenarios",
]

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class QuizConfig:
    """Configuration for a quiz session."""

    scenarios: tuple[str, ...]
    difficulty: str = "medium"
    positions: tuple[str, ...] = ()
    rounds: int | None = None
    seed: int | None = None
    history_limit: int = DEFAULT_HISTORY_LIMIT


@dataclass(frozen=True)
class QuizRound:
    round_no: int
    scenario: ScenarioInfo
    hero: str
    hand: str


@dataclass
class QuizState:
    config: QuizConfig
    rng: random.Random
    sampler: DifficultySampler
    scenarios: list[ScenarioInfo]
    current: QuizRound | None = None
    records: list[dict[str, Any]] = field(default_factory=list)
    history: list[dict[str, Any]] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.config.rounds is not None and len(self.records) >= self.config.rounds


def select_scenarios(
    positions: Iterable[str] | None = None,
    situations: Iterable[str] | None = None,
    keys: Iterable[str] | None = None,
) -> list[ScenarioInfo]:
    """Explicit ``keys`` win; otherwise filter the catalog by positions/situations."""

    if keys:
        return [get_scenario(key) for key in keys]
    return available_scenarios(positions, situations)


class QuizManager:
    """Owns quiz session lifecycle independent of the HTTP layer."""

    def __init__(self, table: RangeTable | None = None) -> None:
        self._table = table
        self._sessions: dict[str, QuizState] = {}
        self._lock = threading.Lock()

    @property
    def resolver(self) -> RangeResolver:
        return RangeResolver(self._table if self._table is not None else get_range_table())

    def create_session(self, config: QuizConfig) -> str:
        if not config.scenarios:
            raise ValueError("no scenarios selected")
        try:
            scenarios = [get_scenario(key) for key in config.scenarios]
        except KeyError as exc:
            raise ValueError(str(exc)) from exc

        seed = config.seed if config.seed is not None else secrets.SystemRandom().getrandbits(32)
        rng = random.Random(seed)
        normalized = QuizConfig(
            scenarios=tuple(info.key for info in scenarios),
            difficulty=resolve_profile(config.difficulty).name,
            positions=tuple(pos.upper() for pos in config.positions),
            rounds=max(1, config.rounds) if config.rounds is not None else None,
            seed=seed,
            history_limit=max(1, config.history_limit),
        )
        state = QuizState(
            config=normalized,
            rng=rng,
            sampler=DifficultySampler(self.resolver, rng=rng),
            scenarios=scenarios,
        )
        state.current = _deal_round(state)
        session_id = _sid()
        with self._lock:
            self._sessions[session_id] = state
        logger.debug(
            "Quiz session created",
            extra={"session_id": session_id, "scenarios": len(scenarios), "difficulty": normalized.difficulty},
        )
        return session_id

    async def create_session_async(self, config: QuizConfig) -> str:
        return await run_blocking(self.create_session, config)

    def get_round(self, session_id: str) -> RoundResponse:
        with self._lock:
            state = self._require_session(session_id)
            return _round_response(state)

    async def get_round_async(self, session_id: str) -> RoundResponse:
        return await run_blocking(self.get_round, session_id)

    def answer(self, session_id: str, action: str) -> AnswerResult:
        with self._lock:
            state = self._require_session(session_id)
            current = state.current
            if current is None or state.finished:
                raise ValueError("quiz already complete")
            choices = action_choices(current.scenario.category)
            chosen = _parse_choice(action, choices)

            decision = state.sampler.resolver.get_correct_action(
                current.hand, current.scenario.category, current.scenario.key
            )
            correct = decision.accepts(chosen)
            record = {
                "round_no": current.round_no,
                "category": current.scenario.category.value,
                "scenario_key": current.scenario.key,
                "hand": current.hand,
                "answer": chosen.value,
                "expected": decision.display(),
                "correct": correct,
                "mixed": decision.is_mixed,
            }
            state.records.append(record)
            state.history.insert(
                0,
                {**record, "label": current.scenario.label, "timestamp": time.time()},
            )
            del state.history[state.config.history_limit :]

            stats = summarize_records(state.records)
            state.current = None if state.finished else _deal_round(state)
            next_payload = _round_response(state)

        feedback = FeedbackPayload(
            correct=correct,
            answer=chosen.value,
            hand=current.hand,
            scenario_key=current.scenario.key,
            expected=decision_payload(decision),
            streak=stats.streak,
            answers=stats.answers,
            hits=stats.hits,
        )
        return AnswerResult(feedback=feedback, next_payload=next_payload)

    async def answer_async(self, session_id: str, action: str) -> AnswerResult:
        return await run_blocking(self.answer, session_id, action)

    def summary(self, session_id: str) -> SummaryPayload:
        with self._lock:
            state = self._require_session(session_id)
            return _summary_payload(summarize_records(state.records))

    async def summary_async(self, session_id: str) -> SummaryPayload:
        return await run_blocking(self.summary, session_id)

    def history(self, session_id: str) -> HistoryPayload:
        with self._lock:
            state = self._require_session(session_id)
            entries = [
                HistoryEntryPayload(
                    round_no=entry["round_no"],
                    hand=entry["hand"],
                    scenario_key=entry["scenario_key"],
                    label=entry["label"],
                    answer=entry["answer"],
                    expected=entry["expected"],
                    correct=entry["correct"],
                    timestamp=entry["timestamp"],
                )
                for entry in state.history
            ]
        return HistoryPayload(entries=entries)

    async def history_async(self, session_id: str) -> HistoryPayload:
        return await run_blocking(self.history, session_id)

    def _require_session(self, session_id: str) -> QuizState:
        state = self._sessions.get(session_id)
        if state is None:
            raise KeyError(f"quiz '{session_id}' not found")
        return state


def _sid(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _parse_choice(action: str, choices: Sequence[ActionKind]) -> ActionKind:
    token = (action or "").strip().lower()
    for choice in choices:
        if choice.value.lower() == token:
            return choice
    offered = ", ".join(choice.value for choice in choices)
    raise ValueError(f"action {action!r} not offered here (choose one of: {offered})")


def _deal_round(state: QuizState) -> QuizRound:
    scenario = state.rng.choice(state.scenarios)
    hand = state.sampler.get_smart_random_hand(scenario.category, scenario.key, state.config.difficulty)
    return QuizRound(
        round_no=len(state.records) + 1,
        scenario=scenario,
        hero=hero_position(scenario, state.config.positions),
        hand=hand,
    )


def scenario_payload(info: ScenarioInfo) -> ScenarioPayload:
    return ScenarioPayload(
        key=info.key,
        category=info.category.value,
        label=info.label,
        situation=info.situation,
        positions=list(info.positions),
        villain=info.villain,
        villain_action=info.villain_action,
        villain2=info.villain2,
        villain2_action=info.villain2_action,
        caller=info.caller,
    )


def decision_payload(decision: Decision) -> DecisionPayload:
    return DecisionPayload(
        action=decision.action.value,
        alt_action=decision.alt_action.value if decision.alt_action else None,
        mixed=decision.is_mixed,
        display=decision.display(),
    )


def _round_payload(state: QuizState, current: QuizRound) -> RoundPayload:
    return RoundPayload(
        round_no=current.round_no,
        total_rounds=state.config.rounds,
        scenario=scenario_payload(current.scenario),
        hero_position=current.hero,
        description=situation_description(current.scenario, current.hero),
        hand=current.hand,
        choices=[choice.value for choice in action_choices(current.scenario.category)],
        difficulty=state.config.difficulty,
    )


def _round_response(state: QuizState) -> RoundResponse:
    if state.current is None:
        return RoundResponse(done=True, summary=_summary_payload(summarize_records(state.records)))
    return RoundResponse(done=False, round=_round_payload(state, state.current))


def _summary_payload(stats: SummaryStats) -> SummaryPayload:
    return SummaryPayload(
        answers=stats.answers,
        hits=stats.hits,
        accuracy_pct=stats.accuracy_pct,
        streak=stats.streak,
        best_streak=stats.best_streak,
        mixed_answers=stats.mixed_answers,
        by_category={
            name: CategorySummaryPayload(answers=cat.answers, hits=cat.hits, accuracy_pct=cat.accuracy_pct)
            for name, cat in stats.by_category.items()
        },
    )
