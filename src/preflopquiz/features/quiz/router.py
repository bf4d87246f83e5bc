from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, model_validator

from ...core.hands import RANKS, is_valid_hand
from ...data.scenarios import POSITIONS
from ...dynamic.chart import range_chart
from ...dynamic.sampler import resolve_profile
from .schemas import ChartCellPayload, ChartPayload, HandDecisionPayload
from .service import QuizConfig, QuizManager, decision_payload, scenario_payload, select_scenarios

__all__ = ["AnswerRequest", "CreateQuizRequest", "create_quiz_routers"]


def _split(value: object) -> object:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class CreateQuizRequest(BaseModel):
    positions: list[str] | None = None
    situations: list[str] | None = None
    scenarios: list[str] | None = None
    difficulty: str | None = None
    rounds: int | None = None
    seed: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: dict[str, object]) -> dict[str, object]:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, object] = dict(data)
        for field in ("positions", "situations", "scenarios"):
            cleaned[field] = _split(cleaned.get(field))
        for field in ("rounds", "seed"):
            value = cleaned.get(field)
            if value in (None, ""):
                cleaned[field] = None
                continue
            if isinstance(value, str):
                try:
                    cleaned[field] = int(value)
                except ValueError:
                    cleaned[field] = None
        return cleaned

    @model_validator(mode="after")
    def _normalize(self) -> CreateQuizRequest:
        self.difficulty = resolve_profile(self.difficulty).name
        if self.positions is not None:
            self.positions = [pos.upper() for pos in self.positions if pos.upper() in POSITIONS]
        if self.rounds is not None and self.rounds < 1:
            self.rounds = 1
        return self


class AnswerRequest(BaseModel):
    action: str


class _QuizController:
    def __init__(self, manager: QuizManager) -> None:
        self.manager = manager

    async def create(self, body: CreateQuizRequest) -> JSONResponse:
        try:
            scenarios = select_scenarios(body.positions, body.situations, body.scenarios)
        except KeyError as exc:
            raise HTTPException(400, str(exc)) from exc
        if not scenarios:
            raise HTTPException(400, "no scenarios match the selected positions and situations")
        config = QuizConfig(
            scenarios=tuple(info.key for info in scenarios),
            difficulty=body.difficulty or "medium",
            positions=tuple(body.positions or ()),
            rounds=body.rounds,
            seed=body.seed,
        )
        try:
            session_id = await self.manager.create_session_async(config)
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return JSONResponse({"quiz": session_id})

    async def round(self, sid: str) -> JSONResponse:
        try:
            payload = await self.manager.get_round_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(payload.to_dict())

    async def answer(self, sid: str, body: AnswerRequest) -> JSONResponse:
        try:
            result = await self.manager.answer_async(sid, body.action)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return JSONResponse(result.to_dict())

    async def summary(self, sid: str) -> JSONResponse:
        try:
            summary = await self.manager.summary_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(summary.to_dict())

    async def history(self, sid: str) -> JSONResponse:
        try:
            history = await self.manager.history_async(sid)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return JSONResponse(history.to_dict())

    # ------------------------------------------------------------------ ranges
    def _require_scenario(self, category: str, scenario_key: str) -> None:
        if self.manager.resolver.table.lookup(category, scenario_key) is None:
            raise HTTPException(404, f"scenario '{category}/{scenario_key}' not found")

    def scenarios(self, positions: str | None, situations: str | None) -> JSONResponse:
        selected = select_scenarios(_split(positions), _split(situations))  # type: ignore[arg-type]
        return JSONResponse({"scenarios": [scenario_payload(info).to_dict() for info in selected]})

    def hand_decision(self, category: str, scenario_key: str, hand: str) -> JSONResponse:
        self._require_scenario(category, scenario_key)
        if not is_valid_hand(hand):
            raise HTTPException(400, f"invalid hand token: {hand!r}")
        decision = self.manager.resolver.get_correct_action(hand, category, scenario_key)
        payload = HandDecisionPayload(
            hand=hand,
            category=category,
            scenario_key=scenario_key,
            decision=decision_payload(decision),
        )
        return JSONResponse(payload.to_dict())

    def chart(self, category: str, scenario_key: str) -> JSONResponse:
        self._require_scenario(category, scenario_key)
        grid = range_chart(self.manager.resolver, category, scenario_key)
        payload = ChartPayload(
            category=category,
            scenario_key=scenario_key,
            ranks=list(RANKS),
            cells=[
                [
                    ChartCellPayload(
                        hand=cell.hand,
                        action=cell.decision.action.value,
                        alt_action=cell.decision.alt_action.value if cell.decision.alt_action else None,
                        mixed=cell.decision.is_mixed,
                    )
                    for cell in row
                ]
                for row in grid
            ],
        )
        return JSONResponse(payload.to_dict())


def create_quiz_routers(manager: QuizManager) -> tuple[APIRouter, APIRouter]:
    controller = _QuizController(manager)

    quiz_router = APIRouter(prefix="/api/v1/quiz", tags=["quiz"])
    ranges_router = APIRouter(prefix="/api/v1/ranges", tags=["ranges"])

    @quiz_router.post("")
    async def create_quiz(body: CreateQuizRequest) -> JSONResponse:
        return await controller.create(body)

    @quiz_router.get("/{sid}/round")
    async def get_round(sid: str) -> JSONResponse:
        return await controller.round(sid)

    @quiz_router.post("/{sid}/answer")
    async def post_answer(sid: str, body: AnswerRequest) -> JSONResponse:
        return await controller.answer(sid, body)

    @quiz_router.get("/{sid}/summary")
    async def get_summary(sid: str) -> JSONResponse:
        return await controller.summary(sid)

    @quiz_router.get("/{sid}/history")
    async def get_history(sid: str) -> JSONResponse:
        return await controller.history(sid)

    @ranges_router.get("/scenarios")
    def list_scenarios(
        positions: str | None = Query(default=None),
        situations: str | None = Query(default=None),
    ) -> JSONResponse:
        return controller.scenarios(positions, situations)

    @ranges_router.get("/{category}/{scenario_key}/hands/{hand}")
    def get_hand_decision(category: str, scenario_key: str, hand: str) -> JSONResponse:
        return controller.hand_decision(category, scenario_key, hand)

    @ranges_router.get("/{category}/{scenario_key}/chart")
    def get_chart(category: str, scenario_key: str) -> JSONResponse:
        return controller.chart(category, scenario_key)

    return quiz_router, ranges_router
