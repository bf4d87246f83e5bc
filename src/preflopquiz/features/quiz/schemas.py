from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "AnswerResult",
    "CategorySummaryPayload",
    "ChartCellPayload",
    "ChartPayload",
    "DecisionPayload",
    "FeedbackPayload",
    "HandDecisionPayload",
    "HistoryEntryPayload",
    "HistoryPayload",
    "RoundPayload",
    "RoundResponse",
    "ScenarioPayload",
    "SummaryPayload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ScenarioPayload(_APIModel):
    key: str
    category: str
    label: str
    situation: str
    positions: list[str]
    villain: str | None = None
    villain_action: str | None = None
    villain2: str | None = None
    villain2_action: str | None = None
    caller: str | None = None


class DecisionPayload(_APIModel):
    action: str
    alt_action: str | None = None
    mixed: bool
    display: str


class RoundPayload(_APIModel):
    round_no: int
    total_rounds: int | None = None
    scenario: ScenarioPayload
    hero_position: str
    description: str
    hand: str
    choices: list[str]
    difficulty: str


class CategorySummaryPayload(_APIModel):
    answers: int
    hits: int
    accuracy_pct: float


class SummaryPayload(_APIModel):
    answers: int
    hits: int
    accuracy_pct: float
    streak: int
    best_streak: int
    mixed_answers: int
    by_category: dict[str, CategorySummaryPayload] = Field(default_factory=dict)


class RoundResponse(_APIModel):
    done: bool
    round: RoundPayload | None = None
    summary: SummaryPayload | None = None


class FeedbackPayload(_APIModel):
    correct: bool
    answer: str
    hand: str
    scenario_key: str
    expected: DecisionPayload
    streak: int
    answers: int
    hits: int


class AnswerResult(_APIModel):
    feedback: FeedbackPayload
    next_payload: RoundResponse = Field(..., alias="next")


class HistoryEntryPayload(_APIModel):
    round_no: int
    hand: str
    scenario_key: str
    label: str
    answer: str
    expected: str
    correct: bool
    timestamp: float


class HistoryPayload(_APIModel):
    entries: list[HistoryEntryPayload]


class ChartCellPayload(_APIModel):
    hand: str
    action: str
    alt_action: str | None = None
    mixed: bool


class ChartPayload(_APIModel):
    category: str
    scenario_key: str
    ranks: list[str]
    cells: list[list[ChartCellPayload]]


class HandDecisionPayload(_APIModel):
    hand: str
    category: str
    scenario_key: str
    decision: DecisionPayload
