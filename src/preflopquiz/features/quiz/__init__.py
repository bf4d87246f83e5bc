"""Quiz feature: session service, schemas, and API routers."""

from .router import create_quiz_routers
from .schemas import (
    AnswerResult,
    FeedbackPayload,
    HistoryPayload,
    RoundPayload,
    RoundResponse,
    SummaryPayload,
)
from .service import QuizConfig, QuizManager

__all__ = [
    "AnswerResult",
    "FeedbackPayload",
    "HistoryPayload",
    "QuizConfig",
    "QuizManager",
    "RoundPayload",
    "RoundResponse",
    "SummaryPayload",
    "create_quiz_routers",
]
