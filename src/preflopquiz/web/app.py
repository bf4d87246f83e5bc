from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..data.range_table import get_range_table
from ..features.quiz import QuizManager, create_quiz_routers
from ..features.quiz.concurrency import shutdown_executor


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    get_range_table()
    yield
    shutdown_executor()


app = FastAPI(title="Preflop Quiz", lifespan=_lifespan)
_manager = QuizManager()
_quiz_router, _ranges_router = create_quiz_routers(_manager)
app.include_router(_quiz_router)
app.include_router(_ranges_router)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


def main() -> None:  # pragma: no cover - runner
    import uvicorn

    host = os.environ.get("BIND", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("preflopquiz.web.app:app", host=host, port=port)


if __name__ == "__main__":  # pragma: no cover
    main()
