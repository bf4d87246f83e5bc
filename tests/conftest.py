from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


@pytest.fixture(autouse=True)
def _bundled_ranges(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests always read the packaged range file unless they override it.
    monkeypatch.delenv("PREFLOPQUIZ_RANGES", raising=False)
