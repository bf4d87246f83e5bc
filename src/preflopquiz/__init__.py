"""Preflop range-training quiz."""

from __future__ import annotations

__all__: list[str] = []
