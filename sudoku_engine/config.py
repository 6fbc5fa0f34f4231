"""Runtime settings and the canonical difficulty presets."""

from __future__ import annotations

import os
from typing import TypeVar

from .solver.generator import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIME_BUDGET_SECONDS,
    DifficultyConfig,
)

_T = TypeVar("_T", int, float, str)


def _env(name: str, default: _T) -> _T:
    """Read an environment variable, converting to the same type as *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        return default


def max_attempts() -> int:
    return max(1, _env("SUDOKU_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))


def time_budget_seconds() -> float:
    return max(0.0, _env("SUDOKU_TIME_BUDGET_SECONDS", DEFAULT_TIME_BUDGET_SECONDS))


def log_level() -> str:
    return _env("SUDOKU_LOG_LEVEL", "INFO").strip().upper()


DIFFICULTY_PRESETS: dict[str, DifficultyConfig] = {
    "medium": DifficultyConfig(min_remove=45, max_remove=49, max_level=2, name="medium"),
    "hard": DifficultyConfig(min_remove=48, max_remove=53, max_level=3, name="hard"),
    "expert": DifficultyConfig(min_remove=50, max_remove=55, max_level=4, name="expert"),
    "master": DifficultyConfig(min_remove=53, max_remove=58, max_level=5, name="master"),
    "extreme": DifficultyConfig(min_remove=55, max_remove=64, max_level=7, name="extreme"),
}


def get_preset(name: str) -> DifficultyConfig:
    """Look up a preset by name (case-insensitive); raises KeyError if unknown."""
    key = name.strip().lower()
    if key not in DIFFICULTY_PRESETS:
        raise KeyError(name)
    return DIFFICULTY_PRESETS[key]
