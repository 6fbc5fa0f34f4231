"""Tests for runtime settings and difficulty presets."""

import pytest

from sudoku_engine import config


def test_env_falls_back_on_missing_or_bad_values(monkeypatch):
    monkeypatch.delenv("SUDOKU_MAX_ATTEMPTS", raising=False)
    assert config.max_attempts() == 1000

    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "not-a-number")
    assert config.max_attempts() == 1000

    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "25")
    assert config.max_attempts() == 25

    monkeypatch.setenv("SUDOKU_MAX_ATTEMPTS", "0")
    assert config.max_attempts() == 1


def test_time_budget_and_log_level(monkeypatch):
    monkeypatch.delenv("SUDOKU_TIME_BUDGET_SECONDS", raising=False)
    assert config.time_budget_seconds() == 45.0

    monkeypatch.setenv("SUDOKU_TIME_BUDGET_SECONDS", "2.5")
    assert config.time_budget_seconds() == 2.5

    monkeypatch.setenv("SUDOKU_LOG_LEVEL", " debug ")
    assert config.log_level() == "DEBUG"


def test_presets_match_canonical_tiers():
    levels = {name: preset.max_level for name, preset in config.DIFFICULTY_PRESETS.items()}
    assert levels == {"medium": 2, "hard": 3, "expert": 4, "master": 5, "extreme": 7}
    for name, preset in config.DIFFICULTY_PRESETS.items():
        assert preset.name == name
        assert preset.min_remove <= preset.max_remove


def test_get_preset_is_case_insensitive():
    assert config.get_preset(" Hard ") is config.DIFFICULTY_PRESETS["hard"]
    with pytest.raises(KeyError):
        config.get_preset("legendary")
