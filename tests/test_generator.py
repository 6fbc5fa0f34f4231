"""Tests for puzzle generation and difficulty targeting."""

import itertools
import random

import pytest

from sudoku_engine.solver import generator
from sudoku_engine.solver.backtracking import count_solutions
from sudoku_engine.solver.generator import (
    DifficultyConfig,
    GeneratedPuzzle,
    generate_puzzle_attempt,
    generate_puzzle_sync,
    is_level_match,
)
from sudoku_engine.solver.grid import is_complete_solution
from sudoku_engine.solver.logic import AnalysisResult


def _analysis(level: int, solved: bool = True, techniques=()) -> AnalysisResult:
    return AnalysisResult(solved=solved, max_level=level, techniques_used=frozenset(techniques))


def _fake_result(level: int, solved: bool = True) -> GeneratedPuzzle:
    return GeneratedPuzzle(
        puzzle=[[0] * 9 for _ in range(9)],
        solution=[[0] * 9 for _ in range(9)],
        removed=50,
        analysis=_analysis(level, solved),
    )


def _blank_count(grid: list[list[int]]) -> int:
    return sum(1 for row in grid for cell in row if cell == 0)


class TestDifficultyConfig:
    """Tests for difficulty configuration validation."""

    def test_valid_config(self):
        config = DifficultyConfig(min_remove=45, max_remove=49, max_level=2)
        assert config.name == "custom"
        assert config.required_technique is None

    def test_min_above_max_rejected(self):
        with pytest.raises(ValueError, match="Invalid removal bounds"):
            DifficultyConfig(min_remove=50, max_remove=40, max_level=3)

    def test_removal_above_board_size_rejected(self):
        with pytest.raises(ValueError):
            DifficultyConfig(min_remove=10, max_remove=82, max_level=3)

    def test_negative_level_rejected(self):
        with pytest.raises(ValueError, match="Invalid max_level"):
            DifficultyConfig(min_remove=10, max_remove=20, max_level=-1)

    def test_unknown_required_technique_rejected(self):
        with pytest.raises(ValueError, match="Unknown technique"):
            DifficultyConfig(
                min_remove=10, max_remove=20, max_level=7, required_technique="Jellyfish"
            )


def test_symmetric_groups_cover_board():
    groups = generator._symmetric_groups(random.Random(1))

    assert len(groups) == 41
    cells = [idx for group in groups for idx in group]
    assert sorted(cells) == list(range(81))
    assert (40,) in groups
    for group in groups:
        if len(group) == 2:
            assert group[0] + group[1] == 80


def test_attempt_produces_unique_symmetric_puzzle():
    config = DifficultyConfig(min_remove=30, max_remove=40, max_level=2)
    result = generate_puzzle_attempt(config, random.Random(5))

    assert result is not None
    assert 30 <= result.removed <= 40
    assert _blank_count(result.puzzle) == result.removed
    assert result.clues == 81 - result.removed
    assert count_solutions(result.puzzle, 2) == 1
    assert is_complete_solution(result.solution)
    assert result.fallback is False

    for r, c in itertools.product(range(9), range(9)):
        if result.puzzle[r][c] != 0:
            assert result.puzzle[r][c] == result.solution[r][c]
        assert (result.puzzle[r][c] == 0) == (result.puzzle[8 - r][8 - c] == 0)


def test_attempt_never_exceeds_max_remove():
    config = DifficultyConfig(min_remove=0, max_remove=21, max_level=7)
    result = generate_puzzle_attempt(config, random.Random(9))
    assert result is not None
    assert result.removed <= 21
    assert _blank_count(result.puzzle) == result.removed


def test_attempt_returns_none_when_target_unreachable():
    config = DifficultyConfig(min_remove=81, max_remove=81, max_level=7)
    assert generate_puzzle_attempt(config, random.Random(2)) is None


@pytest.mark.parametrize(
    "requested, level, expected",
    [
        (1, 1, True),
        (2, 1, True),
        (2, 2, True),
        (2, 3, False),
        (3, 2, False),
        (3, 3, True),
        (4, 1, False),
        (4, 2, False),
        (4, 3, False),
        (4, 4, True),
        (4, 5, False),
        (4, 7, False),
        (5, 4, False),
        (5, 5, True),
        (5, 6, False),
        (7, 5, False),
        (7, 6, True),
        (7, 7, True),
    ],
)
def test_is_level_match(requested, level, expected):
    config = DifficultyConfig(min_remove=40, max_remove=50, max_level=requested)
    assert is_level_match(_analysis(level), config) is expected


def test_is_level_match_rejects_unsolved():
    config = DifficultyConfig(min_remove=40, max_remove=50, max_level=2)
    assert is_level_match(_analysis(1, solved=False), config) is False


def test_is_level_match_required_technique():
    config = DifficultyConfig(
        min_remove=55, max_remove=64, max_level=7, required_technique="Swordfish"
    )
    with_fish = _analysis(6, techniques={"Naked Single", "Swordfish"})
    without_fish = _analysis(7, techniques={"Naked Single", "XY-Wing"})
    assert is_level_match(with_fish, config) is True
    assert is_level_match(without_fish, config) is False


def test_sync_returns_first_match(monkeypatch):
    config = DifficultyConfig(min_remove=50, max_remove=55, max_level=4)
    results = iter([None, _fake_result(2), _fake_result(4), _fake_result(4)])
    calls = []

    def fake_attempt(cfg, rng=None):
        calls.append(cfg)
        return next(results)

    monkeypatch.setattr(generator, "generate_puzzle_attempt", fake_attempt)

    result = generate_puzzle_sync(config, max_attempts=10)
    assert result.analysis.max_level == 4
    assert len(calls) == 3


def test_sync_best_effort_prefers_highest_level_within_target(monkeypatch):
    config = DifficultyConfig(min_remove=50, max_remove=55, max_level=4)
    first_three = _fake_result(3)
    second_three = _fake_result(3)
    results = iter(
        [_fake_result(1), first_three, _fake_result(5), second_three, _fake_result(2, solved=False)]
    )
    monkeypatch.setattr(generator, "generate_puzzle_attempt", lambda cfg, rng=None: next(results))

    result = generate_puzzle_sync(config, max_attempts=5)
    assert result is first_three
    assert result.fallback is False


def test_sync_falls_back_when_nothing_solves(monkeypatch):
    config = DifficultyConfig(min_remove=30, max_remove=40, max_level=5)
    monkeypatch.setattr(generator, "generate_puzzle_attempt", lambda cfg, rng=None: None)

    result = generate_puzzle_sync(config, max_attempts=3, rng=random.Random(4))

    assert result.fallback is True
    assert result.analysis.max_level == 0
    assert result.analysis.techniques_used == frozenset({"Fallback"})
    assert result.removed == 30
    assert _blank_count(result.puzzle) == 30
    assert count_solutions(result.puzzle, 2) == 1


def test_sync_respects_time_budget(monkeypatch):
    config = DifficultyConfig(min_remove=30, max_remove=40, max_level=5)
    calls = []

    def fake_attempt(cfg, rng=None):
        calls.append(cfg)
        return None

    monkeypatch.setattr(generator, "generate_puzzle_attempt", fake_attempt)

    result = generate_puzzle_sync(config, max_attempts=1000, time_budget=-1.0, rng=random.Random(4))
    assert calls == []
    assert result.fallback is True


def test_sync_generates_easy_puzzle():
    config = DifficultyConfig(min_remove=30, max_remove=40, max_level=2, name="easy")
    result = generate_puzzle_sync(config, max_attempts=20, rng=random.Random(17))

    assert result.fallback is False
    assert is_level_match(result.analysis, config)
    assert count_solutions(result.puzzle, 2) == 1


def test_generated_puzzle_to_dict():
    result = _fake_result(3)
    data = result.to_dict()
    assert data["removed"] == 50
    assert data["clues"] == 0
    assert data["analysis"] == {"solved": True, "max_level": 3, "techniques_used": []}
    assert data["fallback"] is False
