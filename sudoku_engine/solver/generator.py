"""Puzzle generation: symmetric clue removal, uniqueness checks and difficulty targeting."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Optional

from .backtracking import count_solutions, generate_solution
from .grid import CELLS, Grid, copy_grid
from .logic import AnalysisResult, solve_puzzle_with_logic
from .techniques import TECHNIQUE_NAMES

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000
DEFAULT_TIME_BUDGET_SECONDS = 45.0
UNIQUENESS_LIMIT = 2
FALLBACK_TECHNIQUE = "Fallback"


@dataclass(frozen=True)
class DifficultyConfig:
    """Clue-removal bounds and the technique tier a puzzle should need."""

    min_remove: int
    max_remove: int
    max_level: int
    name: str = "custom"
    required_technique: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.min_remove <= self.max_remove <= CELLS:
            raise ValueError(
                f"Invalid removal bounds: min_remove={self.min_remove}, "
                f"max_remove={self.max_remove}"
            )
        if self.max_level < 0:
            raise ValueError(f"Invalid max_level: {self.max_level}")
        if (
            self.required_technique is not None
            and self.required_technique not in TECHNIQUE_NAMES
        ):
            raise ValueError(f"Unknown technique: {self.required_technique}")


@dataclass
class GeneratedPuzzle:
    """A puzzle with its solution and grading."""

    puzzle: Grid
    solution: Grid
    removed: int
    analysis: AnalysisResult
    fallback: bool = False

    @property
    def clues(self) -> int:
        return sum(1 for row in self.puzzle for cell in row if cell != 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "puzzle": copy_grid(self.puzzle),
            "solution": copy_grid(self.solution),
            "removed": self.removed,
            "clues": self.clues,
            "analysis": self.analysis.to_dict(),
            "fallback": self.fallback,
        }


def _symmetric_groups(rng) -> list[tuple[int, ...]]:
    """Cells grouped with their 180-degree rotation, in random order.

    Yields 40 pairs plus the center cell on its own.
    """
    coords = list(range(CELLS))
    rng.shuffle(coords)
    visited: set[int] = set()
    groups: list[tuple[int, ...]] = []
    for idx in coords:
        if idx in visited:
            continue
        mirror = CELLS - 1 - idx
        visited.add(idx)
        visited.add(mirror)
        groups.append((idx,) if idx == mirror else (idx, mirror))
    return groups


def generate_puzzle_attempt(
    config: DifficultyConfig, rng: Optional[random.Random] = None
) -> Optional[GeneratedPuzzle]:
    """
    Produce one graded puzzle candidate.

    Args:
        config: Removal bounds and target tier
        rng: Random source; the module-level generator is used when omitted

    Returns:
        GeneratedPuzzle, or None if fewer than min_remove cells could be
        removed while keeping a unique solution
    """
    rng = rng or random
    solution = generate_solution(rng)
    puzzle = copy_grid(solution)

    removed = 0
    for group in _symmetric_groups(rng):
        if removed >= config.max_remove:
            break
        if removed + len(group) > config.max_remove:
            continue

        backups = []
        for idx in group:
            r, c = divmod(idx, 9)
            backups.append((r, c, puzzle[r][c]))
            puzzle[r][c] = 0

        if count_solutions(puzzle, UNIQUENESS_LIMIT) == 1:
            removed += len(group)
        else:
            for r, c, value in backups:
                puzzle[r][c] = value

    if removed < config.min_remove:
        return None

    analysis = solve_puzzle_with_logic(puzzle)
    return GeneratedPuzzle(puzzle=puzzle, solution=solution, removed=removed, analysis=analysis)


def is_level_match(analysis: AnalysisResult, config: DifficultyConfig) -> bool:
    """Whether a graded puzzle fits the requested difficulty tier."""
    if not analysis.solved or analysis.max_level > config.max_level:
        return False
    if (
        config.required_technique is not None
        and config.required_technique not in analysis.techniques_used
    ):
        return False

    # Easy end: anything solvable up to hidden singles.
    if config.max_level <= 2:
        return True
    if config.max_level <= 4:
        return analysis.max_level == config.max_level
    if config.max_level == 5:
        return analysis.max_level >= 5
    return analysis.max_level >= 6


def generate_puzzle_sync(
    config: DifficultyConfig,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    time_budget: float = DEFAULT_TIME_BUDGET_SECONDS,
    rng: Optional[random.Random] = None,
) -> GeneratedPuzzle:
    """
    Generate a puzzle for the requested tier within an attempt and time budget.

    Returns the first attempt that matches the tier. Otherwise returns the
    attempt with the highest tier not above the target (earliest wins ties),
    and if no attempt solved at all, a puzzle from naive single-cell removal
    flagged as fallback. Never returns None.
    """
    rng = rng or random
    start = time.perf_counter()
    best: Optional[GeneratedPuzzle] = None

    for attempt in range(max_attempts):
        if time.perf_counter() - start > time_budget:
            _LOGGER.debug("time budget of %.1fs spent after %d attempts", time_budget, attempt)
            break

        result = generate_puzzle_attempt(config, rng)
        if result is None:
            _LOGGER.debug("attempt %d rejected: too few removals", attempt + 1)
            continue
        if not result.analysis.solved:
            _LOGGER.debug("attempt %d rejected: not solvable by logic", attempt + 1)
            continue

        if is_level_match(result.analysis, config):
            _LOGGER.info(
                "puzzle generated (attempt %d, %.0fms): %d clues, level %d, techniques [%s]",
                attempt + 1,
                (time.perf_counter() - start) * 1000.0,
                result.clues,
                result.analysis.max_level,
                ", ".join(sorted(result.analysis.techniques_used)),
            )
            return result

        level = result.analysis.max_level
        if level <= config.max_level and (best is None or level > best.analysis.max_level):
            best = result

    if best is not None:
        _LOGGER.warning(
            "no exact match for %s (level %d); using best puzzle found at level %d",
            config.name,
            config.max_level,
            best.analysis.max_level,
        )
        return best

    _LOGGER.warning("falling back to simple generation for %s", config.name)
    return _generate_fallback(config, rng)


def _generate_fallback(config: DifficultyConfig, rng) -> GeneratedPuzzle:
    """Remove random single cells up to min_remove, keeping only uniqueness."""
    solution = generate_solution(rng)
    puzzle = copy_grid(solution)
    positions = list(range(CELLS))
    rng.shuffle(positions)

    removed = 0
    for idx in positions:
        if removed >= config.min_remove:
            break
        r, c = divmod(idx, 9)
        backup = puzzle[r][c]
        puzzle[r][c] = 0
        if count_solutions(puzzle, UNIQUENESS_LIMIT) == 1:
            removed += 1
        else:
            puzzle[r][c] = backup

    analysis = AnalysisResult(
        solved=True, max_level=0, techniques_used=frozenset({FALLBACK_TECHNIQUE})
    )
    return GeneratedPuzzle(
        puzzle=puzzle, solution=solution, removed=removed, analysis=analysis, fallback=True
    )
