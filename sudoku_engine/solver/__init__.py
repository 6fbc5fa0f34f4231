"""Solver module exports."""

from .backtracking import count_solutions, generate_solution, solve
from .candidates import get_candidates
from .generator import (
    DifficultyConfig,
    GeneratedPuzzle,
    generate_puzzle_attempt,
    generate_puzzle_sync,
    is_level_match,
)
from .grid import (
    find_conflicts,
    is_complete_solution,
    is_valid_grid,
    is_valid_placement,
)
from .logic import AnalysisResult, solve_puzzle_with_logic

__all__ = [
    "AnalysisResult",
    "DifficultyConfig",
    "GeneratedPuzzle",
    "count_solutions",
    "find_conflicts",
    "generate_puzzle_attempt",
    "generate_puzzle_sync",
    "generate_solution",
    "get_candidates",
    "is_complete_solution",
    "is_level_match",
    "is_valid_grid",
    "is_valid_placement",
    "solve",
    "solve_puzzle_with_logic",
]
