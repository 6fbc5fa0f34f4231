"""Grade a puzzle by solving it with human-style techniques only."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .candidates import init_candidates
from .grid import Grid, flatten
from .techniques import TECHNIQUES


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one grading pass."""

    solved: bool
    max_level: int = 0
    techniques_used: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict[str, Any]:
        """Plain data for passing across a worker or HTTP boundary."""
        return {
            "solved": self.solved,
            "max_level": self.max_level,
            "techniques_used": sorted(self.techniques_used),
        }


def solve_puzzle_with_logic(grid: Grid) -> AnalysisResult:
    """
    Solve a puzzle by deduction alone and report the hardest tier needed.

    Techniques are tried cheapest first. Whenever one makes progress the cycle
    restarts from the cheapest; when a full cycle changes nothing the solver is
    stuck and stops. It never guesses.

    Args:
        grid: 9x9 puzzle with 0 for empty cells (left untouched)

    Returns:
        AnalysisResult with solved flag, highest tier fired and technique names
    """
    board = flatten(grid)
    candidates = init_candidates(board)

    max_level = 0
    used: set[str] = set()

    running = True
    while running:
        running = False
        for technique in TECHNIQUES:
            if technique.apply(board, candidates):
                max_level = max(max_level, technique.level)
                used.add(technique.name)
                running = True
                break

    return AnalysisResult(
        solved=all(board),
        max_level=max_level,
        techniques_used=frozenset(used),
    )
