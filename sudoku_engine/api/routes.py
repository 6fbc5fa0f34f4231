"""API routes for the Sudoku puzzle engine."""

from __future__ import annotations

import logging
import random
import time

from fastapi import APIRouter, HTTPException

from ..config import DIFFICULTY_PRESETS, get_preset, max_attempts, time_budget_seconds
from ..models.schemas import (
    Analysis,
    AnalyzeResponse,
    CandidatesResponse,
    DifficultyInfo,
    GenerateRequest,
    GenerateResponse,
    GridRequest,
    HealthResponse,
    PlacementRequest,
    PlacementResponse,
    SolveResponse,
)
from ..solver import (
    AnalysisResult,
    DifficultyConfig,
    count_solutions,
    find_conflicts,
    generate_puzzle_sync,
    get_candidates,
    is_valid_grid,
    is_valid_placement,
    solve,
    solve_puzzle_with_logic,
)

router = APIRouter()
_LOGGER = logging.getLogger(__name__)


def _validate_presets() -> str | None:
    """Return a description of the first broken preset, or None if all are usable."""
    if not DIFFICULTY_PRESETS:
        return "no difficulty presets configured"
    for name, preset in DIFFICULTY_PRESETS.items():
        if not isinstance(preset, DifficultyConfig):
            return f"preset '{name}' is not a DifficultyConfig"
        if preset.max_level < 1:
            return f"preset '{name}' has no target level"
    return None


def _analysis_model(analysis: AnalysisResult) -> Analysis:
    return Analysis(**analysis.to_dict())


def _resolve_config(request: GenerateRequest) -> DifficultyConfig:
    if request.config is not None:
        try:
            return DifficultyConfig(name="custom", **request.config.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

    name = request.difficulty or "medium"
    try:
        return get_preset(name)
    except KeyError:
        _LOGGER.warning("Unknown difficulty=%s", name)
        raise HTTPException(status_code=404, detail=f"Unknown difficulty '{name}'")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", difficulties=list(DIFFICULTY_PRESETS))


@router.get("/api/v1/difficulties", response_model=list[DifficultyInfo], tags=["Sudoku"])
async def list_difficulties():
    """List the difficulty presets."""
    return [
        DifficultyInfo(
            name=name,
            min_remove=preset.min_remove,
            max_remove=preset.max_remove,
            max_level=preset.max_level,
        )
        for name, preset in DIFFICULTY_PRESETS.items()
    ]


@router.post("/api/v1/sudoku:generate", response_model=GenerateResponse, tags=["Sudoku"])
def generate_puzzle(request: GenerateRequest):
    """
    Generate a puzzle with a unique solution for a difficulty.

    Runs in the threadpool: generation is CPU-bound and may take up to the
    configured time budget for the hardest tiers.
    """
    config = _resolve_config(request)
    rng = random.Random(request.seed) if request.seed is not None else None

    start = time.perf_counter()
    result = generate_puzzle_sync(
        config,
        max_attempts=max_attempts(),
        time_budget=time_budget_seconds(),
        rng=rng,
    )
    latency_ms = (time.perf_counter() - start) * 1000.0

    return GenerateResponse(
        difficulty=config.name,
        puzzle=result.puzzle,
        solution=result.solution,
        analysis=_analysis_model(result.analysis),
        removed=result.removed,
        clues=result.clues,
        fallback=result.fallback,
        latency_ms=latency_ms,
    )


@router.post("/api/v1/sudoku:analyze", response_model=AnalyzeResponse, tags=["Sudoku"])
async def analyze_puzzle(request: GridRequest):
    """Grade a puzzle with the logic solver and report its solution count."""
    grid = request.grid.cells
    if not is_valid_grid(grid):
        _LOGGER.warning("Rejected invalid grid for analysis")
        return AnalyzeResponse(success=False, message="Invalid Sudoku grid format")

    try:
        solution_count = count_solutions(grid, limit=2)
        analysis = solve_puzzle_with_logic(grid)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    if solution_count == 0:
        message = "Puzzle has no solution"
    elif solution_count > 1:
        message = "Puzzle has multiple solutions"
    elif analysis.solved:
        message = f"Puzzle solvable by logic up to level {analysis.max_level}"
    else:
        message = "Puzzle needs techniques beyond the logic solver"

    return AnalyzeResponse(
        success=True,
        message=message,
        analysis=_analysis_model(analysis),
        solution_count=solution_count,
    )


@router.post(
    "/api/v1/sudoku:candidates", response_model=CandidatesResponse, tags=["Sudoku"]
)
async def candidates(request: GridRequest):
    """Compute the candidate digits of every empty cell."""
    grid = request.grid.cells
    if not is_valid_grid(grid):
        _LOGGER.warning("Rejected invalid grid for candidates")
        return CandidatesResponse(success=False, message="Invalid Sudoku grid format")

    cells = get_candidates(grid)
    return CandidatesResponse(
        success=True,
        message="Candidates computed",
        candidates=[[sorted(cell) for cell in row] for row in cells],
    )


@router.post("/api/v1/sudoku:solve", response_model=SolveResponse, tags=["Sudoku"])
async def solve_sudoku(request: GridRequest):
    """
    Solve a Sudoku puzzle from a JSON grid.

    Expected JSON format:
    {
        "grid": {
            "cells": [[row1], [row2], ...]
        }
    }
    Where each row is a list of 9 integers (0 for empty).
    """
    try:
        grid = request.grid.cells

        if not is_valid_grid(grid):
            return SolveResponse(
                success=False,
                original=grid,
                solved=None,
                message="Invalid Sudoku grid format",
            )

        solved = solve(grid)

        if solved is None:
            if count_solutions(grid, limit=2) == 0:
                message = "Puzzle has no solution"
            else:
                message = "Puzzle has multiple solutions"
            return SolveResponse(
                success=False, original=grid, solved=None, message=message
            )

        return SolveResponse(
            success=True,
            original=grid,
            solved=solved,
            message="Puzzle solved successfully",
        )

    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/api/v1/sudoku:checkPlacement", response_model=PlacementResponse, tags=["Sudoku"]
)
async def check_placement(request: PlacementRequest):
    """Check whether a digit may go in a cell, and list existing conflicts."""
    grid = request.grid.cells
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise HTTPException(status_code=422, detail="Expected a 9x9 grid")

    return PlacementResponse(
        valid=is_valid_placement(grid, request.row, request.col, request.value),
        conflicts=[[r, c] for r, c in sorted(find_conflicts(grid))],
    )
