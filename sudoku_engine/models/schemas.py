"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SudokuGrid(BaseModel):
    """A Sudoku grid."""

    cells: list[list[int]] = Field(description="9x9 grid (0 for empty cells)")

    class Config:
        json_schema_extra = {
            "example": [
                [5, 3, 0, 0, 7, 0, 0, 0, 0],
                [6, 0, 0, 1, 9, 5, 0, 0, 0],
                [0, 9, 8, 0, 0, 0, 0, 6, 0],
                [8, 0, 0, 0, 6, 0, 0, 0, 3],
                [4, 0, 0, 8, 0, 3, 0, 0, 1],
                [7, 0, 0, 0, 2, 0, 0, 0, 6],
                [0, 6, 0, 0, 0, 0, 2, 8, 0],
                [0, 0, 0, 4, 1, 9, 0, 0, 5],
                [0, 0, 0, 0, 8, 0, 0, 7, 9],
            ]
        }


class GridRequest(BaseModel):
    """Request carrying a single grid."""

    grid: SudokuGrid = Field(description="The Sudoku puzzle")


class DifficultySettings(BaseModel):
    """Custom clue-removal bounds and target tier."""

    min_remove: int = Field(ge=0, le=81, description="Minimum cells to blank")
    max_remove: int = Field(ge=0, le=81, description="Maximum cells to blank")
    max_level: int = Field(ge=0, le=7, description="Target technique tier (1-7)")
    required_technique: str | None = Field(
        default=None, description="Technique the puzzle must need, e.g. 'Swordfish'"
    )


class GenerateRequest(BaseModel):
    """Request to generate a puzzle."""

    difficulty: str | None = Field(
        default="medium", description="Preset name (ignored when config is given)"
    )
    config: DifficultySettings | None = Field(
        default=None, description="Custom difficulty settings"
    )
    seed: int | None = Field(default=None, description="Seed for reproducible output")


class Analysis(BaseModel):
    """Grading of a puzzle by the logic solver."""

    solved: bool = Field(description="Whether deduction alone solved the puzzle")
    max_level: int = Field(ge=0, le=7, description="Hardest technique tier used")
    techniques_used: list[str] = Field(description="Names of techniques that fired")


class GenerateResponse(BaseModel):
    """A generated puzzle."""

    difficulty: str = Field(description="Difficulty name")
    puzzle: list[list[int]] = Field(description="Puzzle grid (0 for empty cells)")
    solution: list[list[int]] = Field(description="Solved grid")
    analysis: Analysis = Field(description="Logic solver grading")
    removed: int = Field(description="Number of blanked cells")
    clues: int = Field(description="Number of given cells")
    fallback: bool = Field(description="Whether the degraded fallback was used")
    latency_ms: float | None = Field(default=None, description="Generation latency")


class AnalyzeResponse(BaseModel):
    """Response from grading a grid."""

    success: bool = Field(description="Whether the grid could be graded")
    message: str = Field(description="Status message")
    analysis: Analysis | None = Field(default=None, description="Logic solver grading")
    solution_count: int | None = Field(
        default=None, description="Number of solutions, capped at 2"
    )


class CandidatesResponse(BaseModel):
    """Candidate digits per cell."""

    success: bool = Field(description="Whether candidates were computed")
    message: str = Field(description="Status message")
    candidates: list[list[list[int]]] | None = Field(
        default=None, description="9x9 lists of candidate digits"
    )


class SolveResponse(BaseModel):
    """Response from solving a Sudoku."""

    success: bool = Field(description="Whether the puzzle was solved")
    original: list[list[int]] = Field(description="Original grid")
    solved: list[list[int]] | None = Field(description="Solved grid (if successful)")
    message: str = Field(description="Status message")


class PlacementRequest(BaseModel):
    """Request to check a single placement."""

    grid: SudokuGrid = Field(description="Current grid")
    row: int = Field(ge=0, le=8, description="Row index (0-8)")
    col: int = Field(ge=0, le=8, description="Column index (0-8)")
    value: int = Field(ge=1, le=9, description="Digit to place (1-9)")


class PlacementResponse(BaseModel):
    """Response from checking a placement."""

    valid: bool = Field(description="Whether the digit may go in the cell")
    conflicts: list[list[int]] = Field(
        description="[row, col] of filled cells already clashing with a peer"
    )


class DifficultyInfo(BaseModel):
    """A difficulty preset."""

    name: str = Field(description="Preset name")
    min_remove: int = Field(description="Minimum cells to blank")
    max_remove: int = Field(description="Maximum cells to blank")
    max_level: int = Field(description="Target technique tier")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    difficulties: list[str] = Field(description="Available difficulty presets")
