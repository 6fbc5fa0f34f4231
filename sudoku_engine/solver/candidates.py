"""Candidate bitmasks per cell, kept consistent by incremental peer elimination."""

from __future__ import annotations

from .grid import CELLS, DIGITS, PEERS, Board, Grid, flatten, is_valid

Candidates = list[int]


def bit(value: int) -> int:
    return 1 << (value - 1)


def digits_of(mask: int) -> list[int]:
    """Digits whose bits are set in a candidate mask, ascending."""
    return [d for d in DIGITS if mask & (1 << (d - 1))]


def init_candidates(board: Board) -> Candidates:
    """Compute the legal-value mask of every empty cell; filled cells get 0."""
    candidates = [0] * CELLS
    for idx in range(CELLS):
        if board[idx] != 0:
            continue
        mask = 0
        for value in DIGITS:
            if is_valid(board, idx, value):
                mask |= bit(value)
        candidates[idx] = mask
    return candidates


def eliminate(candidates: Candidates, index: int, value: int) -> None:
    """Remove value from the candidates of every peer of index."""
    keep = ~bit(value)
    for peer in PEERS[index]:
        candidates[peer] &= keep


def place(board: Board, candidates: Candidates, index: int, value: int) -> None:
    board[index] = value
    candidates[index] = 0
    eliminate(candidates, index, value)


def get_candidates(grid: Grid) -> list[list[set[int]]]:
    """Return the set of legal digits for every cell (empty set when filled)."""
    candidates = init_candidates(flatten(grid))
    return [
        [set(digits_of(candidates[r * 9 + c])) for c in range(9)] for r in range(9)
    ]
