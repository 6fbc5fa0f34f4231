"""Grid geometry and placement checks shared by every solver component."""

from __future__ import annotations

from typing import List

import numpy as np

Grid = List[List[int]]
Board = List[int]

SIZE = 9
CELLS = SIZE * SIZE
DIGITS = range(1, SIZE + 1)


def _build_units() -> tuple[tuple[int, ...], ...]:
    rows = [tuple(r * 9 + c for c in range(9)) for r in range(9)]
    cols = [tuple(r * 9 + c for r in range(9)) for c in range(9)]
    boxes = []
    for br in range(3):
        for bc in range(3):
            start = br * 27 + bc * 3
            boxes.append(tuple(start + r * 9 + c for r in range(3) for c in range(3)))
    return tuple(rows + cols + boxes)


def _build_peers() -> tuple[tuple[int, ...], ...]:
    peers = []
    for idx in range(CELLS):
        seen: set[int] = set()
        for unit in UNITS:
            if idx in unit:
                seen.update(unit)
        seen.discard(idx)
        peers.append(tuple(sorted(seen)))
    return tuple(peers)


UNITS = _build_units()
ROWS = UNITS[0:9]
COLS = UNITS[9:18]
BOXES = UNITS[18:27]
PEERS = _build_peers()
PEER_SETS = tuple(frozenset(p) for p in PEERS)
BOX_OF = tuple((idx // 27) * 3 + (idx % 9) // 3 for idx in range(CELLS))

# Bit d-1 set means digit d is still possible.
MASK_ALL = 0x1FF


def sees(a: int, b: int) -> bool:
    """Whether two distinct cells share a row, column or box."""
    return b in PEER_SETS[a]


def flatten(grid: Grid) -> Board:
    """Convert a 9x9 grid into a flat 81-cell board."""
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise ValueError(f"Expected a 9x9 grid, got {len(grid)} rows")
    return [int(cell) for row in grid for cell in row]


def to_grid(board: Board) -> Grid:
    """Convert a flat 81-cell board back into a 9x9 grid."""
    return [list(board[r * 9 : (r + 1) * 9]) for r in range(9)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def is_valid(board: Board, index: int, value: int) -> bool:
    """Check whether ``value`` may occupy ``index`` given the filled peers."""
    for peer in PEERS[index]:
        if board[peer] == value:
            return False
    return True


def is_valid_placement(grid: Grid, row: int, col: int, value: int) -> bool:
    """
    Check if placing value at (row, col) is valid.

    Args:
        grid: Current grid state
        row: Row index (0-8)
        col: Column index (0-8)
        value: Number to place (1-9)

    Returns:
        True if no cell in the same row, column or box holds value
    """
    for peer in PEERS[row * 9 + col]:
        r, c = divmod(peer, 9)
        if grid[r][c] == value:
            return False
    return True


def find_conflicts(grid: Grid) -> set[tuple[int, int]]:
    """Return the (row, col) of every filled cell that clashes with a peer."""
    conflicts: set[tuple[int, int]] = set()
    for row in range(9):
        for col in range(9):
            value = int(grid[row][col])
            if value == 0:
                continue
            if not is_valid_placement(grid, row, col, value):
                conflicts.add((row, col))
    return conflicts


def is_valid_grid(grid: Grid) -> bool:
    """
    Validate that a grid has correct structure and consistent givens.

    Args:
        grid: 9x9 grid to validate

    Returns:
        True if grid is valid, False otherwise
    """
    if not isinstance(grid, list) or len(grid) != 9:
        return False

    for row in grid:
        if not isinstance(row, list) or len(row) != 9:
            return False
        for cell in row:
            if not isinstance(cell, int) or cell < 0 or cell > 9:
                return False

    return not find_conflicts(grid)


def is_complete_solution(grid: Grid) -> bool:
    """Whether every row, column and box holds each digit 1-9 exactly once."""
    arr = np.asarray(grid, dtype=np.int8)
    if arr.shape != (9, 9):
        return False
    boxes = arr.reshape(3, 3, 3, 3).transpose(0, 2, 1, 3).reshape(9, 9)
    expected = np.arange(1, 10, dtype=np.int8)
    return all(
        bool(np.all(np.sort(lines, axis=1) == expected))
        for lines in (arr, arr.T, boxes)
    )
