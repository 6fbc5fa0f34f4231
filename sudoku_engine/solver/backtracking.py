"""Backtracking search: random solution filling and bounded solution counting."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from .grid import BOX_OF, CELLS, DIGITS, MASK_ALL, Board, Grid, flatten, is_valid, to_grid


def generate_solution(rng: Optional[random.Random] = None) -> Grid:
    """
    Generate a complete valid Sudoku grid.

    Args:
        rng: Random source; the module-level generator is used when omitted

    Returns:
        Fully filled 9x9 grid
    """
    board = [0] * CELLS
    _fill_board(board, rng or random)
    return to_grid(board)


def _fill_board(board: Board, rng) -> bool:
    """Fill the first empty cell with each shuffled digit in turn, recursing."""
    idx = _find_empty(board)
    if idx == -1:
        return True

    digits = list(DIGITS)
    rng.shuffle(digits)
    for num in digits:
        if is_valid(board, idx, num):
            board[idx] = num
            if _fill_board(board, rng):
                return True
            board[idx] = 0

    return False


def _find_empty(board: Board) -> int:
    for idx in range(CELLS):
        if board[idx] == 0:
            return idx
    return -1


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """
    Count number of solutions (up to limit).

    Args:
        grid: 9x9 grid to solve
        limit: Stop counting after finding this many solutions

    Returns:
        Number of solutions found, 0 if the givens already conflict
    """
    count, _ = _search(flatten(grid), limit)
    return count


def solve(grid: Grid) -> Optional[Grid]:
    """Return the unique completion of grid, or None if it has zero or several."""
    count, first = _search(flatten(grid), 2)
    if count != 1 or first is None:
        return None
    return to_grid(first)


def _used_masks(board: Board) -> Optional[Tuple[list, list, list]]:
    """Digit masks already used per row, column and box; None on conflicting givens."""
    rows = [0] * 9
    cols = [0] * 9
    boxes = [0] * 9
    for idx, value in enumerate(board):
        if value == 0:
            continue
        bit = 1 << (value - 1)
        r, c = divmod(idx, 9)
        b = BOX_OF[idx]
        if (rows[r] | cols[c] | boxes[b]) & bit:
            return None
        rows[r] |= bit
        cols[c] |= bit
        boxes[b] |= bit
    return rows, cols, boxes


def _search(board: Board, limit: int) -> Tuple[int, Optional[Board]]:
    """Exhaustive search that stops once ``limit`` completions have been seen.

    Branches on the empty cell with the fewest options. Returns the number of
    completions found and a copy of the first one.
    """
    masks = _used_masks(board)
    if masks is None:
        return 0, None
    rows, cols, boxes = masks
    empties = [idx for idx in range(CELLS) if board[idx] == 0]

    count = 0
    first: Optional[Board] = None

    def recurse() -> None:
        nonlocal count, first
        if count >= limit:
            return

        best = -1
        best_options = 0
        best_n = 10
        for idx in empties:
            if board[idx]:
                continue
            r, c = divmod(idx, 9)
            options = MASK_ALL & ~(rows[r] | cols[c] | boxes[BOX_OF[idx]])
            n = options.bit_count()
            if n < best_n:
                best, best_options, best_n = idx, options, n
                if n <= 1:
                    break

        if best == -1:
            count += 1
            if first is None:
                first = board[:]
            return
        if best_n == 0:
            return

        r, c = divmod(best, 9)
        b = BOX_OF[best]
        options = best_options
        while options:
            bit = options & -options
            options ^= bit
            board[best] = bit.bit_length()
            rows[r] |= bit
            cols[c] |= bit
            boxes[b] |= bit
            recurse()
            rows[r] ^= bit
            cols[c] ^= bit
            boxes[b] ^= bit
            board[best] = 0
            if count >= limit:
                return

    recurse()
    return count, first
