"""Human-style deduction techniques over a flat board and candidate masks.

Every technique takes ``(board, candidates)``, mutates both in place and
returns True only when it filled a cell or removed at least one candidate.
Techniques never add candidates back and never clear a filled cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Sequence

from .candidates import Candidates, bit, place
from .grid import BOX_OF, BOXES, CELLS, COLS, DIGITS, PEERS, ROWS, UNITS, Board, sees


def _strip(
    board: Board,
    candidates: Candidates,
    cells: Sequence[int],
    mask: int,
    exclude: Sequence[int] = (),
) -> bool:
    """Clear mask from every open cell of cells that is not in exclude."""
    changed = False
    for idx in cells:
        if idx in exclude or board[idx] != 0:
            continue
        if candidates[idx] & mask:
            candidates[idx] &= ~mask
            changed = True
    return changed


def _spots(board: Board, candidates: Candidates, cells: Sequence[int], mask: int) -> list[int]:
    return [idx for idx in cells if board[idx] == 0 and candidates[idx] & mask]


def apply_naked_singles(board: Board, candidates: Candidates) -> bool:
    """Place every empty cell that has exactly one candidate left."""
    progress = False
    for idx in range(CELLS):
        mask = candidates[idx]
        if board[idx] == 0 and mask and mask & (mask - 1) == 0:
            place(board, candidates, idx, mask.bit_length())
            progress = True
    return progress


def apply_hidden_singles(board: Board, candidates: Candidates) -> bool:
    """Place a digit that fits in only one cell of a row, column or box."""
    progress = False
    for unit in UNITS:
        for value in DIGITS:
            spots = _spots(board, candidates, unit, bit(value))
            if len(spots) == 1:
                place(board, candidates, spots[0], value)
                progress = True
    return progress


def apply_naked_subsets(board: Board, candidates: Candidates) -> bool:
    """Naked pairs and triples.

    When k cells of a unit together hold only k digits, those digits are
    locked into them and can be removed from the rest of the unit.
    """
    progress = False
    for unit in UNITS:
        open_cells = [idx for idx in unit if board[idx] == 0]
        for size in (2, 3):
            pool = [idx for idx in open_cells if 2 <= candidates[idx].bit_count() <= size]
            for group in combinations(pool, size):
                union = 0
                for idx in group:
                    union |= candidates[idx]
                if union.bit_count() != size:
                    continue
                if _strip(board, candidates, open_cells, union, exclude=group):
                    progress = True
    return progress


def apply_hidden_subsets(board: Board, candidates: Candidates) -> bool:
    """Hidden pairs and triples.

    When k digits of a unit can only go in the same k cells, those cells can
    hold nothing else.
    """
    progress = False
    for unit in UNITS:
        for size in (2, 3):
            places = {value: _spots(board, candidates, unit, bit(value)) for value in DIGITS}
            pool = [value for value in DIGITS if 2 <= len(places[value]) <= size]
            for group in combinations(pool, size):
                cells: set[int] = set()
                for value in group:
                    cells.update(places[value])
                if len(cells) != size:
                    continue
                keep = 0
                for value in group:
                    keep |= bit(value)
                for idx in cells:
                    if candidates[idx] & ~keep:
                        candidates[idx] &= keep
                        progress = True
    return progress


def apply_pointing_pairs(board: Board, candidates: Candidates) -> bool:
    """Locked candidates in both directions.

    Pointing: a digit confined to one row or column inside a box is removed
    from that line outside the box. Claiming: a digit confined to one box
    inside a row or column is removed from the rest of that box.
    """
    progress = False
    for box in BOXES:
        for value in DIGITS:
            mask = bit(value)
            spots = _spots(board, candidates, box, mask)
            if not spots:
                continue
            rows = {idx // 9 for idx in spots}
            if len(rows) == 1:
                if _strip(board, candidates, ROWS[rows.pop()], mask, exclude=box):
                    progress = True
            cols = {idx % 9 for idx in spots}
            if len(cols) == 1:
                if _strip(board, candidates, COLS[cols.pop()], mask, exclude=box):
                    progress = True

    for line in ROWS + COLS:
        for value in DIGITS:
            mask = bit(value)
            spots = _spots(board, candidates, line, mask)
            if not spots:
                continue
            boxes = {BOX_OF[idx] for idx in spots}
            if len(boxes) == 1:
                if _strip(board, candidates, BOXES[boxes.pop()], mask, exclude=line):
                    progress = True
    return progress


def _apply_fish(board: Board, candidates: Candidates, size: int) -> bool:
    """Basic fish of the given size, row-based and then column-based.

    If a digit's positions in ``size`` base lines all fall within ``size``
    cover lines, the digit is removed from the cover lines everywhere else.
    """
    progress = False
    for value in DIGITS:
        mask = bit(value)
        for base, cover in ((ROWS, COLS), (COLS, ROWS)):
            lines = []
            for i, line in enumerate(base):
                footprint = 0
                for j, idx in enumerate(line):
                    if board[idx] == 0 and candidates[idx] & mask:
                        footprint |= 1 << j
                if 2 <= footprint.bit_count() <= size:
                    lines.append((i, footprint))

            for group in combinations(lines, size):
                union = 0
                for _, footprint in group:
                    union |= footprint
                if union.bit_count() != size:
                    continue
                chosen = {i for i, _ in group}
                for j in range(9):
                    if not (union >> j) & 1:
                        continue
                    others = [idx for i, idx in enumerate(cover[j]) if i not in chosen]
                    if _strip(board, candidates, others, mask):
                        progress = True
    return progress


def apply_x_wing(board: Board, candidates: Candidates) -> bool:
    return _apply_fish(board, candidates, 2)


def apply_swordfish(board: Board, candidates: Candidates) -> bool:
    return _apply_fish(board, candidates, 3)


def apply_xy_wing(board: Board, candidates: Candidates) -> bool:
    """XY-Wing.

    A bivalue pivot {X,Y} sees two bivalue wings {X,Z} and {Y,Z}. Whichever
    value the pivot takes, one wing becomes Z, so any cell seeing both wings
    cannot be Z.
    """
    progress = False
    for pivot in range(CELLS):
        xy = candidates[pivot]
        if board[pivot] != 0 or xy.bit_count() != 2:
            continue
        wings = [
            peer
            for peer in PEERS[pivot]
            if board[peer] == 0 and candidates[peer].bit_count() == 2
        ]
        for w1, w2 in combinations(wings, 2):
            m1 = candidates[w1]
            m2 = candidates[w2]
            shared1 = m1 & xy
            shared2 = m2 & xy
            if shared1.bit_count() != 1 or shared2.bit_count() != 1 or shared1 == shared2:
                continue
            z = m1 & ~shared1
            if not z or m2 != shared2 | z:
                continue
            for target in PEERS[w1]:
                if target == pivot or target == w2:
                    continue
                if board[target] == 0 and candidates[target] & z and sees(target, w2):
                    candidates[target] &= ~z
                    progress = True
    return progress


@dataclass(frozen=True)
class Technique:
    """A named deduction with its difficulty tier."""

    name: str
    level: int
    apply: Callable[[Board, Candidates], bool]


# Ascending cost; the logic solver restarts from the top after any progress.
TECHNIQUES: tuple[Technique, ...] = (
    Technique("Naked Single", 1, apply_naked_singles),
    Technique("Hidden Single", 2, apply_hidden_singles),
    Technique("Naked Subset", 3, apply_naked_subsets),
    Technique("Hidden Subset", 3, apply_hidden_subsets),
    Technique("Pointing Pairs", 4, apply_pointing_pairs),
    Technique("X-Wing", 5, apply_x_wing),
    Technique("Swordfish", 6, apply_swordfish),
    Technique("XY-Wing", 7, apply_xy_wing),
)

TECHNIQUE_NAMES = frozenset(t.name for t in TECHNIQUES)
MAX_LEVEL = max(t.level for t in TECHNIQUES)
