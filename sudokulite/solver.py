from __future__ import annotations

from typing import List, Optional, Tuple
import math

from .models import BLANK, Board, grid_spec


def find_unassigned_cell(grid: Board, size: int) -> Optional[Tuple[int, int]]:
    """First blank cell in row-major order, or None when the grid is full."""
    for r in range(size):
        for c in range(size):
            if grid[r][c] == BLANK:
                return r, c
    return None


def is_valid(grid: Board, row: int, col: int, num: int, size: int) -> bool:
    """True if `num` is absent from the row, the column and the sub-grid of (row, col)."""
    for i in range(size):
        if grid[row][i] == num or grid[i][col] == num:
            return False

    base = math.isqrt(size)
    start_row = row // base * base
    start_col = col // base * base
    for i in range(base):
        for j in range(base):
            if grid[start_row + i][start_col + j] == num:
                return False
    return True


def solve_sudoku(grid: Board, size: int) -> bool:
    """
    Depth-first backtracking, mutating `grid` in place.

    Always fills the first blank cell (row-major) and tries candidates in
    ascending order, so the result is deterministic. On failure every
    placement has been undone and `grid` is back to its input state.
    Uses one Python frame per blank cell; see solve_sudoku_iterative.
    """
    grid_spec(size)
    return _search(grid, size)


def _search(grid: Board, size: int) -> bool:
    cell = find_unassigned_cell(grid, size)
    if cell is None:
        return True
    row, col = cell

    for num in range(1, size + 1):
        if is_valid(grid, row, col, num, size):
            grid[row][col] = num
            if _search(grid, size):
                return True
            # backtrack
            grid[row][col] = BLANK
    return False


def solve_sudoku_iterative(grid: Board, size: int) -> bool:
    """
    Same search as solve_sudoku (same first solution, same restore on
    failure) driven by an explicit stack of [row, col, next_candidate]
    frames instead of recursion.
    """
    grid_spec(size)

    cell = find_unassigned_cell(grid, size)
    if cell is None:
        return True

    stack: List[List[int]] = [[cell[0], cell[1], 1]]
    while stack:
        frame = stack[-1]
        row, col, num = frame
        grid[row][col] = BLANK

        while num <= size and not is_valid(grid, row, col, num, size):
            num += 1

        if num > size:
            # exhausted: retreat to the previous choice point
            stack.pop()
            continue

        grid[row][col] = num
        frame[2] = num + 1

        cell = find_unassigned_cell(grid, size)
        if cell is None:
            return True
        stack.append([cell[0], cell[1], 1])

    return False
