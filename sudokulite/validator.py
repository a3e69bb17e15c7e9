from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import BLANK, Board, Puzzle, Violation

log = logging.getLogger(__name__)


def _seen_before(seen: List[bool], value: int) -> bool:
    """
    Mark `value` as seen; True if it already was. Blanks are never marked.
    `value` must already be range-checked (0..N).
    """
    if value == BLANK:
        return False
    if seen[value]:
        return True
    seen[value] = True
    return False


def row_or_column_violation(board: Board, index: int) -> Optional[Violation]:
    """Scan row `index` and column `index` in one pass."""
    n = len(board)
    row_seen = [False] * (n + 1)
    col_seen = [False] * (n + 1)

    for i in range(n):
        v = board[index][i]
        if _seen_before(row_seen, v):
            log.debug("Duplicate found in row: %d at position (%d, %d)", v, index, i)
            return Violation("row", v, index, i)

        v = board[i][index]
        if _seen_before(col_seen, v):
            log.debug("Duplicate found in column: %d at position (%d, %d)", v, i, index)
            return Violation("column", v, i, index)

    return None


def sub_grid_violation(board: Board, start_row: int, start_col: int, sub_grid_size: int) -> Optional[Violation]:
    seen = [False] * (len(board) + 1)
    for i in range(sub_grid_size):
        for j in range(sub_grid_size):
            r, c = start_row + i, start_col + j
            v = board[r][c]
            if _seen_before(seen, v):
                log.debug("Duplicate found in sub grid: %d at position (%d, %d)", v, r, c)
                return Violation("sub-grid", v, r, c)
    return None


def is_valid_row_or_column(board: Board, index: int) -> bool:
    return row_or_column_violation(board, index) is None


def is_valid_sub_grid(board: Board, start_row: int, start_col: int, sub_grid_size: int) -> bool:
    return sub_grid_violation(board, start_row, start_col, sub_grid_size) is None


def find_violation(board: Board) -> Optional[Violation]:
    """
    Full scan: every row/column index first, then every sub-grid origin
    in row-major order. Returns the first violation, or None.

    The board is checked through Puzzle.from_rows before any cell is
    compared: a ragged board or an N that is not a perfect square raises
    StructuralError, a value outside 0..N raises RangeError.
    """
    spec = Puzzle.from_rows(board).spec
    n, base = spec.n, spec.base
    for i in range(n):
        found = row_or_column_violation(board, i)
        if found is not None:
            return found

    for row in range(0, n, base):
        for col in range(0, n, base):
            found = sub_grid_violation(board, row, col, base)
            if found is not None:
                return found
    return None


def is_valid_puzzle(board: Board) -> bool:
    return find_violation(board) is None


def validate_board(board: Board) -> Tuple[bool, str]:
    """
    Checks:
      - board is N x N with N a perfect square
      - values in 0..N
      - no duplicate values in any row/col/sub-grid (ignoring 0)
    Never raises; problems come back as (False, message).
    """
    try:
        puzzle = Puzzle.from_rows(board)
    except ValueError as e:
        return False, str(e)

    found = find_violation(puzzle.cells)
    if found is not None:
        return False, found.describe()
    return True, "OK"
