from __future__ import annotations

from dataclasses import dataclass
from typing import List
import math

Board = List[List[int]]  # 0 = empty, values 1..N

BLANK = 0


class StructuralError(ValueError):
    """The matrix cannot describe a Sudoku grid (ragged, empty, N not a perfect square)."""


class RangeError(ValueError):
    """A given lies outside 0..N or is not an integer."""


@dataclass(frozen=True)
class GridSpec:
    n: int          # board size: N x N (e.g., 9)
    base: int       # subgrid size: base x base (e.g., 3)


def grid_spec(n: int) -> GridSpec:
    """Validate N and build basic constants."""
    if n < 1:
        raise StructuralError(f"Invalid size: {n}. Only perfect squares are supported (4, 9, 16, ...).")
    base = math.isqrt(n)
    if base * base != n:
        raise StructuralError(f"Invalid size: {n}. Only perfect squares are supported (4, 9, 16, ...).")
    return GridSpec(n=n, base=base)


@dataclass(frozen=True)
class Violation:
    kind: str   # "row" | "column" | "sub-grid"
    value: int
    row: int    # 0-indexed
    col: int    # 0-indexed

    def describe(self) -> str:
        return f"Duplicate {self.value} in {self.kind} (cell {self.row + 1},{self.col + 1})."


@dataclass
class Puzzle:
    cells: Board
    spec: GridSpec

    @property
    def size(self) -> int:
        return self.spec.n

    @property
    def base(self) -> int:
        return self.spec.base

    @staticmethod
    def from_rows(rows: Board, copy: bool = False) -> "Puzzle":
        """
        Check the structural and range preconditions and wrap `rows`.
        Without `copy` the Puzzle shares the caller's lists, so the
        solver's in-place writes show up in `rows`.
        """
        n = len(rows)
        if n == 0 or any(len(row) != n for row in rows):
            raise StructuralError("Board must be square (N x N).")
        spec = grid_spec(n)

        for r, row in enumerate(rows):
            for c, v in enumerate(row):
                if isinstance(v, bool) or not isinstance(v, int):
                    raise RangeError(f"Invalid value at ({r+1},{c+1}): {v!r} (not an integer).")
                if v < 0 or v > n:
                    raise RangeError(f"Invalid value at ({r+1},{c+1}): {v} (allowed: 0..{n}).")

        cells = [list(row) for row in rows] if copy else rows
        return Puzzle(cells=cells, spec=spec)

    def blanks(self) -> int:
        return sum(row.count(BLANK) for row in self.cells)

    def is_complete(self) -> bool:
        return self.blanks() == 0

    def snapshot(self) -> Board:
        return [row[:] for row in self.cells]
