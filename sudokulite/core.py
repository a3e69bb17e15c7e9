from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from .models import Board, Puzzle
from .settings import RECURSION_HEADROOM
from .solver import solve_sudoku, solve_sudoku_iterative
from .storage import format_board
from .validator import find_violation

log = logging.getLogger(__name__)

STRATEGIES = ("auto", "recursive", "iterative")


def _as_puzzle(puzzle: Union[Puzzle, Board]) -> Puzzle:
    if isinstance(puzzle, Puzzle):
        return puzzle
    return Puzzle.from_rows(puzzle)


def validate(puzzle: Union[Puzzle, Board]) -> bool:
    """
    True if no row, column or sub-grid repeats a filled value.

    A raw matrix goes through Puzzle.from_rows first, so a non-square
    size raises StructuralError and an out-of-range given raises
    RangeError. Duplicates never raise.
    """
    found = find_violation(_as_puzzle(puzzle).cells)
    if found is not None:
        log.info("Invalid puzzle: %s", found.describe())
        return False
    return True


def pick_strategy(puzzle: Puzzle, strategy: str = "auto") -> str:
    if strategy not in STRATEGIES:
        raise ValueError(f"strategy must be one of {', '.join(STRATEGIES)}")
    if strategy != "auto":
        return strategy
    if puzzle.blanks() + RECURSION_HEADROOM < sys.getrecursionlimit():
        return "recursive"
    return "iterative"


def solve(puzzle: Union[Puzzle, Board], strategy: str = "auto") -> bool:
    """
    Complete `puzzle` in place. Returns whether a solution was found.

    A puzzle that fails validation is left untouched and reported as
    False without searching. After an unsuccessful search the grid holds
    exactly its input values again.
    """
    p = _as_puzzle(puzzle)
    chosen = pick_strategy(p, strategy)

    if not validate(p):
        return False

    blanks = p.blanks()
    run = solve_sudoku if chosen == "recursive" else solve_sudoku_iterative

    start = time.perf_counter()
    solved = run(p.cells, p.size)
    elapsed = time.perf_counter() - start

    log.info("%s %dx%d puzzle with %d blank(s)", "Solved" if solved else "Could not solve", p.size, p.size, blanks)
    log.debug("Search (%s) took %.3f ms", chosen, elapsed * 1000.0)
    if solved and log.isEnabledFor(logging.DEBUG):
        log.debug("Solution:\n%s", format_board(p.cells))
    return solved


@contextmanager
def acquire(board: Board) -> Iterator[Puzzle]:
    """
    Hand out a private Puzzle copy of `board` for the duration of the block.
    The caller's board is never written to.
    """
    puzzle = Puzzle.from_rows(board, copy=True)
    try:
        yield puzzle
    finally:
        log.debug("Released %dx%d puzzle snapshot", puzzle.size, puzzle.size)


def solve_copy(board: Board, strategy: str = "auto") -> Optional[Board]:
    """Returns a NEW solved board, or None if invalid / unsolvable."""
    with acquire(board) as puzzle:
        if not solve(puzzle, strategy):
            return None
        return puzzle.snapshot()
