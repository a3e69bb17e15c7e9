import logging

import pytest

from sudokulite.models import RangeError, StructuralError
from sudokulite.validator import (
    find_violation,
    is_valid_puzzle,
    is_valid_row_or_column,
    is_valid_sub_grid,
    validate_board,
)

SOLVED_4 = [
    [1, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 1],
]

PARTIAL_9 = [
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


def empty(n):
    return [[0] * n for _ in range(n)]


# ---------- Complete and partial boards ----------


def test_solved_board_is_valid():
    assert is_valid_puzzle(SOLVED_4)


def test_incomplete_board_is_valid():
    assert is_valid_puzzle(PARTIAL_9)


@pytest.mark.parametrize("n", [1, 4, 9, 16])
def test_blank_board_is_valid(n):
    assert is_valid_puzzle(empty(n))


def test_blanks_are_never_counted_as_duplicates():
    board = empty(4)
    board[0][0] = 2
    assert is_valid_row_or_column(board, 0)
    assert is_valid_sub_grid(board, 0, 0, 2)


# ---------- Violations ----------


def test_two_ones_in_a_row():
    board = [
        [1, 1, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]

    assert not is_valid_puzzle(board)
    assert not is_valid_row_or_column(board, 0)
    assert find_violation(board).kind == "row"


def test_column_violation():
    board = [
        [5, 0, 0, 0, 0, 0, 0, 0, 0],
        [5, 0, 0, 0, 0, 0, 0, 0, 0],
    ] + [[0] * 9 for _ in range(7)]

    found = find_violation(board)
    assert not is_valid_puzzle(board)
    assert found.kind == "column"
    assert (found.value, found.row, found.col) == (5, 1, 0)


def test_sub_grid_violation():
    board = [
        [1, 2, 0, 0],
        [3, 1, 0, 0],  # duplicate "1" in top-left 2x2 block
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]

    assert is_valid_row_or_column(board, 0)
    assert is_valid_row_or_column(board, 1)
    assert not is_valid_sub_grid(board, 0, 0, 2)
    found = find_violation(board)
    assert (found.kind, found.value, found.row, found.col) == ("sub-grid", 1, 1, 1)


def test_duplicate_anywhere_in_solved_board_is_caught():
    for r in range(4):
        for c in range(4):
            board = [row[:] for row in SOLVED_4]
            board[r][c] = board[r][(c + 1) % 4]
            assert not is_valid_puzzle(board)


def test_rows_are_reported_before_sub_grids():
    board = [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [2, 0, 0, 2],
    ]
    board[0][0] = 3
    board[1][1] = 3
    assert find_violation(board).kind == "row"


def test_duplicates_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="sudokulite.validator"):
        assert not is_valid_puzzle([[4, 0, 0, 4], [0] * 4, [0] * 4, [0] * 4])
    assert "Duplicate found in row" in caplog.text


# ---------- Sizes ----------


def test_non_square_size_is_rejected():
    with pytest.raises(StructuralError):
        is_valid_puzzle(empty(6))


def test_non_square_size_is_rejected_before_any_cell_is_compared():
    with pytest.raises(StructuralError):
        is_valid_puzzle([[1, 1, 0], [0, 0, 0], [0, 0, 0]])
    with pytest.raises(StructuralError):
        find_violation([[1, 1, 0, 0], [0, 0, 0], [0] * 4, [0] * 4])


@pytest.mark.parametrize("bad", [-1, 5])
def test_out_of_range_value_is_rejected(bad):
    board = empty(4)
    board[0][0] = 4
    board[0][3] = bad
    with pytest.raises(RangeError):
        is_valid_puzzle(board)


def test_validate_board_reports_messages():
    assert validate_board(SOLVED_4) == (True, "OK")

    ok, msg = validate_board([[1, 1, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    assert not ok
    assert "row" in msg

    ok, msg = validate_board(empty(3))
    assert not ok
    assert "perfect square" in msg

    ok, msg = validate_board([[9, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    assert not ok
    assert "0..4" in msg

    ok, msg = validate_board([[1, 2], [3]])
    assert not ok
    assert "square" in msg
