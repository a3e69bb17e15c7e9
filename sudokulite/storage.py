from __future__ import annotations

import html
import io
import math
import os
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from .models import BLANK, Board, RangeError, StructuralError, grid_spec


def parse_cells(raw: Sequence[Sequence[Optional[str]]], n: int) -> Tuple[Board, List[str]]:
    """
    Build an int board from widget text.
    Returns (board, errors). Empty string or '0' => 0.
    """
    errors: List[str] = []
    board: Board = [[BLANK] * n for _ in range(n)]

    for r in range(n):
        for c in range(n):
            text = str(raw[r][c] or "").strip()
            if text == "":
                continue

            if not text.isdecimal():
                errors.append(f"Cell ({r+1},{c+1}) is not a number: '{text}'")
                continue

            v = int(text)
            if 1 <= v <= n:
                board[r][c] = v
            elif v != 0:
                errors.append(f"Cell ({r+1},{c+1}) out of range: {v} (allowed 1..{n}, or blank/0).")

    return board, errors


def board_from_flat(values: Sequence[int], n: Optional[int] = None) -> Board:
    """Row-major list of N*N values -> N x N board."""
    if n is None:
        n = math.isqrt(len(values))
    if n * n != len(values) or n == 0:
        raise StructuralError(f"Expected {n * n} values for a {n}x{n} board, got {len(values)}.")
    return [list(values[r * n:(r + 1) * n]) for r in range(n)]


def board_to_csv(board: Board) -> bytes:
    df = pd.DataFrame(board)
    return df.to_csv(header=False, index=False).encode("utf-8")


def board_from_csv(data: Union[bytes, str]) -> Board:
    """
    Read a headerless CSV, one board row per line. Blank fields are 0.
    Every line must carry N fields for N lines; pandas would pad short
    lines with blanks, so field counts are checked on the raw text.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")

    lines = [line for line in data.splitlines() if line.strip()]
    for r, line in enumerate(lines):
        fields = len(line.split(","))
        if fields != len(lines):
            raise StructuralError(f"Board must be square (N x N): line {r+1} has {fields} field(s) for {len(lines)} line(s).")

    try:
        df = pd.read_csv(io.StringIO(data), header=None, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise StructuralError("CSV file contains no board.")

    board: Board = []
    for r, row in enumerate(df.itertuples(index=False)):
        out: List[int] = []
        for c, raw in enumerate(row):
            text = str(raw).strip()
            if text == "":
                out.append(BLANK)
            elif text.isdecimal():
                out.append(int(text))
            else:
                raise RangeError(f"Invalid value at ({r+1},{c+1}): '{text}' (not an integer).")
        board.append(out)
    return board


def load_board(path: str) -> Board:
    with open(path, "rb") as f:
        return board_from_csv(f.read())


def save_board(board: Board, path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "wb") as f:
        f.write(board_to_csv(board))


def format_board(board: Board) -> str:
    """Plain-text rendering with '.' for blanks and sub-grid separators."""
    n = len(board)
    base = grid_spec(n).base
    width = len(str(n))

    lines: List[str] = []
    for r, row in enumerate(board):
        if r and r % base == 0:
            lines.append("-+-".join(["-" * (base * (width + 1) - 1)] * base))
        chunks = []
        for g in range(base):
            cells = row[g * base:(g + 1) * base]
            chunks.append(" ".join(("." if v == BLANK else str(v)).rjust(width) for v in cells))
        lines.append(" | ".join(chunks))
    return "\n".join(lines)


def _border_classes(r: int, c: int, base: int) -> List[str]:
    sides = []
    if r % base == 0:
        sides.append("top")
    if c % base == 0:
        sides.append("left")
    if (r + 1) % base == 0:
        sides.append("bottom")
    if (c + 1) % base == 0:
        sides.append("right")
    return sides


def board_to_html(board: Board, title: str) -> str:
    """
    HTML table for the board; sub-grid edges carry top/left/bottom/right
    classes so the page stylesheet can draw them thick.
    """
    base = grid_spec(len(board)).base

    parts = [f"<div class='sudoku-wrap'><div class='sudoku-title'>{html.escape(title)}</div>", "<table class='sudoku'>"]
    for r, row in enumerate(board):
        cells = []
        for c, v in enumerate(row):
            sides = _border_classes(r, c, base)
            cls_attr = f" class='{' '.join(sides)}'" if sides else ""
            cells.append(f"<td{cls_attr}>{'' if v == BLANK else v}</td>")
        parts.append("<tr>" + "".join(cells) + "</tr>")
    parts.append("</table></div>")
    return "".join(parts)
