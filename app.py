from __future__ import annotations

import logging
import time
from typing import List

import streamlit as st

from sudokulite.core import solve_copy
from sudokulite.models import Board, Puzzle, grid_spec
from sudokulite.settings import DEFAULT_SIZE, configure_logging, resolve_sizes
from sudokulite.storage import board_from_csv, board_to_csv, board_to_html, parse_cells
from sudokulite.validator import validate_board

configure_logging()
log = logging.getLogger("sudokulite.app")

SIZES = resolve_sizes()


def cell_key(n: int, r: int, c: int) -> str:
    # include N so changing size doesn't collide with old widget state
    return f"cell_{n}_{r}_{c}"


def reset_board(n: int) -> None:
    for r in range(n):
        for c in range(n):
            st.session_state[cell_key(n, r, c)] = ""


def load_into_widgets(board: Board) -> None:
    n = len(board)
    for r in range(n):
        for c in range(n):
            v = board[r][c]
            st.session_state[cell_key(n, r, c)] = "" if v == 0 else str(v)


def read_widgets(n: int) -> List[List[str]]:
    return [[str(st.session_state.get(cell_key(n, r, c), "")) for c in range(n)] for r in range(n)]


def show_board(board: Board, title: str) -> None:
    st.markdown(board_to_html(board, title), unsafe_allow_html=True)


st.set_page_config(page_title="Sudoku Solver", layout="wide")

st.markdown(
    """
<style>
div[data-testid="stTextInput"] input {
    text-align: center;
    font-size: 22px !important;
    height: 2.8rem;
    padding: 0.25rem 0.25rem;
}
div[data-testid="stTextInput"] { margin-bottom: 0rem; }

.sudoku-wrap { margin-top: 0.5rem; }
.sudoku-title { font-size: 1.05rem; font-weight: 600; margin: 0.5rem 0 0.35rem 0; }
table.sudoku { border-collapse: collapse; }
table.sudoku td {
    width: 2.8rem;
    height: 2.8rem;
    text-align: center;
    vertical-align: middle;
    font-size: 22px;
    border: 1px solid rgba(49, 51, 63, 0.25);
}
table.sudoku td.top { border-top: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.left { border-left: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.bottom { border-bottom: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.right { border-right: 3px solid rgba(49, 51, 63, 0.65); }
.sudoku-spacer { height: 0.25rem; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("Sudoku Solver")
st.caption("Leave cells blank (or enter 0). Allowed values: 1..N. Click **Solve** to get the solution.")

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Settings")
    if "size" not in st.session_state:
        st.session_state.size = DEFAULT_SIZE if DEFAULT_SIZE in SIZES else SIZES[0]

    size = st.selectbox("Grid size", SIZES, index=SIZES.index(st.session_state.size))

    if size != st.session_state.size:
        st.session_state.size = size
        reset_board(size)

    st.divider()
    if st.button("Clear", use_container_width=True):
        reset_board(st.session_state.size)

    uploaded = st.file_uploader("Load puzzle (CSV)", type=["csv"])
    if uploaded is not None and st.button("Load into grid", use_container_width=True):
        try:
            loaded = board_from_csv(uploaded.getvalue())
            if len(loaded) not in SIZES:
                raise ValueError(f"{len(loaded)}x{len(loaded)} boards are not offered (sizes: {SIZES}).")
            Puzzle.from_rows(loaded)
        except ValueError as e:
            st.error(f"Could not load puzzle: {e}")
        else:
            st.session_state.size = len(loaded)
            load_into_widgets(loaded)
            st.rerun()

n = int(st.session_state.size)
base = grid_spec(n).base

# ---- Input grid in a form (prevents rerun on every keystroke) ----
st.subheader("Input")

with st.form("sudoku_form", clear_on_submit=False):
    spacer_w = 0.18
    widths = []
    for g in range(base):
        widths.extend([1.0] * base)
        if g != base - 1:
            widths.append(spacer_w)

    for r in range(n):
        cols = st.columns(widths, gap="small")
        col_idx = 0
        for c in range(n):
            if c > 0 and c % base == 0:
                col_idx += 1  # skip spacer column
            with cols[col_idx]:
                key = cell_key(n, r, c)
                if key not in st.session_state:
                    st.session_state[key] = ""
                st.text_input(
                    label="",
                    key=key,
                    label_visibility="collapsed",
                    max_chars=len(str(n)),
                    placeholder="",
                )
            col_idx += 1

        if (r + 1) % base == 0 and (r + 1) != n:
            st.markdown("<div class='sudoku-spacer'></div>", unsafe_allow_html=True)

    colA, colB, colC = st.columns([1, 1, 2])
    validate_clicked = colA.form_submit_button("Validate", use_container_width=True)
    solve_clicked = colB.form_submit_button("Solve", use_container_width=True)

# ---- Actions ----
if validate_clicked or solve_clicked:
    board, parse_errors = parse_cells(read_widgets(n), n)
    if parse_errors:
        st.error("Please fix these input issues:")
        st.write("\n".join([f"- {e}" for e in parse_errors]))
    else:
        ok, msg = validate_board(board)
        if not ok:
            st.error(f"Invalid puzzle. {msg}")
        else:
            st.success("Board looks valid.")
            show_board(board, "Current board (preview)")

            if solve_clicked:
                start = time.perf_counter()
                solution = solve_copy(board)
                elapsed_ms = (time.perf_counter() - start) * 1000.0
                log.debug("Solved in %.3f milliseconds", elapsed_ms)

                if solution is None:
                    st.error("The puzzle cannot be solved. Please check your input.")
                else:
                    st.success("Solution found.")
                    show_board(solution, "Solution")
                    st.caption(f"Solved in {elapsed_ms:.1f} ms")

                    st.download_button(
                        "Download solution as CSV",
                        data=board_to_csv(solution),
                        file_name=f"sudoku_solution_{n}x{n}.csv",
                        mime="text/csv",
                        use_container_width=False,
                    )
else:
    board, _ = parse_cells(read_widgets(n), n)
    show_board(board, "Current board (preview)")
