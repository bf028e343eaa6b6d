"""
scanner.py - Four-in-a-row detection for the Connect Four engine

Every line of CONNECT_N cells on a board is described once, as a row of flat
cell indices in a table built per board shape. The winner check and the
heuristic evaluator both read windows out of that table, so they always agree
on which lines exist.

Window order is fixed: horizontal, vertical, ascending diagonal
(row + 1, col + 1), descending diagonal (row - 1, col + 1, starting from row
CONNECT_N - 1). Within an orientation windows go row by row, then column by
column. The winner is the first complete line in that order.
"""

from functools import lru_cache
from typing import List, Tuple

import numpy as np

from c4engine.utils import CONNECT_N, DIRECTION_VECTORS, Direction, Player


def _window_start_rows(direction: Direction, rows: int) -> range:
    dr, _ = DIRECTION_VECTORS[direction]
    if dr < 0:
        return range(CONNECT_N - 1, rows)
    return range(rows - dr * (CONNECT_N - 1))


@lru_cache(maxsize=32)
def window_indices(rows: int, cols: int) -> np.ndarray:
    """
    Flat indices of every window on a rows x cols board.

    Returns:
        Read-only integer array of shape (n_windows, CONNECT_N); empty with
        shape (0, CONNECT_N) if the board is too small for any line
    """
    windows = []
    for direction in Direction:
        dr, dc = DIRECTION_VECTORS[direction]
        for row in _window_start_rows(direction, rows):
            for col in range(cols - dc * (CONNECT_N - 1)):
                windows.append([(row + dr * i) * cols + (col + dc * i) for i in range(CONNECT_N)])

    table = np.array(windows, dtype=np.intp).reshape(-1, CONNECT_N)
    table.setflags(write=False)
    return table


def windows(grid: np.ndarray) -> np.ndarray:
    """Cell values of every window, shape (n_windows, CONNECT_N)."""
    grid = np.asarray(grid)
    return grid.ravel()[window_indices(*grid.shape)]


def window_counts(grid: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Per-window disc counts for player one and player two."""
    cells = windows(grid)
    return ((cells == Player.ONE.value).sum(axis=1),
            (cells == Player.TWO.value).sum(axis=1))


def _first_complete_window(grid: np.ndarray) -> Tuple[int, int]:
    ones, twos = window_counts(grid)
    complete = np.flatnonzero((ones == CONNECT_N) | (twos == CONNECT_N))
    if complete.size == 0:
        return -1, Player.EMPTY.value
    index = int(complete[0])
    return index, Player.ONE.value if ones[index] == CONNECT_N else Player.TWO.value


def winner(grid) -> int:
    """
    Find the side holding four in a row.

    Args:
        grid: 2D array or nested list of cell values

    Returns:
        +1 or -1 for the winning side, 0 if there is no complete line
    """
    _, side = _first_complete_window(np.asarray(grid))
    return side


def winning_line(grid) -> List[Tuple[int, int]]:
    """(row, col) cells of the line winner() reports, or [] if there is none."""
    grid = np.asarray(grid)
    index, _ = _first_complete_window(grid)
    if index < 0:
        return []
    cols = grid.shape[1]
    return [divmod(int(i), cols) for i in window_indices(*grid.shape)[index]]


def count_winning_lines(grid) -> Tuple[int, int]:
    """Number of complete lines held by player one and by player two."""
    ones, twos = window_counts(np.asarray(grid))
    return int((ones == CONNECT_N).sum()), int((twos == CONNECT_N).sum())
