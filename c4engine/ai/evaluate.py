"""
evaluate.py - Static evaluation of Connect Four positions

The score is signed: positive values favour player one (+1), negative values
favour player two (-1). It is built from two parts:
1. Center bias: discs in the center column(s) are worth 2 points each
2. Window scoring: every line of four that only one side occupies is worth
   1, 10 or 50 points for 1, 2 or 3 discs

Complete lines of four score nothing here; the search detects wins before it
ever asks for a static score.
"""

from typing import Sequence, Tuple

import numpy as np

from c4engine.game.scanner import window_counts
from c4engine.utils import Player

CENTER_WEIGHT = 2

# Indexed by number of discs in a window held by one side only
WINDOW_WEIGHTS = np.array([0, 1, 10, 50, 0])


def center_columns(cols: int) -> Tuple[int, ...]:
    """The two middle columns of an even-width board, the middle one otherwise."""
    if cols % 2 == 0:
        return (cols // 2 - 1, cols // 2)
    return (cols // 2,)


def score_window(cells: Sequence[int]) -> int:
    """Score a single window of CONNECT_N cells."""
    ones = sum(1 for cell in cells if cell == Player.ONE.value)
    twos = sum(1 for cell in cells if cell == Player.TWO.value)

    if ones and twos:
        return 0
    if ones:
        return int(WINDOW_WEIGHTS[ones])
    if twos:
        return -int(WINDOW_WEIGHTS[twos])
    return 0


def center_score(grid: np.ndarray) -> int:
    columns = list(center_columns(grid.shape[1]))
    return CENTER_WEIGHT * int(grid[:, columns].sum())


def evaluate(grid) -> int:
    """
    Heuristic score of a position.

    Args:
        grid: 2D array or nested list of cell values (row 0 at the bottom)

    Returns:
        Integer score, positive when player one stands better
    """
    grid = np.asarray(grid)
    ones, twos = window_counts(grid)

    # Windows held by both sides score nothing
    mixed = (ones > 0) & (twos > 0)
    ones = np.where(mixed, 0, ones)
    twos = np.where(mixed, 0, twos)

    windows_score = int(WINDOW_WEIGHTS[ones].sum()) - int(WINDOW_WEIGHTS[twos].sum())
    return center_score(grid) + windows_score

