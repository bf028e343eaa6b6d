"""
board.py - Board representation and move primitives for the Connect Four engine

This module implements the Board class which wraps a numpy grid of cell values
and provides the two primitives the rest of the engine builds on: listing the
legal columns and dropping a disc into a column.

Row 0 is the bottom of the board. Discs fill each column from row 0 upward,
so a column is full once its cell in the top row (rows - 1) is occupied.
"""

from numbers import Integral
from typing import List, Sequence, Union

import numpy as np

from c4engine.debug import debug
from c4engine.game.scanner import winner as scan_winner
from c4engine.utils import (ROWS, COLS, Player, GameResult, IllegalMove,
                            MalformedBoard, render_board_ascii)

CELL_VALUES = (Player.TWO.value, Player.EMPTY.value, Player.ONE.value)

PlayerLike = Union[Player, int]


def legal_moves(grid) -> List[int]:
    """
    List the columns that can still take a disc.

    Works on a Board, a numpy array or a nested list. A missing or empty
    grid has no legal moves.

    Returns:
        Column indices in ascending order
    """
    if isinstance(grid, Board):
        return grid.legal_moves()

    if grid is None or len(grid) == 0 or len(grid[0]) == 0:
        return []

    top = grid[len(grid) - 1]
    return [col for col in range(len(top)) if top[col] == Player.EMPTY.value]


def validate_grid(grid) -> np.ndarray:
    """
    Check that external input describes a rectangular board of valid cells.

    Args:
        grid: Nested sequence (or numpy array) of cell values, row 0 first

    Returns:
        A fresh integer numpy array with the same contents

    Raises:
        MalformedBoard: ragged rows, cells outside {-1, 0, 1}, non-integer
            cells or non-positive dimensions
    """
    if grid is None:
        raise MalformedBoard("Board is missing")

    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise MalformedBoard(f"Board must be 2-dimensional, got {grid.ndim} dimensions")
        if grid.shape[0] == 0 or grid.shape[1] == 0:
            raise MalformedBoard(f"Board dimensions must be positive, got {grid.shape}")
        if grid.dtype.kind not in 'iu':
            raise MalformedBoard(f"Board cells must be integers, got dtype {grid.dtype}")
        if not np.isin(grid, CELL_VALUES).all():
            raise MalformedBoard("Board cells must be -1, 0 or 1")
        return grid.astype(int)

    if isinstance(grid, (str, bytes)) or not isinstance(grid, Sequence):
        raise MalformedBoard(f"Board must be a list of rows, got {type(grid).__name__}")

    if len(grid) == 0:
        raise MalformedBoard("Board dimensions must be positive, got 0 rows")

    width = None
    for r, row in enumerate(grid):
        if isinstance(row, (str, bytes)) or not isinstance(row, (Sequence, np.ndarray)):
            raise MalformedBoard(f"Row {r} is not a list")
        if width is None:
            width = len(row)
            if width == 0:
                raise MalformedBoard("Board dimensions must be positive, got 0 columns")
        elif len(row) != width:
            raise MalformedBoard(f"Row {r} has {len(row)} cells, expected {width}")

        for c, cell in enumerate(row):
            if isinstance(cell, bool) or not isinstance(cell, Integral):
                raise MalformedBoard(f"Cell ({r}, {c}) is not an integer: {cell!r}")
            if cell not in CELL_VALUES:
                raise MalformedBoard(f"Cell ({r}, {c}) must be -1, 0 or 1, got {cell}")

    return np.array(grid, dtype=int)


class Board:
    """
    A Connect Four grid of any size.

    The grid is a (rows, cols) numpy array holding 0 for empty cells and the
    player value (+1 or -1) for occupied ones.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """Create an empty board."""
        if rows <= 0 or cols <= 0:
            raise MalformedBoard(f"Board dimensions must be positive, got {rows}x{cols}")
        self.grid = np.zeros((rows, cols), dtype=int)

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """Build a board from external input, validating it first."""
        board = cls.__new__(cls)
        board.grid = validate_grid(grid)
        debug.trace(f"Loaded {board.rows}x{board.cols} board", "board")
        return board

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    def copy(self) -> 'Board':
        """Return an independent copy; changes to either board never show in the other."""
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        return new_board

    def is_valid_move(self, column: int) -> bool:
        """True if column is on the board and its top cell is empty."""
        if not 0 <= column < self.cols:
            return False
        return self.grid[self.rows - 1, column] == Player.EMPTY.value

    def legal_moves(self) -> List[int]:
        return np.flatnonzero(self.grid[self.rows - 1] == Player.EMPTY.value).tolist()

    def column_height(self, column: int) -> int:
        """Number of discs in a column."""
        return int(np.count_nonzero(self.grid[:, column]))

    def is_full(self) -> bool:
        return not (self.grid[self.rows - 1] == Player.EMPTY.value).any()

    def drop(self, player: PlayerLike, column: int) -> 'Board':
        """
        Place a disc for player in the lowest empty cell of column.

        The board is changed in place and returned for chaining.

        Raises:
            IllegalMove: if the column is out of range or already full
        """
        player = Player.from_value(player)

        if not 0 <= column < self.cols:
            raise IllegalMove(f"Column {column} is out of range 0-{self.cols - 1}")

        for row in range(self.rows):
            if self.grid[row, column] == Player.EMPTY.value:
                self.grid[row, column] = player.value
                debug.trace(f"Placed {player} at ({row}, {column})", "board")
                return self

        raise IllegalMove(f"Column {column} is full")

    def copy_and_drop(self, player: PlayerLike, column: int) -> 'Board':
        """Return a new board with the move applied, leaving this one untouched."""
        return self.copy().drop(player, column)

    def winner(self) -> int:
        """+1 or -1 for the side with four in a row, 0 if nobody has one."""
        return scan_winner(self.grid)

    def result(self) -> GameResult:
        return GameResult.from_winner(self.winner(), self.is_full())

    def to_list(self) -> List[List[int]]:
        return self.grid.tolist()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool((self.grid == other.grid).all())

    __hash__ = None

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, discs={int(np.count_nonzero(self.grid))})"

    def __str__(self) -> str:
        return self.render()
