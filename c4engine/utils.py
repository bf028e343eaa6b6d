"""
utils.py - Constants, enumerations and shared helpers for the Connect Four engine

Board convention used everywhere in the package: row 0 is the bottom row,
cells hold 0 (empty), +1 (player one) or -1 (player two).
"""

import json
from enum import Enum, auto
from typing import Sequence

import numpy as np

# Board defaults (the engine itself takes its dimensions from the grid)
ROWS = 6
COLS = 7
CONNECT_N = 4

# Search defaults
DEFAULT_DEPTH = 5
WIN_SCORE = 100000
MIN_INT32 = -2**31
MAX_INT32 = 2**31 - 1


class Connect4Error(Exception):
    """Base class for engine errors."""


class MalformedBoard(Connect4Error, ValueError):
    """Raised when a board or request does not describe a valid position."""


class IllegalMove(Connect4Error, ValueError):
    """Raised when a move cannot be played on the given board."""


class Player(Enum):
    """Players and cell states. The value doubles as the score sign."""
    EMPTY = 0
    ONE = 1
    TWO = -1

    def other(self) -> 'Player':
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @classmethod
    def from_value(cls, value) -> 'Player':
        """Map +1/-1 to a player, raising MalformedBoard for anything else."""
        if isinstance(value, Player):
            return value
        if isinstance(value, (bool, float)) or value not in (1, -1):
            raise MalformedBoard(f"Player must be 1 or -1, got {value!r}")
        return cls(int(value))

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        return "O"


class GameResult(Enum):
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def from_winner(cls, winner: int, board_full: bool) -> 'GameResult':
        if winner == Player.ONE.value:
            return cls.PLAYER_ONE_WIN
        if winner == Player.TWO.value:
            return cls.PLAYER_TWO_WIN
        return cls.DRAW if board_full else cls.IN_PROGRESS


class Direction(Enum):
    """Line orientations, in the order the scanner visits them."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # (row + 1, col + 1)
    DIAGONAL_DOWN = auto()  # (row - 1, col + 1)


# (row, col) step for each orientation
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as ASCII art, top row first.

    Args:
        grid: 2D array of cell values (row 0 is the bottom)

    Returns:
        Multi-line string with a column index footer
    """
    rows, cols = grid.shape
    lines = ["|" + "-" * (cols * 2 - 1) + "|"]

    for row in range(rows - 1, -1, -1):
        cells = [str(Player(int(grid[row, col]))) for col in range(cols)]
        lines.append("|" + " ".join(cells) + "|")

    lines.append("|" + "-" * (cols * 2 - 1) + "|")
    lines.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")
    return "\n".join(lines)


def parse_position(text: str, rows: int = ROWS, cols: int = COLS) -> Sequence[Sequence[int]]:
    """
    Parse a position given on the command line.

    Accepts either a JSON 2D list or a flat comma-separated list of
    rows * cols values (row 0 first).
    """
    text = text.strip()
    if text.startswith("["):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedBoard(f"Invalid JSON position: {e}") from e

    try:
        values = [int(v) for v in text.split(",") if v.strip()]
    except ValueError as e:
        raise MalformedBoard(f"Invalid position value: {e}") from e

    if len(values) != rows * cols:
        raise MalformedBoard(f"Position must have {rows * cols} values, got {len(values)}")

    return [values[r * cols:(r + 1) * cols] for r in range(rows)]
