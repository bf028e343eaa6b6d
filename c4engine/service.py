"""
service.py - Request handlers for a Connect Four game server

Each handler takes a decoded request body (a mapping with "board", "player"
and "column" keys) and returns the response body as a plain dict, ready for
whatever transport sits in front of it to serialize. Handlers never modify
the board they were given.

Invalid requests raise MalformedBoard; moves that cannot be played raise
IllegalMove. Both are ValueError subclasses, so a transport can map them to
a "bad request" answer in one place.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from c4engine.ai.minimax import MinimaxPlayer
from c4engine.config import EngineConfig
from c4engine.debug import debug
from c4engine.game.board import Board
from c4engine.utils import IllegalMove, MalformedBoard, Player

# Side the computer plays when the request does not say
COMPUTER_PLAYER = Player.TWO


@dataclass
class GameState:
    """Decoded request: the position, the side concerned and a column."""
    board: Board
    player: Player
    column: Optional[int] = None

    @classmethod
    def from_request(cls, payload: Mapping[str, Any],
                     default_player: Player = Player.ONE) -> 'GameState':
        if not isinstance(payload, Mapping):
            raise MalformedBoard(f"Request must be an object, got {type(payload).__name__}")

        board = Board.from_grid(payload.get("board"))

        player = payload.get("player")
        player = default_player if player in (None, 0) else Player.from_value(player)

        column = payload.get("column")
        if column is not None and (isinstance(column, bool) or not isinstance(column, int)):
            raise MalformedBoard(f"Column must be an integer, got {column!r}")

        return cls(board, player, column)


def check_win(payload: Mapping[str, Any]) -> Dict[str, int]:
    """Report the winner: 1 or -1, or 0 while nobody has four in a row."""
    state = GameState.from_request(payload)
    winner = state.board.winner()
    debug.debug(f"check_win -> {winner}", "service")
    return {"winner": winner}


def valid_moves(payload: Mapping[str, Any]) -> Dict[str, List[int]]:
    """List the playable columns."""
    state = GameState.from_request(payload)
    return {"valid_moves": state.board.legal_moves()}


def user_move(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply the requested player's move and return the new board."""
    state = GameState.from_request(payload)
    if state.column is None:
        raise MalformedBoard("Request has no column")

    board = state.board.copy_and_drop(state.player, state.column)
    debug.debug(f"user_move: {state.player} -> column {state.column}", "service")
    return {
        "board": board.to_list(),
        "message": f"Move executed at column {state.column}",
    }


def computer_move(payload: Mapping[str, Any],
                  config: Optional[EngineConfig] = None) -> Dict[str, Any]:
    """
    Let the engine choose and play a move.

    The engine moves for the request's player, or for player two when the
    request does not name one.

    Raises:
        IllegalMove: if the game is already won or the board is full
    """
    state = GameState.from_request(payload, default_player=COMPUTER_PLAYER)

    if state.board.winner() != 0:
        raise IllegalMove("Game is already over")

    column = MinimaxPlayer(config).get_move(state.board, state.player)
    if column is None:
        raise IllegalMove("No legal moves left")

    board = state.board.copy_and_drop(state.player, column)
    return {
        "board": board.to_list(),
        "column": column,
        "message": f"Computer moved to column {column}",
    }
