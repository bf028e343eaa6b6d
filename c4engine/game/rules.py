"""
rules.py - Game flow and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, a single in-memory game where moves alternate between
   two sides and either side can ask the engine to move
2. ConnectFourEnv, a gymnasium-compatible environment in which the agent
   plays player one against the minimax engine. Optional: nothing else in
   the package imports it
"""

from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from c4engine.ai.minimax import MinimaxPlayer
from c4engine.config import EngineConfig
from c4engine.debug import debug
from c4engine.game.board import Board
from c4engine.game.scanner import winning_line
from c4engine.utils import ROWS, COLS, GameResult, IllegalMove, Player


class ConnectFourGame:
    """
    One Connect Four game with alternating turns.

    Player one moves first. The game keeps only the current position.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS,
                 config: Optional[EngineConfig] = None):
        debug.debug(f"Initializing {rows}x{cols} ConnectFourGame", "game")
        self.rows = rows
        self.cols = cols
        self.engine = MinimaxPlayer(config)
        self.reset()

    def reset(self) -> None:
        self.board = Board(self.rows, self.cols)
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS

    def is_valid_move(self, column: int) -> bool:
        return not self.game_result.is_game_over() and self.board.is_valid_move(column)

    def make_move(self, column: int) -> bool:
        """
        Play column for the side to move.

        Returns:
            True if the move was played, False if it was not legal
        """
        if not self.is_valid_move(column):
            debug.debug(f"Rejected move in column {column} for {self.current_player}", "game")
            return False

        self.board.drop(self.current_player, column)
        debug.debug(f"{self.current_player} played column {column}", "game")

        self.game_result = self.board.result()
        if self.game_result.is_game_over():
            debug.info(f"Game over: {self.game_result.name}", "game")
        else:
            self.current_player = self.current_player.other()
        return True

    def computer_move(self) -> int:
        """
        Let the engine play for the side to move.

        Returns:
            The column the engine played

        Raises:
            IllegalMove: if the game is already over
        """
        if self.game_result.is_game_over():
            raise IllegalMove(f"Game is over ({self.game_result.name})")

        column = self.engine.get_move(self.board, self.current_player)
        self.make_move(column)
        return column

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """The winning player, or None if the game is undecided or drawn."""
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.game_result.is_game_over():
            return []
        return self.board.legal_moves()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four against the minimax engine, following the Gymnasium interface.

    The agent is player one. After each agent move the engine answers as
    player two, so every observation is a position with player one to move.
    """

    metadata = {'render_modes': ['ascii', 'human']}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS,
                 cols: int = COLS, config: Optional[EngineConfig] = None):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(low=-1, high=1, shape=(rows, cols), dtype=np.int8)

        self.game = ConnectFourGame(rows, cols, config)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move and the engine's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)

        if not self.game.make_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        engine_column = None
        if not self.game.is_game_over():
            engine_column = self.game.computer_move()

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.game_result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif self.game.game_result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif self.game.game_result == GameResult.DRAW:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Episode finished: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()

        info = self._get_info()
        info['engine_move'] = engine_column
        return self._get_observation(), reward, terminated, False, info

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.grid.astype(np.int8)

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'game_result': self.game.game_result.name,
            'winning_line': winning_line(self.game.board.grid),
        }
