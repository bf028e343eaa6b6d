"""
minimax.py - Minimax search with alpha-beta pruning for Connect Four

This module provides the `minimax` search function and the MinimaxPlayer
class that wraps it with configuration, timing and optional parallelism.

Player one (+1) is always the maximizing side and player two (-1) the
minimizing side, so scores read the same way at every depth:
- A won position scores winner * (depth + 1) * win_score, so a win found
  closer to the root (more depth left) is worth more than a later one
- At the depth limit the position gets its static evaluation
- A full board with no winner is a draw worth 0

Columns are tried in ascending order and a later column only replaces the
current best on a strictly better score, so ties go to the lowest column.
Every branch searches its own copy of the board.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Optional, Tuple

from c4engine.ai.evaluate import evaluate
from c4engine.config import EngineConfig
from c4engine.debug import debug, DebugLevel
from c4engine.game.board import Board
from c4engine.utils import MIN_INT32, MAX_INT32, WIN_SCORE, Player


class SearchResult(NamedTuple):
    """Score of a searched position and the column chosen there (None at leaves)."""
    score: int
    column: Optional[int]
    nodes: int = 1


class _SearchContext:
    """Per-search bookkeeping: node count and the optional deadline."""

    def __init__(self, win_score: int, deadline: Optional[float] = None):
        self.win_score = win_score
        self.deadline = deadline
        self.nodes = 0
        self.timed_out = False

    def expired(self) -> bool:
        if self.deadline is None:
            return False
        if not self.timed_out and time.monotonic() >= self.deadline:
            self.timed_out = True
        return self.timed_out


def search_bounds(depth: int, win_score: int) -> Tuple[float, float]:
    """
    Default alpha/beta for a search of the given depth.

    The signed 32-bit limits, or infinities once a won position can score
    (depth + 1) * win_score beyond them.
    """
    if (depth + 1) * win_score < MAX_INT32:
        return MIN_INT32, MAX_INT32
    return -math.inf, math.inf


def minimax(board: Board, depth: int, alpha: Optional[float] = None,
            beta: Optional[float] = None, maximizing: bool = True,
            win_score: int = WIN_SCORE, deadline: Optional[float] = None) -> SearchResult:
    """
    Search the game tree below board.

    Args:
        board: Position to search (not modified)
        depth: Remaining plies to look ahead
        alpha: Score the maximizer is already guaranteed (default from search_bounds)
        beta: Score the minimizer is already guaranteed (default from search_bounds)
        maximizing: True if player one (+1) is to move
        win_score: Base score of a won position
        deadline: time.monotonic() value after which nodes below the root
            are scored statically instead of searched

    Returns:
        SearchResult with the score, the best column (None if the position
        is terminal or depth is 0) and the number of nodes visited
    """
    default_alpha, default_beta = search_bounds(depth, win_score)
    alpha = default_alpha if alpha is None else alpha
    beta = default_beta if beta is None else beta

    context = _SearchContext(win_score, deadline)
    score, column = _search(board, depth, alpha, beta, maximizing, context, root=True)
    return SearchResult(score, column, context.nodes)


def _search(board: Board, depth: int, alpha: float, beta: float, maximizing: bool,
            context: _SearchContext, root: bool = False) -> Tuple[int, Optional[int]]:
    context.nodes += 1

    valid_moves = board.legal_moves()
    winner = board.winner()

    # Terminal conditions
    if winner != 0:
        return winner * (depth + 1) * context.win_score, None

    if depth <= 0 or (not root and context.expired()):
        return evaluate(board.grid), None

    if not valid_moves:
        return 0, None

    best_column = valid_moves[0]

    if maximizing:
        best_score = -math.inf

        for column in valid_moves:
            child = board.copy_and_drop(Player.ONE, column)
            score, _ = _search(child, depth - 1, alpha, beta, False, context)

            if score > best_score:
                best_score = score
                best_column = column

            alpha = max(alpha, best_score)
            if beta <= alpha:
                break

    else:
        best_score = math.inf

        for column in valid_moves:
            child = board.copy_and_drop(Player.TWO, column)
            score, _ = _search(child, depth - 1, alpha, beta, True, context)

            if score < best_score:
                best_score = score
                best_column = column

            beta = min(beta, best_score)
            if beta <= alpha:
                break

    return best_score, best_column


class MinimaxPlayer:
    """
    A Connect Four player that picks moves with minimax search.

    The side to move decides the search direction: player one maximizes,
    player two minimizes. With config.workers > 1 the root moves are searched
    in a thread pool; each branch then gets the full alpha-beta window, which
    yields the same column and score as the sequential search.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.nodes_evaluated = 0
        self.timed_out = False

    @property
    def depth(self) -> int:
        return self.config.depth

    def _bounds(self) -> Tuple[float, float]:
        return search_bounds(self.config.depth, self.config.win_score)

    def search(self, board: Board, player) -> SearchResult:
        """
        Search for the best move for player on board.

        Args:
            board: The current position
            player: Side to move (Player or +1/-1)

        Returns:
            SearchResult; column is None only when the game is already over
        """
        player = Player.from_value(player)
        maximizing = player == Player.ONE

        started = time.perf_counter()
        deadline = None
        if self.config.time_limit is not None:
            deadline = time.monotonic() + self.config.time_limit

        if self.config.workers > 1:
            result = self._search_parallel(board, maximizing, deadline)
        else:
            context = _SearchContext(self.config.win_score, deadline)
            score, column = _search(board, self.config.depth, *self._bounds(),
                                    maximizing, context, root=True)
            result = SearchResult(score, column, context.nodes)
            self.timed_out = context.timed_out

        self.nodes_evaluated = result.nodes
        elapsed = time.perf_counter() - started

        if self.timed_out:
            debug.warning(f"Search for {player} hit the {self.config.time_limit}s limit, "
                          f"using partial result", "search")
        debug.info(f"{player} plays column {result.column} (score {result.score}, "
                   f"{result.nodes} nodes, depth {self.config.depth}, {elapsed:.3f}s)", "search")
        return result

    def get_move(self, board: Board, player) -> Optional[int]:
        """Column to play for player, or None if the game is already over."""
        return self.search(board, player).column

    def _search_parallel(self, board: Board, maximizing: bool,
                         deadline: Optional[float]) -> SearchResult:
        valid_moves = board.legal_moves()

        if board.winner() != 0 or not valid_moves:
            context = _SearchContext(self.config.win_score, deadline)
            score, column = _search(board, self.config.depth, *self._bounds(),
                                    maximizing, context, root=True)
            self.timed_out = False
            return SearchResult(score, column, context.nodes)

        player = Player.ONE if maximizing else Player.TWO
        contexts = [_SearchContext(self.config.win_score, deadline) for _ in valid_moves]

        def search_branch(index: int) -> int:
            child = board.copy_and_drop(player, valid_moves[index])
            score, _ = _search(child, self.config.depth - 1, *self._bounds(),
                               not maximizing, contexts[index])
            return score

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            scores = list(executor.map(search_branch, range(len(valid_moves))))

        best_score = scores[0]
        best_column = valid_moves[0]
        for column, score in zip(valid_moves[1:], scores[1:]):
            if (score > best_score) if maximizing else (score < best_score):
                best_score = score
                best_column = column

        if debug.is_enabled_for(DebugLevel.TRACE, "search"):
            debug.trace(f"Root scores: {dict(zip(valid_moves, scores))}", "search")

        self.timed_out = any(context.timed_out for context in contexts)
        return SearchResult(best_score, best_column, 1 + sum(context.nodes for context in contexts))
