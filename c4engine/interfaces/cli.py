"""
cli.py - Command-line interface for the Connect Four engine

This module provides a CLI for playing against the engine, analyzing board
positions and timing the scanner, evaluator and search.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

from c4engine.ai.evaluate import evaluate
from c4engine.ai.minimax import MinimaxPlayer
from c4engine.config import EngineConfig
from c4engine.debug import debug, DebugLevel
from c4engine.game.board import Board
from c4engine.game.rules import ConnectFourGame
from c4engine.game.scanner import winner, winning_line
from c4engine.utils import (ROWS, COLS, DEFAULT_DEPTH, Connect4Error, Player,
                            parse_position)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self):
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog='c4engine', description='Connect Four engine CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (default: warning)')
        parser.add_argument('--log-file', help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        search_options = argparse.ArgumentParser(add_help=False)
        search_options.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                                    help=f'Search depth in plies (default: {DEFAULT_DEPTH})')
        search_options.add_argument('--time-limit', type=float, default=None,
                                    help='Seconds per engine move (default: no limit)')
        search_options.add_argument('--workers', type=int, default=1,
                                    help='Threads for root moves (default: 1)')

        play_parser = subparsers.add_parser('play', parents=[search_options],
                                            help='Play a game against the engine')
        play_parser.add_argument('--first', choices=['human', 'engine'], default='human',
                                 help='Who moves first')
        play_parser.add_argument('--rows', type=int, default=ROWS)
        play_parser.add_argument('--cols', type=int, default=COLS)

        analyze_parser = subparsers.add_parser('analyze', parents=[search_options],
                                               help='Analyze a board position')
        analyze_parser.add_argument('--position', required=True,
                                    help='JSON 2D list, or comma-separated cells with row 0 first')
        analyze_parser.add_argument('--player', type=int, choices=[1, -1], default=1,
                                    help='Side to move (default: 1)')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[search_options],
                                                 help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for scanner/evaluator timing')
        benchmark_parser.add_argument('--seed', type=int, default=None)

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line and return an exit code."""
        if not self.args:
            self.parse_args(argv)

        commands = {
            'play': self.play_game,
            'analyze': self.analyze_position,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            command()
        except (Connect4Error, ValueError) as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}")
            return 2
        return 0

    def play_game(self) -> None:
        """Play an interactive game against the engine."""
        game = ConnectFourGame(self.args.rows, self.args.cols, EngineConfig.from_args(self.args))
        human = Player.ONE if self.args.first == 'human' else Player.TWO

        print(f"You are {human}. Enter a column number (0-{game.cols - 1}), 'q' to quit.")
        print(game.render())

        while not game.is_game_over():
            if game.get_current_player() == human:
                move = self.get_human_move(game)
                if move is None:
                    print("Quitting game.")
                    return
                game.make_move(move)
            else:
                print("Engine is thinking...")
                column = game.computer_move()
                print(f"Engine plays column {column}")
            print(game.render())

        winner_player = game.get_winner()
        if winner_player is None:
            print("It's a draw!")
        elif winner_player == human:
            print("You win! Congratulations!")
        else:
            print("Engine wins! Better luck next time.")

    def get_human_move(self, game: ConnectFourGame) -> Optional[int]:
        """Prompt until a legal column is entered; None means quit."""
        while True:
            user_input = input(f"Your move {game.get_valid_moves()}: ").strip().lower()
            if user_input in ('q', 'quit'):
                return None
            try:
                move = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")
                continue
            if game.is_valid_move(move):
                return move
            print(f"Column {move} is not playable.")

    def analyze_position(self) -> None:
        """Print winner, legal moves, static score and best move for a position."""
        board = Board.from_grid(parse_position(self.args.position))
        player = Player.from_value(self.args.player)

        print("Position:")
        print(board.render())

        side = winner(board.grid)
        if side:
            print(f"\nWinner: {Player(side)} with {winning_line(board.grid)}")
            return

        moves = board.legal_moves()
        print(f"\nNo winner. Legal moves: {moves}")
        print(f"Static evaluation: {evaluate(board.grid)}")
        if not moves:
            print("Board is full: draw")
            return

        engine = MinimaxPlayer(EngineConfig.from_args(self.args))
        result = engine.search(board, player)
        print(f"Best move for {player}: column {result.column} "
              f"(score {result.score}, {result.nodes} nodes)")

    def benchmark(self) -> None:
        """Time the scanner, the evaluator and full searches."""
        rng = random.Random(self.args.seed)
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} iterations...")

        boards = [self._random_board(rng) for _ in range(iterations)]

        debug.start_timer("win_check")
        for board in boards:
            winner(board.grid)
        win_time = debug.end_timer("win_check", "cli")
        print(f"Win checks: {win_time:.6f} seconds total, "
              f"{win_time / iterations * 1000:.6f} ms per board")

        debug.start_timer("evaluate")
        for board in boards:
            evaluate(board.grid)
        eval_time = debug.end_timer("evaluate", "cli")
        print(f"Evaluations: {eval_time:.6f} seconds total, "
              f"{eval_time / iterations * 1000:.6f} ms per board")

        config = EngineConfig.from_args(self.args)
        for depth in range(1, config.depth + 1):
            engine = MinimaxPlayer(EngineConfig(depth=depth, time_limit=config.time_limit,
                                                workers=config.workers))
            started = time.perf_counter()
            result = engine.search(Board(), Player.ONE)
            elapsed = time.perf_counter() - started
            print(f"Depth {depth}: column {result.column}, {result.nodes} nodes, "
                  f"{elapsed:.4f} seconds")

    @staticmethod
    def _random_board(rng: random.Random, max_moves: int = 20) -> Board:
        """Play random legal moves from the empty board until someone wins or max_moves."""
        board = Board()
        player = Player.ONE
        for _ in range(rng.randint(0, max_moves)):
            moves = board.legal_moves()
            if not moves or board.winner():
                break
            board.drop(player, rng.choice(moves))
            player = player.other()
        return board


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
