import random
import unittest

import numpy as np

from c4engine.game.board import Board
from c4engine.game.scanner import (count_winning_lines, window_indices, winner,
                                   winning_line)
from c4engine.utils import Player


def make_grid(cells, rows=6, cols=7):
    grid = np.zeros((rows, cols), dtype=int)
    for (row, col), value in cells.items():
        grid[row, col] = value
    return grid


def line(start, step, length=4):
    (row, col), (dr, dc) = start, step
    return [(row + dr * i, col + dc * i) for i in range(length)]


class TestWindows(unittest.TestCase):
    def test_standard_board_has_69_windows(self):
        self.assertEqual(window_indices(6, 7).shape, (69, 4))

    def test_small_board_has_no_windows(self):
        self.assertEqual(window_indices(3, 3).shape, (0, 4))
        self.assertEqual(winner(np.zeros((3, 3), dtype=int)), 0)

    def test_window_count_for_other_shapes(self):
        # horizontal + vertical + 2 * diagonal
        rows, cols = 5, 9
        expected = rows * (cols - 3) + (rows - 3) * cols + 2 * (rows - 3) * (cols - 3)
        self.assertEqual(len(window_indices(rows, cols)), expected)

    def test_window_cache_is_bounded(self):
        for rows in range(4, 14):
            for cols in range(4, 14):
                window_indices(rows, cols)
        info = window_indices.cache_info()
        self.assertEqual(info.maxsize, 32)
        self.assertLessEqual(info.currsize, 32)
        # Evicted shapes are rebuilt on demand
        self.assertEqual(window_indices(6, 7).shape, (69, 4))


class TestWinner(unittest.TestCase):
    def test_empty_board_has_no_winner(self):
        self.assertEqual(winner(Board().grid), 0)

    def test_every_orientation_everywhere(self):
        rows, cols = 6, 7
        orientations = {
            'horizontal': ((0, 1), range(rows), range(cols - 3)),
            'vertical': ((1, 0), range(rows - 3), range(cols)),
            'ascending': ((1, 1), range(rows - 3), range(cols - 3)),
            'descending': ((-1, 1), range(3, rows), range(cols - 3)),
        }
        for name, (step, row_range, col_range) in orientations.items():
            for row in row_range:
                for col in col_range:
                    for side in (1, -1):
                        cells = line((row, col), step)
                        grid = make_grid({cell: side for cell in cells})
                        with self.subTest(orientation=name, start=(row, col), side=side):
                            self.assertEqual(winner(grid), side)
                            self.assertEqual(sorted(winning_line(grid)), sorted(cells))

    def test_three_in_a_row_is_not_a_win(self):
        grid = make_grid({(0, 0): 1, (0, 1): 1, (0, 2): 1, (1, 0): -1, (1, 1): -1})
        self.assertEqual(winner(grid), 0)
        self.assertEqual(winning_line(grid), [])

    def test_broken_line_is_not_a_win(self):
        grid = make_grid({(0, 0): 1, (0, 1): 1, (0, 2): -1, (0, 3): 1, (0, 4): 1})
        self.assertEqual(winner(grid), 0)

    def test_accepts_nested_lists(self):
        grid = make_grid({cell: -1 for cell in line((0, 6), (1, 0))}).tolist()
        self.assertEqual(winner(grid), -1)

    def test_non_standard_board(self):
        grid = make_grid({cell: 1 for cell in line((4, 5), (-1, 1))}, rows=8, cols=10)
        self.assertEqual(winner(grid), 1)

    def test_first_line_in_scan_order_is_reported(self):
        # A horizontal line is found before a vertical one
        cells = {cell: 1 for cell in line((0, 0), (0, 1))}
        cells.update({cell: -1 for cell in line((1, 6), (1, 0), length=4)})
        grid = make_grid(cells)
        self.assertEqual(winner(grid), 1)
        self.assertEqual(count_winning_lines(grid), (1, 1))

    def test_random_games_never_produce_two_winners(self):
        rng = random.Random(1234)
        for _ in range(200):
            board = Board()
            player = Player.ONE
            while board.legal_moves() and not board.winner():
                board.drop(player, rng.choice(board.legal_moves()))
                player = player.other()

            ones, twos = count_winning_lines(board.grid)
            self.assertFalse(ones and twos)
            if board.winner() == 1:
                self.assertGreater(ones, 0)
            elif board.winner() == -1:
                self.assertGreater(twos, 0)


if __name__ == '__main__':
    unittest.main()
