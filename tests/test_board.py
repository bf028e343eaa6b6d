import unittest

import numpy as np

from c4engine.game.board import Board, legal_moves
from c4engine.utils import IllegalMove, MalformedBoard, Player


def make_grid(cells, rows=6, cols=7):
    """Nested-list grid with the given {(row, col): value} cells set."""
    grid = [[0] * cols for _ in range(rows)]
    for (row, col), value in cells.items():
        grid[row][col] = value
    return grid


class TestLegalMoves(unittest.TestCase):
    def test_empty_board_has_every_column(self):
        self.assertEqual(Board().legal_moves(), [0, 1, 2, 3, 4, 5, 6])

    def test_missing_or_empty_grid_has_no_moves(self):
        self.assertEqual(legal_moves(None), [])
        self.assertEqual(legal_moves([]), [])
        self.assertEqual(legal_moves([[]]), [])

    def test_full_columns_are_excluded_in_ascending_order(self):
        board = Board()
        for col in (5, 1):
            for i in range(board.rows):
                board.drop(Player.ONE if i % 2 else Player.TWO, col)

        self.assertEqual(board.legal_moves(), [0, 2, 3, 4, 6])
        self.assertEqual(legal_moves(board.to_list()), [0, 2, 3, 4, 6])
        self.assertEqual(legal_moves(board.grid), [0, 2, 3, 4, 6])

    def test_only_top_row_decides(self):
        grid = make_grid({(5, 0): 1, (5, 6): -1, (0, 3): 1})
        self.assertEqual(legal_moves(grid), [1, 2, 3, 4, 5])

    def test_non_standard_dimensions(self):
        board = Board(4, 9)
        self.assertEqual(board.legal_moves(), list(range(9)))


class TestDrop(unittest.TestCase):
    def test_disc_lands_on_row_zero_then_stacks(self):
        board = Board()
        board.drop(Player.ONE, 3)
        board.drop(-1, 3)

        self.assertEqual(board.grid[0, 3], 1)
        self.assertEqual(board.grid[1, 3], -1)
        self.assertEqual(board.column_height(3), 2)

    def test_drop_never_leaves_gaps(self):
        rng = np.random.default_rng(7)
        board = Board()
        player = Player.ONE
        while board.legal_moves():
            board.drop(player, int(rng.choice(board.legal_moves())))
            player = player.other()

            for col in range(board.cols):
                height = board.column_height(col)
                self.assertTrue((board.grid[:height, col] != 0).all())
                self.assertTrue((board.grid[height:, col] == 0).all())

    def test_full_column_raises_and_leaves_board_unchanged(self):
        board = Board()
        for i in range(board.rows):
            board.drop(Player.ONE if i % 2 else Player.TWO, 2)
        before = board.grid.copy()

        with self.assertRaises(IllegalMove):
            board.drop(Player.ONE, 2)
        np.testing.assert_array_equal(board.grid, before)

    def test_out_of_range_column_raises(self):
        board = Board()
        with self.assertRaises(IllegalMove):
            board.drop(Player.ONE, 7)
        with self.assertRaises(IllegalMove):
            board.drop(Player.ONE, -1)

    def test_invalid_player_raises(self):
        with self.assertRaises(MalformedBoard):
            Board().drop(2, 0)

    def test_column_reported_full_once_top_row_is_occupied(self):
        board = Board()
        for i in range(board.rows):
            self.assertIn(4, board.legal_moves())
            board.drop(Player.ONE if i % 2 else Player.TWO, 4)
        self.assertNotIn(4, board.legal_moves())
        self.assertFalse(board.is_valid_move(4))

    def test_copy_and_drop_does_not_alias(self):
        board = Board()
        board.drop(Player.ONE, 0)

        first = board.copy_and_drop(Player.TWO, 1)
        second = board.copy_and_drop(Player.TWO, 2)

        self.assertEqual(int(np.count_nonzero(board.grid)), 1)
        self.assertEqual(first.grid[0, 2], 0)
        self.assertEqual(second.grid[0, 1], 0)
        first.drop(Player.ONE, 0)
        self.assertEqual(board.grid[1, 0], 0)

    def test_is_full(self):
        board = Board(4, 4)
        self.assertFalse(board.is_full())
        for col in range(4):
            for row in range(4):
                board.drop(Player.ONE if (row + col) % 2 else Player.TWO, col)
        self.assertTrue(board.is_full())
        self.assertEqual(board.legal_moves(), [])


class TestFromGrid(unittest.TestCase):
    def test_round_trips_list_input(self):
        grid = make_grid({(0, 0): 1, (0, 1): -1, (1, 0): 1})
        board = Board.from_grid(grid)
        self.assertEqual((board.rows, board.cols), (6, 7))
        self.assertEqual(board.to_list(), grid)

    def test_input_is_copied(self):
        grid = make_grid({})
        board = Board.from_grid(grid)
        board.drop(Player.ONE, 0)
        self.assertEqual(grid[0][0], 0)

    def test_accepts_numpy_arrays(self):
        board = Board.from_grid(np.zeros((5, 8), dtype=np.int8))
        self.assertEqual((board.rows, board.cols), (5, 8))

    def test_rejects_malformed_input(self):
        bad_grids = [
            None,
            [],
            [[]],
            "0000000",
            [[0, 0, 0], [0, 0]],
            [[0, 2, 0]],
            [[0, 0.5, 0]],
            [[0, True, 0]],
            [[0, "1", 0]],
            np.zeros((2, 2, 2), dtype=int),
            np.full((3, 3), 3),
            np.zeros((3, 3), dtype=float),
        ]
        for grid in bad_grids:
            with self.subTest(grid=grid):
                with self.assertRaises(MalformedBoard):
                    Board.from_grid(grid)

    def test_rejects_non_positive_dimensions(self):
        with self.assertRaises(MalformedBoard):
            Board(0, 7)


if __name__ == '__main__':
    unittest.main()
