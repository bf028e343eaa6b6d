import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

from c4engine.debug import DebugLevel, debug
from c4engine.interfaces.cli import main
from c4engine.utils import MalformedBoard, parse_position


def run_cli(*argv):
    output = io.StringIO()
    with redirect_stdout(output):
        code = main(list(argv))
    return code, output.getvalue()


class TestParsePosition(unittest.TestCase):
    def test_json_and_flat_forms(self):
        grid = [[0] * 7 for _ in range(6)]
        grid[0][3] = 1
        flat = ",".join(str(v) for row in grid for v in row)

        self.assertEqual(parse_position(json.dumps(grid)), grid)
        self.assertEqual(parse_position(flat), grid)

    def test_bad_positions(self):
        for text in ("[[0, 1", "1,2,x", "0,0,0"):
            with self.subTest(text=text):
                with self.assertRaises(MalformedBoard):
                    parse_position(text)


class TestCommands(unittest.TestCase):
    def tearDown(self):
        debug.configure(level=DebugLevel.WARNING)

    def test_analyze_finds_winning_move(self):
        grid = [[0] * 7 for _ in range(6)]
        grid[0][:3] = [1, 1, 1]
        grid[1][:2] = [-1, -1]
        grid[0][6] = -1

        code, output = run_cli('analyze', '--position', json.dumps(grid), '--depth', '2')
        self.assertEqual(code, 0)
        self.assertIn("Legal moves: [0, 1, 2, 3, 4, 5, 6]", output)
        self.assertIn("Best move for X: column 3", output)

    def test_analyze_reports_winner(self):
        grid = [[0] * 7 for _ in range(6)]
        for row in range(4):
            grid[row][5] = -1

        code, output = run_cli('analyze', '--position', json.dumps(grid))
        self.assertEqual(code, 0)
        self.assertIn("Winner: O", output)

    def test_analyze_rejects_malformed_board(self):
        code, output = run_cli('analyze', '--position', '[[0, 5]]')
        self.assertEqual(code, 2)
        self.assertIn("Error:", output)

    def test_missing_command(self):
        code, _ = run_cli()
        self.assertEqual(code, 1)

    def test_benchmark(self):
        code, output = run_cli('benchmark', '--iterations', '20', '--depth', '2', '--seed', '3')
        self.assertEqual(code, 0)
        self.assertIn("Depth 2:", output)

    def test_benchmark_rejects_non_positive_iterations(self):
        for value in ('0', '-5'):
            with self.subTest(iterations=value):
                errors = io.StringIO()
                with redirect_stderr(errors), self.assertRaises(SystemExit) as caught:
                    main(['benchmark', '--iterations', value])
                self.assertEqual(caught.exception.code, 2)
                self.assertIn("must be a positive integer", errors.getvalue())

    def test_zero_depth_is_an_error(self):
        code, output = run_cli('analyze', '--position', json.dumps([[0] * 7] * 6), '--depth', '0')
        self.assertEqual(code, 2)
        self.assertIn("depth must be at least 1", output)


if __name__ == '__main__':
    unittest.main()
