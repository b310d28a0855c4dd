import unittest
import sys
import os
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from perfect_maze.core.board import make_board
from perfect_maze.core.geometry import EAST, WEST
from perfect_maze.core.rng import RandomSource
from perfect_maze.core.analysis import count_passages, is_symmetric, reachable_cells
from perfect_maze.algo.dfs import DFSBoard, RecursiveBacktracker, generate_maze

class FirstPickSource:
    """Always picks the first remaining direction and records every bound."""
    def __init__(self):
        self.bounds = []

    def uniform_int(self, bound):
        self.bounds.append(bound)
        return 0

class TestDFSBoard(unittest.TestCase):
    def test_carve_clears_both_sides(self):
        board = make_board((2, 1))
        state = DFSBoard(board)
        neighbor = state.carve((0, 0), EAST)

        self.assertEqual(neighbor, (1, 0))
        self.assertEqual(list(board.walls), [0xD, 0x7])
        self.assertTrue(state.is_visited((1, 0)))
        self.assertFalse(state.is_visited((0, 0)))

    def test_reset(self):
        board = make_board((2, 2))
        state = DFSBoard(board)
        state.carve((1, 0), WEST)
        state.mark_visited((1, 1))
        state.reset()
        self.assertEqual(list(board.walls), [0xF] * 4)
        self.assertEqual(list(state.visited), [0] * 4)

class TestGenerators(unittest.TestCase):
    def test_dfs_coverage(self):
        w, h = 20, 20
        board = make_board((w, h))
        generate_maze(board, RandomSource(seed=42))

        # Every cell reachable from every corner
        for start in [(0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1)]:
            self.assertEqual(len(reachable_cells(board, start)), w * h, "DFS should connect every cell")

    def test_spanning_tree(self):
        for w, h in [(1, 5), (5, 1), (3, 7), (16, 9)]:
            board = make_board((w, h))
            generate_maze(board, RandomSource(seed=w * 31 + h))
            self.assertEqual(count_passages(board), w * h - 1)
            self.assertTrue(is_symmetric(board))

    def test_returns_same_board(self):
        board = make_board((4, 4))
        self.assertIs(generate_maze(board, RandomSource(seed=1)), board)

    def test_single_cell(self):
        board = make_board((1, 1))
        generate_maze(board, RandomSource(seed=5))
        self.assertEqual(list(board.walls), [0xF])

    def test_two_by_one(self):
        # East is the only direction that stays on the board
        for seed in range(10):
            board = make_board((2, 1))
            generate_maze(board, RandomSource(seed=seed), start=(0, 0))
            self.assertEqual(list(board.walls), [0xD, 0x7])

    def test_scripted_order(self):
        # Always taking the first of N, E, S, W snakes E, S, W around a 2x2
        board = make_board((2, 2))
        rng = FirstPickSource()
        generate_maze(board, rng)
        self.assertEqual(list(board.walls), [0xD, 0x3, 0xD, 0x6])
        # One full permutation drawn per cell, on entry
        self.assertEqual(rng.bounds, [4, 3, 2, 1] * 4)

    def test_determinism(self):
        w, h = 10, 10
        board1 = make_board((w, h))
        generate_maze(board1, RandomSource(seed=12345))

        board2 = make_board((w, h))
        rec = RecursiveBacktracker(board2, seed=12345)
        for _ in rec.run(): pass

        self.assertEqual(board1.walls.tobytes(), board2.walls.tobytes())

    def test_reset_on_entry(self):
        board = make_board((12, 8))
        generate_maze(board, RandomSource(seed=7), start=(3, 4))
        first = board.walls.tobytes()

        # A different maze in between must not leak into the rerun
        generate_maze(board, RandomSource(seed=8))
        generate_maze(board, RandomSource(seed=7), start=(3, 4))
        self.assertEqual(board.walls.tobytes(), first)

    def test_start_out_of_bounds(self):
        board = make_board((3, 3))
        board.walls[0] = 0x3
        for start in [(3, 0), (0, 3), (-1, 0)]:
            with self.assertRaises(IndexError):
                generate_maze(board, RandomSource(seed=1), start=start)
        # Fails before touching the board
        self.assertEqual(board.walls[0], 0x3)

    def test_non_origin_start(self):
        board = make_board((6, 6))
        generate_maze(board, RandomSource(seed=3), start=(5, 5))
        self.assertEqual(count_passages(board), 35)
        self.assertEqual(len(reachable_cells(board, (5, 5))), 36)

    def test_long_corridor_does_not_recurse(self):
        # Snaking 1-wide board: stack depth equals the cell count
        board = make_board((1, 5000))
        generate_maze(board, RandomSource(seed=0))
        self.assertEqual(count_passages(board), 4999)

    def test_progress_and_state(self):
        board = make_board((15, 15))
        algo = RecursiveBacktracker(board, seed=9)
        statuses = list(algo.run())
        self.assertEqual(statuses[-1], "Done")
        self.assertGreater(len(statuses), 1)
        self.assertEqual(algo.carved, 15 * 15 - 1)
        self.assertIsNone(algo.current)

    def test_injected_source_wins_over_seed(self):
        board1 = make_board((2, 2))
        RecursiveBacktracker(board1, seed=99, rng=FirstPickSource()).run_all()
        self.assertEqual(list(board1.walls), [0xD, 0x3, 0xD, 0x6])

    def test_bounds_check_goes_through_in_bounds(self):
        import perfect_maze.algo.dfs as dfs
        board = make_board((3, 2))
        with mock.patch.object(dfs, "in_bounds", wraps=dfs.in_bounds) as checked:
            generate_maze(board, RandomSource(seed=4))
        # Start check plus one per direction tried at every cell
        self.assertEqual(checked.call_args_list[0], mock.call((3, 2), (0, 0)))
        self.assertEqual(checked.call_count, 1 + 4 * 6)
        self.assertEqual(count_passages(board), 5)

if __name__ == '__main__':
    unittest.main()
