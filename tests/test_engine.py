"""
Tests for the stateful grid engine: moves, spawns, terminal detection and undo.
"""

from unittest import TestCase, main

import numpy as np

from puzzle2048.core.types import Direction, MoveResult
from puzzle2048.envs.engine import GridEngine

EMPTY_ROWS = [[0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
BLOCKED = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])


class TestEngineInterface(TestCase):
    """Test GridEngine API and state management."""

    def setUp(self):
        """Initialize a seeded engine before each test."""
        self.engine = GridEngine(size=4, seed=42)

    def test_reset_state_initialization(self):
        """Reset initializes board with exactly 2 tiles and zero score."""
        board = self.engine.reset()

        # ##>: Exactly 2 non-zero tiles after reset.
        self.assertEqual(np.count_nonzero(board), 2)

        # ##>: Tiles are only 2 or 4.
        tiles = board[board != 0]
        self.assertTrue(np.all((tiles == 2) | (tiles == 4)))

        self.assertEqual(self.engine.score, 0)
        self.assertFalse(self.engine.can_undo)
        self.assertFalse(self.engine.is_finished)

    def test_reset_seed_reproducibility(self):
        """Same seed produces identical initial board state."""
        board1 = self.engine.reset(seed=42)
        board2 = self.engine.reset(seed=42)

        np.testing.assert_array_equal(board1, board2)

    def test_board_is_a_copy(self):
        board = self.engine.board
        board[:] = 2
        self.assertEqual(np.count_nonzero(self.engine.board), 2)

    def test_reset_clears_score_and_snapshot(self):
        self.engine.load_state(np.array([[2, 2, 0, 0]] + EMPTY_ROWS), score=10)
        self.engine.move(Direction.LEFT)
        self.assertTrue(self.engine.can_undo)

        self.engine.reset()
        self.assertEqual(self.engine.score, 0)
        self.assertFalse(self.engine.can_undo)
        self.assertFalse(self.engine.undo())

    def test_injected_generator(self):
        first = GridEngine(generator=np.random.default_rng(5))
        second = GridEngine(generator=np.random.default_rng(5))
        np.testing.assert_array_equal(first.board, second.board)

        first.load_state(np.array([[2, 2, 0, 0]] + EMPTY_ROWS), score=0)
        second.load_state(np.array([[2, 2, 0, 0]] + EMPTY_ROWS), score=0)
        self.assertEqual(first.move(Direction.LEFT).spawned, second.move(Direction.LEFT).spawned)


class TestEngineMove(TestCase):
    def setUp(self):
        self.engine = GridEngine(seed=0)

    def test_merge_left(self):
        self.engine.load_state(np.array([[2, 2, 0, 0]] + EMPTY_ROWS), score=0)
        result = self.engine.move(Direction.LEFT)

        self.assertIsInstance(result, MoveResult)
        self.assertTrue(result.moved)
        self.assertTrue(result.merged)
        self.assertEqual(result.reward, 4)
        self.assertEqual(result.score, 4)
        self.assertFalse(result.game_over)
        self.assertEqual(result.board[0, 0], 4)

        # ##>: Exactly one tile spawned, in a cell that was empty after the slide.
        row, col, value = result.spawned
        self.assertNotEqual((row, col), (0, 0))
        self.assertEqual(result.board[row, col], value)
        self.assertEqual(np.count_nonzero(result.board), 2)

    def test_merge_right(self):
        self.engine.load_state(np.array([[2, 0, 2, 0]] + EMPTY_ROWS), score=8)
        result = self.engine.move(Direction.RIGHT)

        self.assertEqual(result.board[0, 3], 4)
        self.assertEqual(result.score, 12)

    def test_four_equal_tiles(self):
        self.engine.load_state(np.array([[2, 2, 2, 2]] + EMPTY_ROWS), score=0)
        result = self.engine.move(Direction.LEFT)

        np.testing.assert_array_equal(result.board[0, :2], [4, 4])
        self.assertEqual(result.reward, 8)

    def test_slide_without_merge(self):
        self.engine.load_state(np.array([[0, 0, 0, 2]] + EMPTY_ROWS), score=0)
        result = self.engine.move(Direction.LEFT)

        self.assertTrue(result.moved)
        self.assertFalse(result.merged)
        self.assertEqual(result.score, 0)

    def test_noop_move(self):
        """A move that changes nothing spawns nothing and keeps the snapshot."""
        board = np.array([[2, 0, 0, 0]] + EMPTY_ROWS)
        self.engine.load_state(board, score=6)
        result = self.engine.move(Direction.LEFT)

        self.assertFalse(result.moved)
        self.assertFalse(result.game_over)
        self.assertIsNone(result.spawned)
        self.assertEqual(result.reward, 0)
        self.assertEqual(result.score, 6)
        np.testing.assert_array_equal(result.board, board)
        self.assertFalse(self.engine.can_undo)

    def test_noop_is_idempotent(self):
        board = np.array([[2, 4, 0, 0], [8, 0, 0, 0]] + EMPTY_ROWS[:2])
        self.engine.load_state(board, score=0)
        for _ in range(3):
            self.assertFalse(self.engine.move(Direction.LEFT).moved)
        np.testing.assert_array_equal(self.engine.board, board)

    def test_blocked_board(self):
        self.engine.load_state(BLOCKED, score=100)
        self.assertTrue(self.engine.is_terminal())

        for direction in Direction:
            result = self.engine.move(direction)
            self.assertFalse(result.moved)
            self.assertFalse(result.game_over)
        self.assertEqual(self.engine.score, 100)

    def test_game_over_after_last_move(self):
        """The last possible move reports the game over."""
        board = np.array([[0, 2, 4, 8], [16, 32, 64, 128], [256, 512, 1024, 2048], [4096, 8192, 16384, 32768]])
        self.engine.load_state(board, score=0)
        result = self.engine.move(Direction.RIGHT)

        # ##>: Right is a no-op here; the only move is left.
        self.assertFalse(result.moved)

        # ##>: Sliding left leaves the last cell empty for the spawn; 2 or 4 next to 8 keeps it blocked.
        result = self.engine.move(Direction.LEFT)
        self.assertTrue(result.moved)
        self.assertEqual(result.spawned[:2], (0, 3))
        self.assertTrue(result.game_over)
        self.assertTrue(self.engine.is_finished)

    def test_spawn_tile(self):
        self.engine.load_state(np.zeros((4, 4), dtype=np.int64), score=0)
        row, col, value = self.engine.spawn_tile()
        self.assertEqual(self.engine.board[row, col], value)

        self.engine.load_state(BLOCKED, score=0)
        self.assertIsNone(self.engine.spawn_tile())

    def test_invalid_direction(self):
        with self.assertRaises(ValueError):
            self.engine.move(7)


class TestEngineUndo(TestCase):
    def setUp(self):
        self.engine = GridEngine(seed=1)
        self.start = np.array([[2, 2, 0, 0], [0, 4, 0, 0]] + EMPTY_ROWS[:2])
        self.engine.load_state(self.start, score=20)

    def test_undo_restores_state(self):
        self.engine.move(Direction.LEFT)
        self.assertTrue(self.engine.undo())

        np.testing.assert_array_equal(self.engine.board, self.start)
        self.assertEqual(self.engine.score, 20)

    def test_second_undo_fails(self):
        self.engine.move(Direction.LEFT)
        self.assertTrue(self.engine.undo())
        self.assertFalse(self.engine.undo())
        np.testing.assert_array_equal(self.engine.board, self.start)

    def test_undo_without_move(self):
        self.assertFalse(self.engine.can_undo)
        self.assertFalse(self.engine.undo())

    def test_only_last_move_is_kept(self):
        self.engine.move(Direction.LEFT)
        after_first = self.engine.board
        score_after_first = self.engine.score
        self.engine.move(Direction.RIGHT)

        self.assertTrue(self.engine.undo())
        np.testing.assert_array_equal(self.engine.board, after_first)
        self.assertEqual(self.engine.score, score_after_first)
        self.assertFalse(self.engine.undo())

    def test_noop_keeps_previous_snapshot(self):
        board = np.array([[2, 0, 0, 0]] + EMPTY_ROWS)
        self.engine.load_state(board, score=4)
        self.engine.snapshot_for_undo()

        self.assertFalse(self.engine.move(Direction.LEFT).moved)
        self.assertTrue(self.engine.can_undo)
        self.assertTrue(self.engine.undo())
        np.testing.assert_array_equal(self.engine.board, board)

    def test_snapshot_is_a_deep_copy(self):
        snapshot = self.engine.snapshot_for_undo()
        self.engine.move(Direction.LEFT)
        np.testing.assert_array_equal(snapshot.board, self.start)
        self.assertEqual(snapshot.score, 20)


class TestEngineLoadState(TestCase):
    def setUp(self):
        self.engine = GridEngine(seed=2)

    def test_rejects_malformed_board(self):
        with self.assertRaises(ValueError):
            self.engine.load_state(np.array([[3, 0, 0, 0]] + EMPTY_ROWS), score=0)
        with self.assertRaises(ValueError):
            self.engine.load_state(np.zeros((3, 3), dtype=np.int64), score=0)

    def test_rejects_negative_score(self):
        with self.assertRaises(ValueError):
            self.engine.load_state(np.zeros((4, 4), dtype=np.int64), score=-1)

    def test_load_copies_board(self):
        board = np.array([[2, 0, 0, 0]] + EMPTY_ROWS)
        self.engine.load_state(board, score=0)
        board[0, 0] = 4
        self.assertEqual(self.engine.board[0, 0], 2)


if __name__ == "__main__":
    main()
