"""Stateful 2048 grid engine owning one board, its score and a single undo snapshot."""

import logging

from numpy import int64, ndarray, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from puzzle2048.config import BOARD_SIZE
from puzzle2048.core.gameboard import fill_cells, is_terminal, is_valid_board, next_state, spawn_tile
from puzzle2048.core.types import Direction, MoveResult, UndoSnapshot
from puzzle2048.utils.render import format_board

logger = logging.getLogger(__name__)


class GridEngine:
    """
    2048 grid engine.

    This class owns the board, the score and the undo snapshot of one game. It knows nothing about rendering,
    audio or storage: collaborators call into it and observe the returned ``MoveResult``.
    """

    # ##: Current game state.
    _board: ndarray | None = None
    _score: int = 0
    _snapshot: UndoSnapshot | None = None

    def __init__(self, size: int = BOARD_SIZE, seed: int | None = None, generator: Generator | None = None):
        """
        Initialize the engine and start a game.

        Parameters
        ----------
        size : int, optional
            The size of the square grid (default is 4).
        seed : int, optional
            Seed for the engine's random source. Ignored when ``generator`` is given.
        generator : Generator, optional
            Random source used for every tile spawn.
        """
        self.size = size
        self._generator = generator if generator is not None else self._make_generator(seed)

        self.reset()

    @staticmethod
    def _make_generator(seed: int | None) -> Generator:
        return default_rng(seed) if seed is not None else default_rng(PCG64DXSM())

    @property
    def board(self) -> ndarray:
        """
        Get a copy of the current board.

        Returns
        -------
        ndarray
            The current board as a 2D numpy array.
        """
        return self._board.copy()

    @property
    def score(self) -> int:
        """Score of the current game."""
        return self._score

    @property
    def can_undo(self) -> bool:
        """Check if a snapshot is available for undo."""
        return self._snapshot is not None

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True if no move can change the board, False otherwise.
        """
        return self.is_terminal()

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Initialize an empty board and add two random tiles.

        Parameters
        ----------
        seed : int, optional
            Reseed the engine's random source before spawning.

        Returns
        -------
        ndarray
            A copy of the new board.

        Notes
        -----
        The score goes back to zero and any undo snapshot is dropped.
        """
        if seed is not None:
            self._generator = self._make_generator(seed)

        self._board = zeros((self.size, self.size), dtype=int64)
        self._board = fill_cells(self._board, number_tile=2, generator=self._generator)
        self._score = 0
        self._snapshot = None
        return self.board

    def spawn_tile(self) -> tuple[int, int, int] | None:
        """
        Put a new tile in a random empty cell of the board.

        Returns
        -------
        tuple[int, int, int] | None
            Row, column and value of the new tile, or None if the board is full.
        """
        _, spawned = spawn_tile(self._board, generator=self._generator)
        return spawned

    def is_terminal(self) -> bool:
        """Check if no move can change the board."""
        return is_terminal(self._board)

    def snapshot_for_undo(self) -> UndoSnapshot:
        """
        Capture the current board and score as the single undo snapshot.

        Returns
        -------
        UndoSnapshot
            The captured snapshot, which replaces any previous one.
        """
        self._snapshot = UndoSnapshot.capture(self._board, self._score)
        return self._snapshot

    def move(self, direction: int) -> MoveResult:
        """
        Apply a move to the board.

        Parameters
        ----------
        direction : int
            The direction to move (0: left, 1: up, 2: right, 3: down).

        Returns
        -------
        MoveResult
            The outcome of the move.

        Notes
        -----
        - When the move changes the board, the state before the move becomes the undo snapshot, one new
          tile is spawned and the terminal check runs on the resulting board.
        - When the move changes nothing, the board, score and snapshot are left untouched and the game is
          never reported over.
        """
        direction = Direction(direction)
        updated_board, reward, spawned = next_state(self._board, direction, generator=self._generator)

        # ##: Nothing moved, nothing changes.
        if updated_board is self._board:
            return MoveResult(moved=False, board=self.board, score=self._score)

        self.snapshot_for_undo()
        self._board = updated_board
        self._score += reward

        game_over = self.is_terminal()
        if game_over:
            logger.info('Game over with score %d and max tile %d', self._score, int(self._board.max()))

        return MoveResult(
            moved=True, board=self.board, score=self._score, game_over=game_over, reward=reward, spawned=spawned
        )

    def undo(self) -> bool:
        """
        Restore the board and score from before the last move.

        Returns
        -------
        bool
            True if the snapshot was restored, False if there was none.

        Notes
        -----
        The snapshot is consumed, so a second undo without a move in between fails.
        """
        if self._snapshot is None:
            return False

        self._board, self._score = self._snapshot.restore()
        self._snapshot = None
        return True

    def load_state(self, board: ndarray, score: int) -> None:
        """
        Install a saved board and score.

        Parameters
        ----------
        board : ndarray
            A ``size`` x ``size`` board of zeros and powers of two.
        score : int
            A non-negative score.

        Raises
        ------
        ValueError
            If the board or the score is malformed.
        """
        if not is_valid_board(board, size=self.size):
            raise ValueError(f'Malformed board: {board.tolist()!r}')
        if score < 0:
            raise ValueError(f'score must be >= 0, got {score}')

        self._board = board.astype(int64, copy=True)
        self._score = int(score)
        self._snapshot = None

    def render(self) -> None:
        """
        Render the game board. This method prints the current board and score to the console.
        """
        print(format_board(self._board))
        print(f'score: {self._score}')
