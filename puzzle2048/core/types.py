"""
Value types shared by the grid engine and its collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from numpy import ndarray


class Direction(IntEnum):
    """
    Direction of a move.

    The value is the number of counter-clockwise quarter turns that bring the direction of travel to the left,
    so a move in any direction is a rotation, a slide to the left and the inverse rotation.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def from_key(cls, key: str) -> Direction:
        """
        Get the direction named by a key or a direction name.

        Parameters
        ----------
        key : str
            Direction name (``"left"``), arrow name (``"arrowleft"``) or vim-style key (``"h"``).

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the key does not name a direction.
        """
        name = key.strip().lower()
        if name in _KEY_ALIASES:
            name = _KEY_ALIASES[name]
        try:
            return cls[name.upper()]
        except KeyError as error:
            raise ValueError(f'Unknown direction: {key!r}') from error


_KEY_ALIASES = {
    'arrowleft': 'left',
    'arrowup': 'up',
    'arrowright': 'right',
    'arrowdown': 'down',
    'h': 'left',
    'k': 'up',
    'l': 'right',
    'j': 'down',
    'a': 'left',
    'w': 'up',
    'd': 'right',
    's': 'down',
}


@dataclass(frozen=True)
class UndoSnapshot:
    """
    Copy of the board and score captured right before a move.

    Attributes
    ----------
    board : ndarray
        Private copy of the board, never shared with the engine.
    score : int
        Score before the move.
    """

    board: ndarray
    score: int

    @classmethod
    def capture(cls, board: ndarray, score: int) -> UndoSnapshot:
        """Deep copy the board and score."""
        return cls(board=board.copy(), score=int(score))

    def restore(self) -> tuple[ndarray, int]:
        """
        Get the captured state.

        Returns
        -------
        tuple[ndarray, int]
            A fresh copy of the captured board and the captured score.
        """
        return self.board.copy(), self.score


@dataclass
class MoveResult:
    """
    Outcome of a move.

    Attributes
    ----------
    moved : bool
        Whether any tile moved or merged.
    board : ndarray
        Board after the move, including the spawned tile.
    score : int
        Score after the move.
    game_over : bool
        Whether the board after the move is terminal. Always False when nothing moved.
    reward : int
        Score gained by the merges of this move.
    spawned : tuple[int, int, int] | None
        Row, column and value of the spawned tile, None when nothing was spawned.
    """

    moved: bool
    board: ndarray
    score: int
    game_over: bool = False
    reward: int = 0
    spawned: tuple[int, int, int] | None = field(default=None)

    @property
    def merged(self) -> bool:
        """Check if at least one pair of tiles merged."""
        return self.reward > 0
