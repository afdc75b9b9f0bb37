"""
Persistence of games and preferences in a JSON key-value file.

Failures to read or write the file are logged and swallowed: a broken store behaves like an empty one, so the
game degrades to a fresh start instead of failing.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from numpy import array, int64, ndarray

from puzzle2048.config import BOARD_SIZE
from puzzle2048.core.gameboard import is_valid_board

logger = logging.getLogger(__name__)

KEY_BEST_SCORE = 'bestScore'
KEY_CURRENT_SCORE = 'currentScore'
KEY_GRID = 'grid'


class PreferenceStore:
    """
    Key-value store persisted as one JSON object.

    Parameters
    ----------
    path : Path | str
        Location of the JSON file. Parent directories are created on first write.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._values: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._values is not None:
            return self._values

        self._values = {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                content = json.load(handle)
        except FileNotFoundError:
            return self._values
        except (OSError, ValueError) as error:
            logger.warning('Could not read preferences from %s: %s', self.path, error)
            return self._values

        if isinstance(content, dict):
            self._values = content
        else:
            logger.warning('Ignoring preferences in %s: expected an object, got %s', self.path, type(content).__name__)
        return self._values

    def _flush(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            descriptor, temporary = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix='.tmp')
            try:
                with os.fdopen(descriptor, 'w', encoding='utf-8') as handle:
                    json.dump(self._values, handle)
                os.replace(temporary, self.path)
            except BaseException:
                os.unlink(temporary)
                raise
        except (OSError, TypeError, ValueError) as error:
            logger.warning('Could not write preferences to %s: %s', self.path, error)
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under a key, or ``default``."""
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Store a JSON-serializable value under a key.

        Returns
        -------
        bool
            True if the file was written.
        """
        self._load()[key] = value
        return self._flush()

    def update(self, values: dict[str, Any]) -> bool:
        """Store several values with a single write."""
        self._load().update(values)
        return self._flush()

    def remove(self, key: str) -> bool:
        """Delete a key, if present."""
        self._load().pop(key, None)
        return self._flush()

    def clear(self) -> bool:
        """Delete every key."""
        self._values = {}
        return self._flush()


@dataclass
class SavedGame:
    """
    A game restored from storage.
    """

    board: ndarray
    score: int
    best_score: int


class GameStorage:
    """
    Save and load the board, the score and the best score.

    Parameters
    ----------
    store : PreferenceStore
        Underlying key-value store.
    size : int, optional
        Expected board size (default is 4).
    """

    def __init__(self, store: PreferenceStore, size: int = BOARD_SIZE):
        self.store = store
        self.size = size

    def save(self, board: ndarray, score: int, best_score: int) -> bool:
        """
        Persist a game.

        Parameters
        ----------
        board : ndarray
            The board, stored as a nested list of rows.
        score : int
            Current score.
        best_score : int
            Best score so far.

        Returns
        -------
        bool
            True if the game was written.
        """
        return self.store.update(
            {KEY_GRID: board.tolist(), KEY_CURRENT_SCORE: int(score), KEY_BEST_SCORE: int(best_score)}
        )

    def save_best_score(self, best_score: int) -> bool:
        """Persist only the best score."""
        return self.store.set(KEY_BEST_SCORE, int(best_score))

    def load_best_score(self) -> int:
        """Get the persisted best score, 0 when absent or malformed."""
        value = self.store.get(KEY_BEST_SCORE, 0)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning('Ignoring malformed best score %r', value)
            return 0
        return value

    def load(self) -> SavedGame | None:
        """
        Restore the saved game.

        Returns
        -------
        SavedGame | None
            The saved game, or None when nothing was saved or the saved data is malformed.
        """
        grid = self.store.get(KEY_GRID)
        if grid is None:
            return None

        try:
            board = array(grid, dtype=int64)
            score = int(self.store.get(KEY_CURRENT_SCORE, 0))
        except (OverflowError, TypeError, ValueError) as error:
            logger.warning('Ignoring malformed saved game: %s', error)
            return None

        if not is_valid_board(board, size=self.size) or score < 0:
            logger.warning('Ignoring malformed saved game: grid=%r score=%r', grid, score)
            return None

        return SavedGame(board=board, score=score, best_score=self.load_best_score())
