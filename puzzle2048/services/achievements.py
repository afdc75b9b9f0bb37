"""
Achievements and easter eggs unlocked by playing.

The tracker only observes games: it reads the score, statistics and board handed to it and never changes the
engine. Unlocked identifiers are kept in a ``PreferenceStore`` when one is given.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from numpy import ndarray

from puzzle2048.services.storage import PreferenceStore

logger = logging.getLogger(__name__)

KEY_ACHIEVEMENTS = 'achievements'

ACHIEVE_2048 = 'achieve_2048'
ACHIEVE_4096 = 'achieve_4096'
ACHIEVE_8192 = 'achieve_8192'
ACHIEVE_PERFECT_GAME = 'achieve_perfect_game'
ACHIEVE_SPEEDRUN = 'achieve_speedrun'
ACHIEVE_NO_UNDO = 'achieve_no_undo'

EASTER_EGG_KONAMI = 'easter_egg_konami'
EASTER_EGG_FIBONACCI = 'easter_egg_fibonacci'
EASTER_EGG_PALINDROME = 'easter_egg_palindrome'

ACHIEVEMENT_DESCRIPTIONS: dict[str, str] = {
    ACHIEVE_2048: 'Reach 2048!',
    ACHIEVE_4096: 'Double the fun: reach 4096!',
    ACHIEVE_8192: 'Legendary: reach 8192!',
    ACHIEVE_PERFECT_GAME: 'Perfect game: reach 2048 with no tile below 128',
    ACHIEVE_SPEEDRUN: 'Speedrunner: reach 2048 within 5 minutes',
    ACHIEVE_NO_UNDO: 'No regrets: reach 2048 without undo',
}

EASTER_EGG_DESCRIPTIONS: dict[str, str] = {
    EASTER_EGG_KONAMI: 'Konami code: the classic cheat code',
    EASTER_EGG_FIBONACCI: 'Fibonacci: tiles forming a Fibonacci sequence',
    EASTER_EGG_PALINDROME: 'Palindrome: a symmetric pattern of tiles',
}

KONAMI_CODE = ('up', 'up', 'down', 'down', 'left', 'right', 'left', 'right')

TARGET_TILE = 2048
PERFECT_GAME_MIN_TILE = 128
SPEEDRUN_SECONDS = 5 * 60
SCORE_ACHIEVEMENTS = ((2048, ACHIEVE_2048), (4096, ACHIEVE_4096), (8192, ACHIEVE_8192))


def is_perfect_game(board: ndarray) -> bool:
    """Check if the board holds a 2048 tile and no tile below 128."""
    tiles = board[board != 0]
    return bool((tiles == TARGET_TILE).any() and not (tiles < PERFECT_GAME_MIN_TILE).any())


def is_konami_code(move_history: Sequence[str]) -> bool:
    """Check if the last eight moves spell the Konami code."""
    if len(move_history) < len(KONAMI_CODE):
        return False
    return tuple(move_history[-len(KONAMI_CODE) :]) == KONAMI_CODE


def is_fibonacci_sequence(board: ndarray) -> bool:
    """
    Check if the sorted tiles form a Fibonacci-like sequence.

    Parameters
    ----------
    board : ndarray
        The board.

    Returns
    -------
    bool
        True if there are at least three tiles and, once sorted, each equals the sum of the two before it.
    """
    numbers = sorted(int(value) for value in board[board != 0])
    if len(numbers) < 3:
        return False
    return all(numbers[i] == numbers[i - 1] + numbers[i - 2] for i in range(2, len(numbers)))


def is_palindrome(board: ndarray) -> bool:
    """Check if the tiles, read row by row, are the same backwards (at least four tiles)."""
    numbers = [int(value) for value in board.ravel() if value != 0]
    return len(numbers) >= 4 and numbers == numbers[::-1]


class AchievementTracker:
    """
    Evaluate and remember unlocked achievements.

    Parameters
    ----------
    store : PreferenceStore, optional
        Where unlocked identifiers are persisted. Without a store they live only in memory.
    """

    def __init__(self, store: PreferenceStore | None = None):
        self.store = store
        self._unlocked: set[str] = set()
        if store is not None:
            saved = store.get(KEY_ACHIEVEMENTS, [])
            if isinstance(saved, list):
                self._unlocked.update(str(item) for item in saved)
            else:
                logger.warning('Ignoring malformed achievements %r', saved)

    @property
    def unlocked(self) -> set[str]:
        """Copy of the unlocked identifiers."""
        return set(self._unlocked)

    @property
    def descriptions(self) -> dict[str, str]:
        """Descriptions of every achievement and easter egg."""
        return {**ACHIEVEMENT_DESCRIPTIONS, **EASTER_EGG_DESCRIPTIONS}

    def is_unlocked(self, achievement: str) -> bool:
        """Check if an achievement is already unlocked."""
        return achievement in self._unlocked

    def unlock(self, achievement: str) -> bool:
        """
        Unlock an achievement.

        Returns
        -------
        bool
            True the first time the achievement is unlocked, False afterwards.
        """
        if achievement in self._unlocked:
            return False

        self._unlocked.add(achievement)
        if self.store is not None:
            self.store.set(KEY_ACHIEVEMENTS, sorted(self._unlocked))
        logger.info('Unlocked %s', achievement)
        return True

    def _unlock_all(self, candidates: list[tuple[bool, str]]) -> list[str]:
        return [achievement for reached, achievement in candidates if reached and self.unlock(achievement)]

    def check_achievements(
        self, score: int, moves: int, elapsed: float, used_undo: bool, board: ndarray
    ) -> list[str]:
        """
        Check the achievements reached by a game.

        Parameters
        ----------
        score : int
            Current score.
        moves : int
            Number of board-changing moves so far.
        elapsed : float
            Seconds since the game started.
        used_undo : bool
            Whether undo was used in this game.
        board : ndarray
            Current board.

        Returns
        -------
        list[str]
            Identifiers unlocked by this call, in a stable order.
        """
        reached_target = score >= TARGET_TILE
        candidates = [(score >= threshold, achievement) for threshold, achievement in SCORE_ACHIEVEMENTS]
        candidates += [
            (is_perfect_game(board), ACHIEVE_PERFECT_GAME),
            (reached_target and elapsed < SPEEDRUN_SECONDS, ACHIEVE_SPEEDRUN),
            (reached_target and not used_undo, ACHIEVE_NO_UNDO),
        ]
        return self._unlock_all(candidates)

    def check_easter_eggs(self, move_history: Sequence[str], board: ndarray) -> list[str]:
        """
        Check the easter eggs triggered by the moves and the board.

        Returns
        -------
        list[str]
            Identifiers unlocked by this call.
        """
        candidates = [
            (is_konami_code(move_history), EASTER_EGG_KONAMI),
            (is_fibonacci_sequence(board), EASTER_EGG_FIBONACCI),
            (is_palindrome(board), EASTER_EGG_PALINDROME),
        ]
        return self._unlock_all(candidates)

    def evaluate(
        self,
        score: int,
        moves: int,
        elapsed: float,
        used_undo: bool,
        board: ndarray,
        move_history: Sequence[str] = (),
    ) -> list[str]:
        """Check achievements then easter eggs, returning everything newly unlocked."""
        unlocked = self.check_achievements(score=score, moves=moves, elapsed=elapsed, used_undo=used_undo, board=board)
        return unlocked + self.check_easter_eggs(move_history=move_history, board=board)
