"""
A game session: one grid engine wired to its storage, achievement and audio collaborators.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from numpy import ndarray

from puzzle2048.config import GameConfiguration
from puzzle2048.core.types import Direction, MoveResult
from puzzle2048.envs.engine import GridEngine
from puzzle2048.services.achievements import AchievementTracker
from puzzle2048.services.audio import AudioCue, AudioNotifier
from puzzle2048.services.storage import GameStorage
from puzzle2048.utils.gesture import direction_from_velocity

logger = logging.getLogger(__name__)


class GameSession:
    """
    Play 2048 with persistence, achievements and audio.

    The session is created when the game screen opens and closed when it goes away. Every collaborator is
    injected and optional, so a session without storage, achievements or audio is a plain game.

    Parameters
    ----------
    engine : GridEngine, optional
        The grid engine. A new one is created from the configuration by default.
    storage : GameStorage, optional
        Persistence of the board, score and best score.
    achievements : AchievementTracker, optional
        Observer unlocking achievements after each move.
    audio : AudioNotifier, optional
        Receiver of sound cues.
    configuration : GameConfiguration, optional
        Board size and swipe threshold.
    clock : Callable[[], float], optional
        Monotonic clock in seconds, used for the game duration.
    """

    def __init__(
        self,
        engine: GridEngine | None = None,
        storage: GameStorage | None = None,
        achievements: AchievementTracker | None = None,
        audio: AudioNotifier | None = None,
        configuration: GameConfiguration | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.configuration = configuration or GameConfiguration()
        self.engine = engine or GridEngine(size=self.configuration.size)
        self.storage = storage
        self.achievements = achievements
        self.audio = audio
        self._clock = clock

        # ##: Best score across games.
        self.best_score = 0

        # ##: Statistics of the current game.
        self.move_count = 0
        self.move_history: list[str] = []
        self.used_undo = False
        self.last_unlocked: list[str] = []
        self._started_at = clock()

    @property
    def board(self) -> ndarray:
        return self.engine.board

    @property
    def score(self) -> int:
        return self.engine.score

    @property
    def can_undo(self) -> bool:
        return self.engine.can_undo

    @property
    def is_finished(self) -> bool:
        return self.engine.is_finished

    @property
    def elapsed(self) -> float:
        """Seconds since the current game started."""
        return self._clock() - self._started_at

    def _reset_statistics(self) -> None:
        self.move_count = 0
        self.move_history = []
        self.used_undo = False
        self.last_unlocked = []
        self._started_at = self._clock()

    def _notify(self, cue: AudioCue) -> None:
        if self.audio is not None:
            self.audio.play(cue)

    def _save(self) -> None:
        if self.storage is not None:
            self.storage.save(self.engine.board, self.engine.score, self.best_score)

    def _update_best_score(self) -> None:
        self.best_score = max(self.best_score, self.engine.score)

    def start(self) -> ndarray:
        """
        Open the session: get audio ready and resume the saved game, or start a new one.

        Returns
        -------
        ndarray
            The board to display.
        """
        if self.audio is not None:
            self.audio.init()

        saved = self.storage.load() if self.storage is not None else None
        if saved is None:
            if self.storage is not None:
                self.best_score = self.storage.load_best_score()
            self.engine.reset()
            self._save()
        else:
            self.engine.load_state(saved.board, saved.score)
            self.best_score = max(saved.best_score, saved.score)
            logger.info('Resumed game with score %d', saved.score)

        self._reset_statistics()
        self._notify(AudioCue.BACKGROUND)
        return self.engine.board

    def move(self, direction: int) -> MoveResult:
        """
        Play a move.

        Parameters
        ----------
        direction : int
            The direction to move.

        Returns
        -------
        MoveResult
            The engine's result. Moves that change nothing are neither counted, saved nor notified.
        """
        direction = Direction(direction)
        result = self.engine.move(direction)
        self.last_unlocked = []
        if not result.moved:
            return result

        self.move_count += 1
        self.move_history.append(direction.name.lower())
        self._update_best_score()
        self._notify(AudioCue.MERGE if result.merged else AudioCue.MOVE)
        self._save()

        if self.achievements is not None:
            self.last_unlocked = self.achievements.evaluate(
                score=result.score,
                moves=self.move_count,
                elapsed=self.elapsed,
                used_undo=self.used_undo,
                board=result.board,
                move_history=self.move_history,
            )
            for _ in self.last_unlocked:
                self._notify(AudioCue.ACHIEVEMENT)

        if result.game_over:
            self._notify(AudioCue.GAME_OVER)

        return result

    def swipe(self, velocity_x: float, velocity_y: float) -> MoveResult | None:
        """
        Play the move matching a swipe.

        Returns
        -------
        MoveResult | None
            The result of the move, or None if the swipe was too slow to count.
        """
        direction = direction_from_velocity(velocity_x, velocity_y, threshold=self.configuration.swipe_threshold)
        if direction is None:
            return None
        return self.move(direction)

    def undo(self) -> bool:
        """
        Take back the last move.

        Returns
        -------
        bool
            True if the move was taken back, False if there was nothing to undo.
        """
        if not self.engine.undo():
            return False

        self.used_undo = True
        self._save()
        return True

    def new_game(self) -> ndarray:
        """
        Abandon the current game and start a new one.

        Returns
        -------
        ndarray
            The new board.
        """
        self._update_best_score()
        board = self.engine.reset()
        self._reset_statistics()
        self._save()
        return board

    def reset_best_score(self) -> None:
        """Forget the best score."""
        self.best_score = 0
        if self.storage is not None:
            self.storage.save_best_score(0)

    def close(self) -> None:
        """Save the game and release the audio notifier."""
        self._save()
        if self.audio is not None:
            self.audio.dispose()
