"""
Fire-and-forget audio notifications.

The notifier does not play sound itself: it forwards cues to a player callable supplied by the platform layer.
Nothing it does is reported back to the game.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from puzzle2048.config import AudioConfiguration

logger = logging.getLogger(__name__)


class AudioCue(Enum):
    """Sounds the game asks for."""

    BACKGROUND = 'background'
    MERGE = 'merge'
    MOVE = 'move'
    GAME_OVER = 'game_over'
    ACHIEVEMENT = 'achievement'


Player = Callable[[AudioCue, float], None]


def _clamp(volume: float) -> float:
    return min(max(float(volume), 0.0), 1.0)


class AudioNotifier:
    """
    Forward game events to an audio player.

    Parameters
    ----------
    player : Callable[[AudioCue, float], None], optional
        Receives the cue and the volume to play it at. Without a player, cues are only logged.
    configuration : AudioConfiguration, optional
        Initial mute state and volumes. Muted by default.
    """

    def __init__(self, player: Player | None = None, configuration: AudioConfiguration | None = None):
        configuration = configuration or AudioConfiguration()
        self._player = player
        self._muted = configuration.muted
        self._bgm_volume = _clamp(configuration.bgm_volume)
        self._sfx_volume = _clamp(configuration.sfx_volume)
        self._initialized = False

    @property
    def is_muted(self) -> bool:
        return self._muted

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def bgm_volume(self) -> float:
        return self._bgm_volume

    @property
    def sfx_volume(self) -> float:
        return self._sfx_volume

    def init(self) -> None:
        """Mark the notifier ready. Calling it again does nothing."""
        self._initialized = True

    def play(self, cue: AudioCue) -> None:
        """
        Ask the player for a cue.

        Nothing happens while muted or before ``init``. Errors raised by the player are logged and dropped.
        """
        if self._muted or not self._initialized:
            return

        volume = self._bgm_volume if cue is AudioCue.BACKGROUND else self._sfx_volume
        logger.debug('Playing %s at volume %.2f', cue.value, volume)
        if self._player is None:
            return
        try:
            self._player(cue, volume)
        except Exception:  # noqa: BLE001
            logger.exception('Audio player failed on %s', cue.value)

    def toggle_mute(self) -> bool:
        """
        Switch the mute state. Unmuting restarts the background music.

        Returns
        -------
        bool
            The new mute state.
        """
        self._muted = not self._muted
        if not self._muted:
            self.play(AudioCue.BACKGROUND)
        return self._muted

    def set_bgm_volume(self, volume: float) -> None:
        """Set the background music volume, clamped to [0, 1]."""
        self._bgm_volume = _clamp(volume)

    def set_sfx_volume(self, volume: float) -> None:
        """Set the sound effects volume, clamped to [0, 1]."""
        self._sfx_volume = _clamp(volume)

    def dispose(self) -> None:
        """Release the notifier. ``play`` does nothing until ``init`` is called again."""
        self._initialized = False
