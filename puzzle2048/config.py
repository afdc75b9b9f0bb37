# -*- coding: utf-8 -*-
"""
Set of configurations for this project.
"""
from dataclasses import dataclass, field
from pathlib import Path

BOARD_SIZE = 4
SWIPE_VELOCITY_THRESHOLD = 250.0


def default_storage_path() -> Path:
    """Location of the saved game in the user's home directory."""
    return Path.home() / ".puzzle2048" / "preferences.json"


@dataclass
class AudioConfiguration:
    """
    Audio configuration.
    """

    muted: bool = True
    bgm_volume: float = 0.5
    sfx_volume: float = 0.7


@dataclass
class GameConfiguration:
    """
    Game configuration.
    """

    size: int = BOARD_SIZE
    swipe_threshold: float = SWIPE_VELOCITY_THRESHOLD
    storage_path: Path = field(default_factory=default_storage_path)
    audio: AudioConfiguration = field(default_factory=AudioConfiguration)
