# -*- coding: utf-8 -*-
"""
Collaborators of the 2048 grid engine: persistence, achievements and audio notifications.
"""

from .achievements import AchievementTracker
from .audio import AudioCue, AudioNotifier
from .storage import GameStorage, PreferenceStore, SavedGame

__all__ = ["AchievementTracker", "AudioCue", "AudioNotifier", "GameStorage", "PreferenceStore", "SavedGame"]
