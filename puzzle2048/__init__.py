# -*- coding: utf-8 -*-
"""
Grid engine of the 2048 puzzle game.

This package provides the `GridEngine` class, which slides and merges a board, keeps the score and one level of
undo, and the `GameSession` class, which connects an engine to storage, achievements and audio notifications.
"""

from .core import Direction, MoveResult, UndoSnapshot
from .envs import GridEngine
from .session import GameSession

__all__ = ["Direction", "GameSession", "GridEngine", "MoveResult", "UndoSnapshot"]
