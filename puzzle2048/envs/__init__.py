# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game.

This module provides the `GridEngine` class, which owns the board, the score and the undo snapshot of a game.
"""

from .engine import GridEngine

__all__ = ["GridEngine"]
