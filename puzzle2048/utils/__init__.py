# -*- coding: utf-8 -*-
"""
This module provides presentation helpers for the 2048 game.

It includes a function mapping swipe velocities to move directions and a text formatter for boards.
"""

from .gesture import direction_from_velocity
from .render import format_board

__all__ = ["direction_from_velocity", "format_board"]
