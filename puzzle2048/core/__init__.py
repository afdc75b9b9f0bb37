# -*- coding: utf-8 -*-
"""
This module provides the 2048 grid engine as plain functions over NumPy boards.

It includes functions for sliding and merging lines, spawning tiles, computing the board after a move,
checking terminal boards and listing legal moves, together with the value types they exchange.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    fill_cells,
    is_terminal,
    is_valid_board,
    latent_state,
    merge_line,
    next_state,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import can_move, illegal_actions, legal_actions, legal_actions_mask
from .types import Direction, MoveResult, UndoSnapshot

__all__ = [
    "TILE_SPAWN_PROBS",
    "Direction",
    "MoveResult",
    "UndoSnapshot",
    "can_move",
    "fill_cells",
    "illegal_actions",
    "is_terminal",
    "is_valid_board",
    "latent_state",
    "legal_actions",
    "legal_actions_mask",
    "merge_line",
    "next_state",
    "slide_and_merge",
    "spawn_tile",
]
