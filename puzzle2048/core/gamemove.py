"""
Move legality for the 2048 grid engine: which directions would change a board.
"""

from numpy import ndarray

from puzzle2048.core.types import Direction


def legal_actions_mask(board: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Get a boolean mask for all four directions in a single pass.

    Parameters
    ----------
    board : ndarray
        The current board.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down) where True means the move changes the board.

    Notes
    -----
    A move is possible if a tile has an empty cell on the side it moves toward, or if two adjacent tiles
    along the move axis are equal.
    """
    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = board[:, :-1], board[:, 1:]
    h_can_merge = (left_cols != 0) & (left_cols == right_cols)

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = board[:-1, :], board[1:, :]
    v_can_merge = (top_rows != 0) & (top_rows == bottom_rows)

    # ##>: Check slide conditions per direction.
    left = (left_cols == 0) & (right_cols != 0)
    right = (right_cols == 0) & (left_cols != 0)
    up = (top_rows == 0) & (bottom_rows != 0)
    down = (bottom_rows == 0) & (top_rows != 0)

    return (
        bool(left.any() or h_can_merge.any()),
        bool(up.any() or v_can_merge.any()),
        bool(right.any() or h_can_merge.any()),
        bool(down.any() or v_can_merge.any()),
    )


def illegal_actions(board: ndarray) -> list[Direction]:
    """
    Determine the directions that leave the board unchanged.

    Parameters
    ----------
    board : ndarray
        The current board.

    Returns
    -------
    list[Direction]
        Directions that would be no-op moves.
    """
    mask = legal_actions_mask(board)
    return [direction for direction in Direction if not mask[direction]]


def legal_actions(board: ndarray) -> list[Direction]:
    """
    Determine the directions that change the board.

    Parameters
    ----------
    board : ndarray
        The current board.

    Returns
    -------
    list[Direction]
        Directions that would move or merge at least one tile.
    """
    mask = legal_actions_mask(board)
    return [direction for direction in Direction if mask[direction]]


def can_move(board: ndarray, direction: int = Direction.LEFT) -> bool:
    """
    Check if a move in the given direction changes the board.

    Parameters
    ----------
    board : ndarray
        The board to check.
    direction : int, optional
        The direction (default is left).

    Returns
    -------
    bool
        True if the move is possible, False otherwise.
    """
    return legal_actions_mask(board)[int(direction)]
