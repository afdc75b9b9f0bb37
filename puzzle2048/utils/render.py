"""Text rendering of boards for consoles and logs."""

from numpy import ndarray


def format_board(board: ndarray, empty: str = '.') -> str:
    """
    Format a board as a tab-separated grid.

    Parameters
    ----------
    board : ndarray
        The board to format.
    empty : str, optional
        Symbol used for empty cells (default is ``"."``).

    Returns
    -------
    str
        One line per row, cells separated by a space and a tab.

    Example
    -------
    >>> import numpy as np
    >>> print(format_board(np.array([[2, 0], [0, 4]])))
    2 	.
    . 	4
    """
    return '\n'.join(' \t'.join(str(value) if value else empty for value in row) for row in board.tolist())
