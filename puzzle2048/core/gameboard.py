"""
Core functionality of the 2048 grid engine: sliding, merging, spawning and terminal detection.
"""

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, array_equal, int64, ndarray, rot90, zeros_like
from numpy.random import PCG64DXSM, Generator, default_rng

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Pre-computed tile values and probabilities for fast sampling.
_TILE_VALUES = [2, 4]
_TILE_PROBS = [0.9, 0.1]

# ##>: Module-level generator used when the caller does not inject one.
_GENERATOR = default_rng(PCG64DXSM())


def merge_line(line: ndarray) -> tuple[int, ndarray]:
    """
    Compact a line toward its start and merge adjacent equal tiles.

    Parameters
    ----------
    line : ndarray
        A 1D array representing one line of the board, ordered from the edge tiles move toward.

    Returns
    -------
    score : int
        Sum of the merged tiles' values.
    merged_line : ndarray
        The non-empty tiles after merging, without padding.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - A merged pair is consumed: ``[2, 2, 2, 2]`` gives ``[4, 4]``, not ``[8]``.
    - With three equal tiles only the first pair merges: ``[2, 2, 2]`` gives ``[4, 2]``.
    """
    # ##: Handle lines with nothing to merge.
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Iterate over the line and merge values.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=line.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide the board to the left, merge adjacent tiles, and compute the score.

    Parameters
    ----------
    board : ndarray
        The board represented as a 2D NumPy array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        A new board after sliding and merging. Empty cells are padded on the right of each row.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_line(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def latent_state(board: ndarray, direction: int) -> tuple[ndarray, int]:
    """
    Compute the board after a move, without spawning a new tile.

    Parameters
    ----------
    board : ndarray
        The current board.
    direction : int
        The direction to move (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    new_board : ndarray
        The board after sliding and merging, in its original orientation.
    score : int
        The score obtained from this move.

    Notes
    -----
    Rotating by ``direction`` quarter turns lines up every row or column so that its far edge comes first,
    which lets a single left slide serve all four directions.
    """
    rotated_board = rot90(board, k=int(direction))
    score, updated_board = slide_and_merge(rotated_board)
    return rot90(updated_board, k=-int(direction)).copy(), score


def spawn_tile(board: ndarray, generator: Generator | None = None) -> tuple[ndarray, tuple[int, int, int] | None]:
    """
    Put a new tile in a random empty cell.

    Parameters
    ----------
    board : ndarray
        The board. **Modified in-place.**
    generator : Generator, optional
        Random source. Defaults to a module-level generator.

    Returns
    -------
    board : ndarray
        The same array reference.
    spawned : tuple[int, int, int] | None
        Row, column and value of the new tile, or None if the board was full.

    Notes
    -----
    - The cell is chosen uniformly among empty cells.
    - The value is 2 with probability 0.9 and 4 with probability 0.1.
    - A full board is left unchanged; this is not an error.
    """
    rng = generator if generator is not None else _GENERATOR

    available_cells = argwhere(board == 0)
    if len(available_cells) == 0:
        return board, None

    row, col = available_cells[rng.integers(len(available_cells))]
    value = int(rng.choice(_TILE_VALUES, p=_TILE_PROBS))
    board[row, col] = value
    return board, (int(row), int(col), value)


def fill_cells(board: ndarray, number_tile: int, generator: Generator | None = None) -> ndarray:
    """
    Fill empty cells with new tiles (2 or 4).

    Parameters
    ----------
    board : ndarray
        The board. **Modified in-place.**
    number_tile : int
        Number of new tiles to add.
    generator : Generator, optional
        Random source. Defaults to a module-level generator.

    Returns
    -------
    ndarray
        The same array reference with new tiles added.

    Notes
    -----
    If there are fewer empty cells than requested, all available cells are filled.
    """
    rng = generator if generator is not None else _GENERATOR

    # ##: Only if there are still available places.
    available_cells = argwhere(board == 0)
    number_tile = min(number_tile, len(available_cells))
    if number_tile > 0:
        values = rng.choice(_TILE_VALUES, size=number_tile, p=_TILE_PROBS)

        # ##: Randomly choose distinct cell positions.
        chosen_indices = rng.choice(len(available_cells), size=number_tile, replace=False)
        board[tuple(available_cells[chosen_indices].T)] = values
    return board


def next_state(
    board: ndarray, direction: int, generator: Generator | None = None
) -> tuple[ndarray, int, tuple[int, int, int] | None]:
    """
    Compute the next board and reward after a move.

    Parameters
    ----------
    board : ndarray
        The current board. Never modified.
    direction : int
        The direction to move (0: left, 1: up, 2: right, 3: down).
    generator : Generator, optional
        Random source for the spawned tile.

    Returns
    -------
    new_board : ndarray
        The board after the move and the new tile.
    reward : int
        The score obtained from this move.
    spawned : tuple[int, int, int] | None
        The spawned tile, None when the move changed nothing.

    Notes
    -----
    If the move results in no change, the reward is 0, no tile is added and the same board is returned.
    """
    updated_board, reward = latent_state(board, direction)
    if array_equal(updated_board, board):
        return board, 0, None

    # ##: Fill randomly one cell.
    updated_board, spawned = spawn_tile(updated_board, generator=generator)
    return updated_board, reward, spawned


def is_terminal(board: ndarray) -> bool:
    """
    Check if no move can change the board.

    Parameters
    ----------
    board : ndarray
        The board.

    Returns
    -------
    bool
        True if there is no empty cell and no two horizontally or vertically adjacent cells are equal.
    """
    return bool(
        np_all(board != 0) and not np_any(board[:-1] == board[1:]) and not np_any(board[:, :-1] == board[:, 1:])
    )


def is_valid_board(board: ndarray, size: int = 4) -> bool:
    """
    Check that a board has the right shape and only holds empty cells or powers of two.

    Parameters
    ----------
    board : ndarray
        The board to check.
    size : int, optional
        Expected side length (default is 4).

    Returns
    -------
    bool
        True if the board is well formed.
    """
    if board.shape != (size, size) or board.dtype.kind not in 'iu':
        return False
    tiles = board[board != 0].astype(int64)
    return bool(np_all(tiles >= 2) and np_all((tiles & (tiles - 1)) == 0))

