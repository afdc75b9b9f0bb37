"""
Map swipe gestures to move directions.
"""

from puzzle2048.config import SWIPE_VELOCITY_THRESHOLD
from puzzle2048.core.types import Direction


def direction_from_velocity(
    velocity_x: float, velocity_y: float, threshold: float = SWIPE_VELOCITY_THRESHOLD
) -> Direction | None:
    """
    Choose the direction of a swipe from its release velocity.

    Parameters
    ----------
    velocity_x : float
        Horizontal velocity in pixels per second, positive toward the right.
    velocity_y : float
        Vertical velocity in pixels per second, positive toward the bottom of the screen.
    threshold : float, optional
        Minimum speed along the dominant axis (default is 250).

    Returns
    -------
    Direction | None
        The direction along the dominant axis, or None if the swipe is too slow.

    Notes
    -----
    When both components have the same magnitude the horizontal axis wins.

    Examples
    --------
    >>> direction_from_velocity(-400.0, 30.0)
    <Direction.LEFT: 0>
    >>> direction_from_velocity(10.0, 600.0)
    <Direction.DOWN: 3>
    >>> direction_from_velocity(100.0, 0.0) is None
    True
    """
    if abs(velocity_x) >= abs(velocity_y):
        if velocity_x > threshold:
            return Direction.RIGHT
        if velocity_x < -threshold:
            return Direction.LEFT
        return None

    if velocity_y > threshold:
        return Direction.DOWN
    if velocity_y < -threshold:
        return Direction.UP
    return None
