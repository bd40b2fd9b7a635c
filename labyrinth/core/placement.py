"""Random start/goal placement gated by the connectivity check."""

import logging
import random
from typing import Optional

from labyrinth.core.connectivity import is_connected
from labyrinth.core.directions import Coordinate
from labyrinth.core.errors import PlacementError
from labyrinth.core.grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


def random_coordinate(grid: Grid, rng: Optional[random.Random] = None) -> Coordinate:
    """Uniformly random coordinate inside the grid."""
    rng = rng or random
    return Coordinate(rng.randrange(grid.width), rng.randrange(grid.height))


def place_randomly(
    grid: Grid,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> tuple[Coordinate, Coordinate]:
    """
    Pick a start and goal and tag them on the grid.

    Draws pairs until they are distinct and connected through open sides.

    Args:
        grid: Grid with its walls already established.
        rng: Random source. Defaults to the module-level generator.
        max_attempts: Number of pairs to draw before giving up.

    Returns:
        Tuple of (start, goal).

    Raises:
        PlacementError: If the grid has a single room or no connected
            pair was drawn within max_attempts.
    """
    if grid.size < 2:
        raise PlacementError("Maze needs at least two rooms to place start and goal")

    for attempt in range(1, max_attempts + 1):
        start = random_coordinate(grid, rng)
        goal = random_coordinate(grid, rng)
        if start == goal:
            continue
        if is_connected(grid, start, goal):
            grid.clear_placement()
            grid.set_start(start)
            grid.set_goal(goal)
            logger.debug(f"Placed start {start} and goal {goal} after {attempt} attempts")
            return start, goal

    raise PlacementError(f"No connected start/goal pair found in {max_attempts} attempts")
