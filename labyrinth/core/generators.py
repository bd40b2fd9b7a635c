"""
Maze generators.

Generators:
    empty         open grid with boundary walls only
    braid         open grid with walls added while avoiding dead ends
    growing-tree  fully walled grid carved by a randomized frontier walk

build_maze() runs a generator, places start and goal, and validates the
result before it can be handed to a session.
"""

import logging
import random
from typing import Callable, Optional

from labyrinth.core.connectivity import check_invariants
from labyrinth.core.directions import Coordinate, Direction
from labyrinth.core.grid import Grid
from labyrinth.core.placement import DEFAULT_MAX_ATTEMPTS, place_randomly, random_coordinate

logger = logging.getLogger(__name__)

DEFAULT_BRAID_DENSITY = 4.0
DEFAULT_CARVE_PROBABILITY = 1.0

GENERATOR_NAMES = ("empty", "braid", "growing-tree", "growing-tree-20")

# (width, height, rng) -> Grid
GridGenerator = Callable[[int, int, Optional[random.Random]], Grid]


def empty_maze(width: int, height: int, rng: Optional[random.Random] = None) -> Grid:
    """Open grid closed only at the perimeter."""
    grid = Grid.empty(width, height)
    grid.set_boundary_walls()
    return grid


def braid_fill(
    grid: Grid,
    rng: Optional[random.Random] = None,
    density: float = DEFAULT_BRAID_DENSITY,
) -> int:
    """
    Add walls to an open grid without creating dead ends.

    Each trial picks a random room and a random axis (east or south). The
    shared edge, if still open, is walled on both rooms only when neither
    room already has more than one wall, so every room keeps at least two
    open sides.

    Args:
        grid: Grid to fill in place, boundary walls already set.
        rng: Random source.
        density: Trials per room; trial count is density * width * height.

    Returns:
        Number of walls added.
    """
    rng = rng or random
    trials = int(density * grid.size)
    added = 0
    for _ in range(trials):
        loc = random_coordinate(grid, rng)
        direction = Direction.SOUTH if rng.randrange(2) == 1 else Direction.EAST
        neighbor = loc.step(direction)
        if not grid.contains(neighbor) or grid.room_at(loc).has_wall(direction):
            continue
        if grid.room_at(loc).wall_count() > 1 or grid.room_at(neighbor).wall_count() > 1:
            continue
        grid.add_wall(loc, direction)
        added += 1
    return added


def braid_maze(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    density: float = DEFAULT_BRAID_DENSITY,
) -> Grid:
    grid = empty_maze(width, height)
    added = braid_fill(grid, rng, density)
    logger.debug(f"Braid fill added {added} walls to {width}x{height} grid")
    return grid


def grow_tree(
    grid: Grid,
    rng: Optional[random.Random] = None,
    carve_probability: float = DEFAULT_CARVE_PROBABILITY,
) -> Coordinate:
    """
    Carve passages through a fully walled grid.

    The active list starts with one random room. Each iteration picks the
    most recently added room, or with carve_probability a uniformly random
    one. A room with no uncarved neighbours leaves the list; otherwise a
    random uncarved neighbour is opened and appended. Ends with every room
    reachable from the seed.

    Args:
        grid: Fully walled grid to carve in place.
        rng: Random source.
        carve_probability: Chance of a random index instead of the last.
            1.0 behaves like Prim's algorithm, 0.0 like a recursive
            backtracker.

    Returns:
        The seed coordinate.
    """
    rng = rng or random
    seed = random_coordinate(grid, rng)
    active = [seed]
    carved = {seed}

    while active:
        idx = len(active) - 1
        if rng.random() < carve_probability:
            idx = rng.randrange(len(active))
        current = active[idx]

        unmade = [
            (direction, neighbor)
            for direction, neighbor in grid.grid_neighbors(current)
            if neighbor not in carved
        ]
        if not unmade:
            active.pop(idx)
            continue

        direction, neighbor = unmade[rng.randrange(len(unmade))]
        grid.remove_wall(current, direction)
        carved.add(neighbor)
        active.append(neighbor)

    return seed


def growing_tree_maze(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    carve_probability: float = DEFAULT_CARVE_PROBABILITY,
) -> Grid:
    grid = Grid.full(width, height)
    seed = grow_tree(grid, rng, carve_probability)
    grid.set_boundary_walls()
    logger.debug(f"Growing tree carved {width}x{height} grid from seed {seed}")
    return grid


def make_generator(
    name: str,
    braid_density: float = DEFAULT_BRAID_DENSITY,
    carve_probability: float = DEFAULT_CARVE_PROBABILITY,
) -> GridGenerator:
    """
    Look up a generator by name and bind its tuning parameters.

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "empty":
        return empty_maze
    if name == "braid":
        return lambda w, h, rng=None: braid_maze(w, h, rng, density=braid_density)
    if name == "growing-tree":
        return lambda w, h, rng=None: growing_tree_maze(w, h, rng, carve_probability=carve_probability)
    if name == "growing-tree-20":
        return lambda w, h, rng=None: growing_tree_maze(w, h, rng, carve_probability=0.2)
    raise ValueError(
        f"Unknown generator '{name}'. Must be one of: {', '.join(GENERATOR_NAMES)}"
    )


def build_maze(
    generator: GridGenerator,
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Grid:
    """
    Generate, place and validate a maze ready for a session.

    Generators close their own perimeter; an opening left by one fails
    the invariant check.

    Raises:
        PlacementError: If no connected start/goal pair could be placed.
        GridInvariantError: If the generator produced an inconsistent grid.
    """
    grid = generator(width, height, rng)
    place_randomly(grid, rng, max_attempts=max_attempts)
    check_invariants(grid)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Built {width}x{height} maze:\n{grid.render()}")
    return grid
