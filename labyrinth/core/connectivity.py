"""Reachability and wall-consistency checks for generated grids."""

import logging

from labyrinth.core.directions import Coordinate, Direction
from labyrinth.core.errors import AsymmetricWallError, PerimeterOpeningError
from labyrinth.core.grid import Grid

logger = logging.getLogger(__name__)


def is_connected(grid: Grid, start: Coordinate, end: Coordinate) -> bool:
    """
    Check whether end is reachable from start through open sides.

    Iterative depth-first traversal with a visited set, so it terminates
    on grids with cycles and does not grow the call stack.
    """
    if start == end:
        return True

    visited = {start}
    stack = [start]
    while stack:
        current = stack.pop()
        for neighbor in grid.open_neighbors(current):
            if neighbor == end:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return False


def reachable_from(grid: Grid, origin: Coordinate) -> set[Coordinate]:
    """All coordinates reachable from origin, origin included."""
    visited = {origin}
    stack = [origin]
    while stack:
        current = stack.pop()
        for neighbor in grid.open_neighbors(current):
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return visited


def one_way_walls(grid: Grid) -> list[tuple[Coordinate, Direction]]:
    """List every (room, side) whose flag disagrees with its neighbour."""
    mismatches = []
    for coord in grid.coordinates():
        room = grid.room_at(coord)
        for direction in (Direction.SOUTH, Direction.EAST):
            neighbor = coord.step(direction)
            if not grid.contains(neighbor):
                continue
            if room.has_wall(direction) != grid.room_at(neighbor).has_wall(direction.reverse):
                mismatches.append((coord, direction))
    return mismatches


def has_one_way_walls(grid: Grid) -> bool:
    return bool(one_way_walls(grid))


def perimeter_openings(grid: Grid) -> list[tuple[Coordinate, Direction]]:
    """List every boundary room side that opens past the grid edge."""
    openings = []
    for coord in grid.coordinates():
        room = grid.room_at(coord)
        for direction in Direction:
            if not grid.contains(coord.step(direction)) and not room.has_wall(direction):
                openings.append((coord, direction))
    return openings


def check_invariants(grid: Grid) -> None:
    """
    Validate a generated grid before it is served.

    Raises:
        AsymmetricWallError: If any adjacent pair disagrees on a shared wall.
        PerimeterOpeningError: If any boundary room is open to the outside.
    """
    mismatches = one_way_walls(grid)
    if mismatches:
        coord, direction = mismatches[0]
        logger.error(f"Found {len(mismatches)} one-way walls, first at {coord} {direction.value}")
        raise AsymmetricWallError(
            f"One-way wall at ({coord.x}, {coord.y}) facing {direction.value}"
        )

    openings = perimeter_openings(grid)
    if openings:
        coord, direction = openings[0]
        logger.error(f"Found {len(openings)} perimeter openings, first at {coord} {direction.value}")
        raise PerimeterOpeningError(
            f"Perimeter opening at ({coord.x}, {coord.y}) facing {direction.value}"
        )
