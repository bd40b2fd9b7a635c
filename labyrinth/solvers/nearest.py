"""
Nearest-unexplored solver.

Keeps every survey it has seen and always walks towards the closest room
it has not surveyed yet, by hop count over the known passages.
"""

from collections import deque
from typing import Optional

from labyrinth.core.directions import Coordinate, Direction, Survey, valid_directions
from labyrinth.core.errors import ExplorationExhaustedError
from labyrinth.solvers.base import Solver


def shortest_path_to_unexplored(
    memory: dict[Coordinate, Survey],
    start: Coordinate,
) -> list[Direction]:
    """
    Find the shortest known route to the nearest unsurveyed room.

    Breadth-first search from start over the open sides recorded in
    memory, expanding neighbours in canonical order so ties resolve
    deterministically.

    Args:
        memory: Surveys keyed by the coordinate they were taken at.
        start: Current position.

    Returns:
        Directions from start to the frontier room.

    Raises:
        ExplorationExhaustedError: If every reachable room is surveyed.
    """
    parents: dict[Coordinate, Optional[tuple[Coordinate, Direction]]] = {start: None}
    queue = deque([start])
    frontier: Optional[Coordinate] = None

    while queue:
        current = queue.popleft()
        survey = memory.get(current)
        if survey is None:
            frontier = current
            break

        for direction in valid_directions(survey):
            neighbor = current.step(direction)
            if neighbor not in parents:
                parents[neighbor] = (current, direction)
                queue.append(neighbor)

    if frontier is None:
        raise ExplorationExhaustedError(f"Nothing left to explore from {start}")

    path = []
    current = frontier
    while parents[current] is not None:
        current, direction = parents[current]
        path.append(direction)
    path.reverse()
    return path


class NearestSolver(Solver):
    """Walks a BFS route to the closest unexplored room, recomputed when spent."""

    name = "nearest"

    def __init__(self):
        super().__init__()
        self.path: deque[Direction] = deque()

    def next_direction(self, survey: Survey) -> Direction:
        self.memory[self.position] = survey

        if not self.path:
            self.path.extend(shortest_path_to_unexplored(self.memory, self.position))

        direction = self.path.popleft()
        self.advance(direction)
        return direction
