"""
Tremaux-style solver.

Marks every room it stands in and prefers the open side leading to the
least-marked room, first match in canonical order on ties. Stepping into
an already-marked room outside of a backtrack turns the solver around;
turning straight back marks the current room twice so the dead end is
not chosen again.
"""

from collections import defaultdict

from labyrinth.core.directions import Coordinate, Direction, Survey, valid_directions
from labyrinth.core.errors import SolverError
from labyrinth.solvers.base import Solver


class TremauxSolver(Solver):
    """Local wall follower with per-room visit marks."""

    name = "tremaux"

    def __init__(self):
        super().__init__()
        self.visited: defaultdict[Coordinate, int] = defaultdict(int)
        self.last_direction = Direction.NORTH
        self.backtracking = False

    def least_visited(self, survey: Survey) -> Direction:
        """Open direction whose destination has the fewest marks."""
        valid = valid_directions(survey)
        if not valid:
            raise SolverError(f"Room {self.position} is walled in")

        best = valid[0]
        best_cost = self.visited[self.position.step(best)]
        for direction in valid[1:]:
            cost = self.visited[self.position.step(direction)]
            if cost < best_cost:
                best = direction
                best_cost = cost
        return best

    def next_direction(self, survey: Survey) -> Direction:
        self.visited[self.position] += 1
        self.memory[self.position] = survey

        direction = self.least_visited(survey)
        ahead = self.position.step(direction)
        if not self.backtracking and self.visited[ahead] > 0:
            direction = self.last_direction.reverse
            self.backtracking = True

        if direction.reverse == self.last_direction:
            self.visited[self.position] += 1

        if self.visited[ahead] == 0:
            self.backtracking = False

        self.last_direction = direction
        self.advance(direction)
        return direction
