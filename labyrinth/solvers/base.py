"""
Solver contract.

A solver turns a stream of room surveys into a stream of directions, one
direction per survey. It never sees the grid: it tracks its own position
relative to where it awoke, assuming every emitted move is accepted.

Two forms of the same capability:
    next_direction(survey)     request/response, used by remote clients
    solve(surveys, commands)   channel form, used by the session runner
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from labyrinth.core.directions import Coordinate, Direction, Survey
from labyrinth.core.errors import SolverError

logger = logging.getLogger(__name__)

# Sentinel put on a queue to close it
CLOSED = None


class Solver(ABC):
    """Base class for maze solvers."""

    name: str = "solver"

    def __init__(self):
        self.position = Coordinate(0, 0)
        self.memory: dict[Coordinate, Survey] = {}

    @abstractmethod
    def next_direction(self, survey: Survey) -> Direction:
        """
        Choose the move out of the current room.

        Args:
            survey: Walls of the room the solver is standing in.

        Returns:
            Direction to move next.

        Raises:
            SolverError: If no move can be made.
        """

    def advance(self, direction: Direction) -> None:
        """Record that the solver is about to move in direction."""
        self.position = self.position.step(direction)

    async def solve(
        self,
        surveys: "asyncio.Queue[Optional[Survey]]",
        commands: "asyncio.Queue[Optional[Direction]]",
    ) -> None:
        """
        Answer every survey on surveys with one direction on commands.

        Returns when surveys is closed or the solver gives up, closing
        commands on the way out.
        """
        try:
            while True:
                survey = await surveys.get()
                if survey is CLOSED:
                    break
                await commands.put(self.next_direction(survey))
        except SolverError as e:
            logger.warning(f"{self.name} solver stopped: {e}")
        finally:
            await commands.put(CLOSED)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position}, known={len(self.memory)})"
