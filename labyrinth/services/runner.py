"""In-process solving sessions over single-item channels."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from labyrinth.core.directions import Direction, Survey
from labyrinth.core.errors import (
    InvalidDirectionError,
    OutOfBoundsError,
    SessionStateError,
    StepLimitExceededError,
    WallBlockedError,
)
from labyrinth.core.grid import Grid
from labyrinth.core.maze_engine import MazeSession
from labyrinth.solvers.base import CLOSED, Solver

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """Outcome of one solving session."""

    completed: bool
    steps: int
    reason: Optional[str] = None

    @property
    def score(self) -> Optional[int]:
        """Steps to the goal, or None when the session failed."""
        return self.steps if self.completed else None


async def run_session(
    grid: Grid,
    solver: Solver,
    max_steps: Optional[int] = None,
) -> SessionResult:
    """
    Run one session of solver against grid.

    The protocol sends a survey, waits for exactly one direction, applies
    it and sends the next survey, until victory, a rejected move, the
    solver closing its commands, or the step limit. The survey channel is
    always closed and the solver task awaited before returning.

    Args:
        grid: Validated maze with start and goal placed.
        solver: Fresh solver instance owned by this session.
        max_steps: Step budget; None means unlimited.

    Returns:
        SessionResult with the step count and, on failure, the reason.
    """
    session = MazeSession(grid, max_steps=max_steps)
    surveys: asyncio.Queue[Optional[Survey]] = asyncio.Queue(maxsize=1)
    commands: asyncio.Queue[Optional[Direction]] = asyncio.Queue(maxsize=1)
    task = asyncio.create_task(solver.solve(surveys, commands))

    try:
        survey = session.awaken()
        while True:
            await surveys.put(survey)
            direction = await commands.get()
            if direction is CLOSED:
                session.abandon()
                return SessionResult(False, session.steps, f"{solver.name} solver stopped")

            try:
                result = session.attempt_move(direction)
            except (WallBlockedError, OutOfBoundsError, InvalidDirectionError, SessionStateError) as e:
                logger.warning(f"[{session.session_id}] {solver.name} move rejected: {e}")
                session.abandon()
                return SessionResult(False, session.steps, str(e))

            if result.victory:
                return SessionResult(True, result.steps)

            try:
                session.check_step_limit()
            except StepLimitExceededError as e:
                return SessionResult(False, session.steps, str(e))

            survey = result.survey
    finally:
        await surveys.put(CLOSED)
        await task
