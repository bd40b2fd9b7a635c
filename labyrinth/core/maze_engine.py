"""
Labyrinth Maze Engine

Turn-based protocol between the maze authority and a solver:
- Awaken the agent at the start room (returns its survey)
- Move the agent one room at a time (costs 1 step)
- Victory detection when the agent enters the goal room
- Step limit enforcement

States:
    initial   -> no agent position yet
    active    -> agent placed, moves accepted
    victory   -> agent reached the goal (terminal)
    abandoned -> step limit reached or session ended early (terminal)
"""

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from labyrinth.core.directions import Coordinate, Direction, Survey
from labyrinth.core.errors import (
    OutOfBoundsError,
    SessionStateError,
    StepLimitExceededError,
    WallBlockedError,
)
from labyrinth.core.grid import Grid

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of a solving session."""
    INITIAL = "initial"
    ACTIVE = "active"
    VICTORY = "victory"
    ABANDONED = "abandoned"


@dataclass
class MoveResult:
    """Result of an accepted move."""
    survey: Survey
    position: Coordinate
    steps: int
    victory: bool = False

    @property
    def status(self) -> str:
        return "victory" if self.victory else "moved"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "survey": self.survey.to_dict(),
            "steps": self.steps,
        }


@dataclass
class MazeSession:
    """
    One solving session over a validated grid.

    Owns the agent position and the step counter; the solver only ever
    sees surveys and can only change the position through attempt_move.

    Example usage:
        session = MazeSession(grid, max_steps=1000)
        survey = session.awaken()
        result = session.attempt_move(Direction.SOUTH)
        if result.victory:
            print(f"Solved in {result.steps} steps")
    """
    grid: Grid
    max_steps: Optional[int] = None
    session_id: str = field(default_factory=lambda: f"sess_{uuid.uuid4().hex[:12]}")
    position: Optional[Coordinate] = None
    steps: int = 0
    state: SessionState = SessionState.INITIAL

    def __post_init__(self):
        if self.grid.start is None or self.grid.goal is None:
            raise SessionStateError("Maze must have a start and a goal before a session")

    @property
    def is_finished(self) -> bool:
        return self.state in (SessionState.VICTORY, SessionState.ABANDONED)

    def awaken(self) -> Survey:
        """
        Place the agent at the start room.

        Returns:
            Survey of the start room.

        Raises:
            SessionStateError: If the session was already awakened.
        """
        if self.state is not SessionState.INITIAL:
            raise SessionStateError(f"Session already awakened (state: {self.state.value})")

        self.position = self.grid.start
        self.state = SessionState.ACTIVE
        logger.debug(f"[{self.session_id}] awakened at {self.position}")
        return self.grid.survey(self.position)

    def look(self) -> Survey:
        """Survey of the current room. FREE - does not cost a step."""
        self._ensure_active()
        return self.grid.survey(self.position)

    def attempt_move(self, direction: Union[Direction, str]) -> MoveResult:
        """
        Move the agent one room. COSTS 1 STEP when accepted.

        Args:
            direction: Direction or direction name.

        Returns:
            MoveResult with the new room's survey; victory is set when the
            new room is the goal.

        Raises:
            InvalidDirectionError: If direction names no direction.
            WallBlockedError: If the current room is walled on direction.
            OutOfBoundsError: If the destination lies outside the grid.
            SessionStateError: If the session is not active.
        """
        direction = Direction.parse(direction)
        self._ensure_active()

        if self.grid.room_at(self.position).has_wall(direction):
            raise WallBlockedError(f"Cannot move {direction.value} - wall blocking")

        destination = self.position.step(direction)
        if not self.grid.contains(destination):
            raise OutOfBoundsError(f"Cannot move {direction.value} - outside of the maze")

        self.position = destination
        self.steps += 1

        victory = destination == self.grid.goal
        if victory:
            self.state = SessionState.VICTORY
            logger.info(f"[{self.session_id}] victory achieved in {self.steps} steps")

        return MoveResult(
            survey=self.grid.survey(destination),
            position=destination,
            steps=self.steps,
            victory=victory,
        )

    def check_step_limit(self) -> None:
        """
        Abandon the session once the step budget is spent.

        Raises:
            StepLimitExceededError: If max_steps is set and reached without victory.
        """
        if self.max_steps is None or self.state is not SessionState.ACTIVE:
            return
        if self.steps >= self.max_steps:
            self.abandon()
            raise StepLimitExceededError(self.steps, self.max_steps)

    def abandon(self) -> None:
        """End the session without victory. No-op once finished."""
        if self.is_finished:
            return
        self.state = SessionState.ABANDONED
        logger.info(f"[{self.session_id}] abandoned after {self.steps} steps")

    def visualize(self) -> str:
        """ASCII view of the maze with the agent marked."""
        return self.grid.render(agent=self.position)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "steps": self.steps,
            "width": self.grid.width,
            "height": self.grid.height,
        }

    def _ensure_active(self) -> None:
        if self.state is SessionState.INITIAL:
            raise SessionStateError("Session not awakened. Call awaken() first.")
        if self.state is not SessionState.ACTIVE:
            raise SessionStateError(f"Session is not active (state: {self.state.value})")
