"""Exceptions raised by the labyrinth core.

Movement and lookup errors are recoverable: the caller rejects the move or
skips the candidate. Grid invariant errors are fatal for the maze being
built and must never reach a solver.
"""


class LabyrinthError(Exception):
    """Base exception for all labyrinth errors."""

    pass


class OutOfBoundsError(LabyrinthError, IndexError):
    """Coordinate lies outside the grid."""

    pass


class WallBlockedError(LabyrinthError):
    """Movement attempted through a wall."""

    pass


class InvalidDirectionError(LabyrinthError, ValueError):
    """Command is not one of the four recognized directions."""

    pass


class PlacementError(LabyrinthError):
    """Start or goal could not be placed."""

    pass


class SessionStateError(LabyrinthError):
    """Protocol operation called in the wrong session state."""

    pass


class StepLimitExceededError(LabyrinthError):
    """Session used up its step budget without reaching the goal."""

    def __init__(self, steps: int, max_steps: int):
        self.steps = steps
        self.max_steps = max_steps
        super().__init__(f"Reached max-steps ({max_steps}) after {steps} steps")


class GridInvariantError(LabyrinthError):
    """Generated grid is inconsistent. Fatal for that maze."""

    pass


class AsymmetricWallError(GridInvariantError):
    """Two adjacent rooms disagree about the wall between them."""

    pass


class PerimeterOpeningError(GridInvariantError):
    """A boundary room is open towards the outside of the grid."""

    pass


class SolverError(LabyrinthError):
    """Solver cannot produce a direction."""

    pass


class ExplorationExhaustedError(SolverError):
    """No unexplored room is reachable from the solver's position."""

    pass
