# Core module
from .directions import CANONICAL_ORDER, Coordinate, Direction, Survey, step, valid_directions
from .errors import (
    AsymmetricWallError,
    ExplorationExhaustedError,
    GridInvariantError,
    InvalidDirectionError,
    LabyrinthError,
    OutOfBoundsError,
    PerimeterOpeningError,
    PlacementError,
    SessionStateError,
    SolverError,
    StepLimitExceededError,
    WallBlockedError,
)
from .grid import Grid, Room
from .connectivity import check_invariants, has_one_way_walls, is_connected
from .placement import place_randomly
from .generators import (
    GENERATOR_NAMES,
    braid_maze,
    build_maze,
    empty_maze,
    growing_tree_maze,
    make_generator,
)
from .maze_engine import MazeSession, MoveResult, SessionState

__all__ = [
    "CANONICAL_ORDER",
    "Coordinate",
    "Direction",
    "Survey",
    "step",
    "valid_directions",
    "AsymmetricWallError",
    "ExplorationExhaustedError",
    "GridInvariantError",
    "InvalidDirectionError",
    "LabyrinthError",
    "OutOfBoundsError",
    "PerimeterOpeningError",
    "PlacementError",
    "SessionStateError",
    "SolverError",
    "StepLimitExceededError",
    "WallBlockedError",
    "Grid",
    "Room",
    "check_invariants",
    "has_one_way_walls",
    "is_connected",
    "place_randomly",
    "GENERATOR_NAMES",
    "braid_maze",
    "build_maze",
    "empty_maze",
    "growing_tree_maze",
    "make_generator",
    "MazeSession",
    "MoveResult",
    "SessionState",
]
