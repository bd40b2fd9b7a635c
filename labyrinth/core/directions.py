"""
Direction algebra for rectangular mazes.

x grows to the east, y grows to the south. Directions iterate in the
canonical order N, S, W, E; solvers rely on it for tie-breaking.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from labyrinth.core.errors import InvalidDirectionError


class Direction(Enum):
    """Movement directions, declared in canonical order."""
    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        return _DELTAS[self]

    @property
    def reverse(self) -> "Direction":
        """Get the opposite direction."""
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """
        Convert a command into a Direction.

        Accepts enum members, their values, and the screen aliases
        up/down/left/right accepted by the HTTP move endpoint.

        Raises:
            InvalidDirectionError: If the command names no direction.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _ALIASES:
                return _ALIASES[key]
        raise InvalidDirectionError(f"Invalid direction: {value!r}")


_DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}

_ALIASES = {d.value: d for d in Direction}
_ALIASES.update({
    "n": Direction.NORTH,
    "s": Direction.SOUTH,
    "w": Direction.WEST,
    "e": Direction.EAST,
    "up": Direction.NORTH,
    "down": Direction.SOUTH,
    "left": Direction.WEST,
    "right": Direction.EAST,
})

CANONICAL_ORDER: tuple[Direction, ...] = tuple(Direction)


@dataclass(frozen=True)
class Coordinate:
    """(x, y) position in the grid. Hashable, used as a map key."""
    x: int
    y: int

    def step(self, direction: Direction) -> "Coordinate":
        """Return the adjacent coordinate. No bounds checking."""
        dx, dy = direction.delta
        return Coordinate(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


def step(coord: Coordinate, direction: Direction) -> Coordinate:
    """Return the coordinate one step from coord in direction."""
    return coord.step(direction)


@dataclass(frozen=True)
class Survey:
    """The four wall flags observed from a single room."""
    north: bool = False
    south: bool = False
    west: bool = False
    east: bool = False

    def has_wall(self, direction: Direction) -> bool:
        """Check whether the room is walled on direction."""
        return getattr(self, direction.value)

    def wall_count(self) -> int:
        """Number of walled sides (0-4)."""
        return sum(self.has_wall(d) for d in Direction)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "north": self.north,
            "south": self.south,
            "west": self.west,
            "east": self.east,
        }

    def __repr__(self) -> str:
        walls = "".join(d.value[0].upper() for d in Direction if self.has_wall(d))
        return f"Survey(walls={walls or '-'})"


def valid_directions(survey: Survey) -> list[Direction]:
    """Return the open directions of a survey in canonical order."""
    return [d for d in CANONICAL_ORDER if not survey.has_wall(d)]


def can_go(survey: Survey, direction: Direction) -> bool:
    """Check whether survey is open on direction."""
    return not survey.has_wall(direction)
