"""
Grid and room model.

A Grid is a fixed width x height array of rooms addressed by (x, y), with
x increasing eastward and y increasing southward. Each room carries four
independent wall flags plus start/goal tags. Walls between neighbours are
kept symmetric by the grid-level helpers; room-level helpers touch one
room only.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from labyrinth.core.directions import CANONICAL_ORDER, Coordinate, Direction, Survey
from labyrinth.core.errors import OutOfBoundsError, PlacementError


@dataclass
class Room:
    """One grid cell with up to four walls."""
    north: bool = False
    south: bool = False
    west: bool = False
    east: bool = False
    is_start: bool = False
    is_goal: bool = False

    def add_wall(self, direction: Direction) -> None:
        setattr(self, direction.value, True)

    def remove_wall(self, direction: Direction) -> None:
        setattr(self, direction.value, False)

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.value)

    def wall_count(self) -> int:
        """Number of walled sides (0-4)."""
        return sum(self.has_wall(d) for d in Direction)

    def survey(self) -> Survey:
        """Snapshot of the walls as seen from inside the room."""
        return Survey(
            north=self.north,
            south=self.south,
            west=self.west,
            east=self.east,
        )


class Grid:
    """
    Rectangular array of rooms.

    Example usage:
        grid = Grid.empty(10, 10)
        grid.set_boundary_walls()
        grid.add_wall(Coordinate(2, 3), Direction.EAST)  # walls both rooms
    """

    def __init__(self, width: int, height: int, walled: bool = False):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.start: Optional[Coordinate] = None
        self.goal: Optional[Coordinate] = None
        self.rooms: list[list[Room]] = [
            [
                Room(north=walled, south=walled, west=walled, east=walled)
                for _ in range(width)
            ]
            for _ in range(height)
        ]

    @classmethod
    def empty(cls, width: int, height: int) -> "Grid":
        """Grid without any walls. Starting point for additive generators."""
        return cls(width, height, walled=False)

    @classmethod
    def full(cls, width: int, height: int) -> "Grid":
        """Grid with every wall present. Starting point for carving generators."""
        return cls(width, height, walled=True)

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def room(self, x: int, y: int) -> Room:
        """
        Get the room at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) lies outside the grid.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(
                f"Room ({x}, {y}) outside of {self.width}x{self.height} maze"
            )
        return self.rooms[y][x]

    def room_at(self, coord: Coordinate) -> Room:
        return self.room(coord.x, coord.y)

    def survey(self, coord: Coordinate) -> Survey:
        return self.room_at(coord).survey()

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate every coordinate row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def set_boundary_walls(self) -> None:
        """Close every perimeter room on the side facing the grid edge."""
        xmax = self.width - 1
        ymax = self.height - 1
        for x in range(self.width):
            self.rooms[0][x].add_wall(Direction.NORTH)
            self.rooms[ymax][x].add_wall(Direction.SOUTH)
        for y in range(self.height):
            self.rooms[y][0].add_wall(Direction.WEST)
            self.rooms[y][xmax].add_wall(Direction.EAST)

    def add_wall(self, coord: Coordinate, direction: Direction) -> None:
        """Wall the edge between coord and its neighbour on both sides."""
        self.room_at(coord).add_wall(direction)
        neighbor = coord.step(direction)
        if self.contains(neighbor):
            self.room_at(neighbor).add_wall(direction.reverse)

    def remove_wall(self, coord: Coordinate, direction: Direction) -> None:
        """
        Open the edge between coord and its neighbour on both sides.

        Raises:
            OutOfBoundsError: If the edge lies on the perimeter.
        """
        neighbor = coord.step(direction)
        neighbor_room = self.room_at(neighbor)
        self.room_at(coord).remove_wall(direction)
        neighbor_room.remove_wall(direction.reverse)

    def open_neighbors(self, coord: Coordinate) -> list[Coordinate]:
        """In-bounds neighbours reachable through an open side, canonical order."""
        room = self.room_at(coord)
        adjacent = []
        for direction in CANONICAL_ORDER:
            if room.has_wall(direction):
                continue
            neighbor = coord.step(direction)
            if self.contains(neighbor):
                adjacent.append(neighbor)
        return adjacent

    def grid_neighbors(self, coord: Coordinate) -> list[tuple[Direction, Coordinate]]:
        """In-bounds neighbours regardless of walls, canonical order."""
        return [
            (direction, coord.step(direction))
            for direction in CANONICAL_ORDER
            if self.contains(coord.step(direction))
        ]

    def clear_placement(self) -> None:
        """Drop the start and goal tags."""
        for coord in (self.start, self.goal):
            if coord is not None:
                room = self.room_at(coord)
                room.is_start = False
                room.is_goal = False
        self.start = None
        self.goal = None

    def set_start(self, coord: Coordinate) -> None:
        """
        Tag the room where the agent awakens.

        Raises:
            OutOfBoundsError: If coord lies outside the grid.
            PlacementError: If the room is already the goal.
        """
        room = self.room_at(coord)
        if room.is_goal:
            raise PlacementError(f"Can't start in the goal room {coord.x},{coord.y}")
        if self.start is not None:
            self.room_at(self.start).is_start = False
        room.is_start = True
        self.start = coord

    def set_goal(self, coord: Coordinate) -> None:
        """
        Tag the goal room.

        Raises:
            OutOfBoundsError: If coord lies outside the grid.
            PlacementError: If the room is already the start.
        """
        room = self.room_at(coord)
        if room.is_start:
            raise PlacementError(f"Can't have the goal at the start {coord.x},{coord.y}")
        if self.goal is not None:
            self.room_at(self.goal).is_goal = False
        room.is_goal = True
        self.goal = coord

    def render(self, agent: Optional[Coordinate] = None) -> str:
        """
        ASCII view of the grid.

        S marks the start, G the goal and @ the agent when given.
        """
        lines = []
        for y, row in enumerate(self.rooms):
            top = ""
            middle = ""
            for x, room in enumerate(row):
                top += "+" + ("---" if room.north else "   ")
                middle += "|" if room.west else " "
                if agent is not None and agent == Coordinate(x, y):
                    middle += " @ "
                elif room.is_start:
                    middle += " S "
                elif room.is_goal:
                    middle += " G "
                else:
                    middle += "   "
            top += "+"
            middle += "|" if row[-1].east else " "
            lines.append(top)
            lines.append(middle)

        bottom = ""
        for room in self.rooms[-1]:
            bottom += "+" + ("---" if room.south else "   ")
        lines.append(bottom + "+")
        return "\n".join(lines)
