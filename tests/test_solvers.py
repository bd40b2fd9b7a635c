"""Tests for the solvers and the in-process session runner."""

import asyncio
import random

import pytest

from labyrinth.core.directions import Coordinate, Direction, Survey
from labyrinth.core.errors import ExplorationExhaustedError, SolverError
from labyrinth.core.generators import build_maze, make_generator
from labyrinth.services.runner import SessionResult, run_session
from labyrinth.solvers import (
    CLOSED,
    NearestSolver,
    Solver,
    TremauxSolver,
    make_solver,
    shortest_path_to_unexplored,
)
from mazes import comb_grid, corridor_grid, two_room_grid

N, S, W, E = Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST

# Both solvers walk the comb tooth by tooth
COMB_ROUTE = [S, S, N, N, E, S, S, N, N, E, S, S]


def replay(solver: Solver, grid, limit: int = 1000) -> list[Direction]:
    """Drive solver against grid synchronously until it reaches the goal."""
    position = grid.start
    moves = []
    while position != grid.goal and len(moves) < limit:
        direction = solver.next_direction(grid.survey(position))
        assert not grid.room_at(position).has_wall(direction)
        position = position.step(direction)
        moves.append(direction)
    return moves


class TestShortestPath:
    """Tests for the breadth-first frontier search."""

    def test_unsurveyed_start_is_frontier(self):
        assert shortest_path_to_unexplored({}, Coordinate(0, 0)) == []

    def test_finds_nearest_unsurveyed_room(self):
        memory = {
            Coordinate(0, 0): Survey(north=True, west=True),
            Coordinate(0, 1): Survey(south=True, west=True, east=True),
            Coordinate(1, 0): Survey(north=True, east=True),
        }
        assert shortest_path_to_unexplored(memory, Coordinate(0, 0)) == [E, S]

    def test_ties_break_in_canonical_order(self):
        memory = {Coordinate(0, 0): Survey()}
        assert shortest_path_to_unexplored(memory, Coordinate(0, 0)) == [N]

    def test_exhausted(self):
        memory = {Coordinate(0, 0): Survey(True, True, True, True)}
        with pytest.raises(ExplorationExhaustedError):
            shortest_path_to_unexplored(memory, Coordinate(0, 0))


class TestNearestSolver:
    """Tests for the nearest-unexplored solver."""

    def test_corridor(self):
        assert replay(NearestSolver(), corridor_grid(6)) == [S] * 5

    def test_comb(self):
        assert replay(NearestSolver(), comb_grid()) == COMB_ROUTE

    def test_tracks_relative_position(self):
        solver = NearestSolver()
        replay(solver, corridor_grid(4))
        assert solver.position == Coordinate(0, 3)
        assert set(solver.memory) == {Coordinate(0, y) for y in range(3)}

    def test_reaches_goal_in_random_mazes(self):
        rng = random.Random(99)
        for name in ("braid", "growing-tree", "growing-tree-20", "empty"):
            grid = build_maze(make_generator(name), 6, 6, rng)
            moves = replay(NearestSolver(), grid, limit=36 * 36)
            assert len(moves) < 36 * 36


class TestTremauxSolver:
    """Tests for the Tremaux-style solver."""

    def test_corridor(self):
        assert replay(TremauxSolver(), corridor_grid(6)) == [S] * 5

    def test_comb(self):
        assert replay(TremauxSolver(), comb_grid()) == COMB_ROUTE

    def test_turns_back_at_dead_end(self):
        solver = TremauxSolver()
        solver.next_direction(Survey(north=True, west=True, east=True))
        direction = solver.next_direction(Survey(south=True, west=True, east=True))
        assert direction == N
        assert solver.backtracking
        assert solver.visited[Coordinate(0, 1)] == 2

    def test_walled_in_room(self):
        with pytest.raises(SolverError, match="walled in"):
            TremauxSolver().next_direction(Survey(True, True, True, True))

    def test_comb_within_twice_rooms(self):
        grid = comb_grid()
        assert len(replay(TremauxSolver(), grid)) <= 2 * grid.size

    @pytest.mark.parametrize("width,height", [(6, 6), (15, 10)])
    def test_reaches_goal_in_perfect_mazes(self, width, height):
        """Test random perfect mazes are solved within 6 x rooms.

        Tie-breaking on the lowest mark can re-enter explored branches, so
        twice the room count is not guaranteed on arbitrary trees. Observed
        runs stay near 5 x rooms at worst.
        """
        rng = random.Random(width * height)
        for _ in range(10):
            grid = build_maze(make_generator("growing-tree"), width, height, rng)
            bound = 6 * grid.size
            moves = replay(TremauxSolver(), grid, limit=bound + 1)
            assert len(moves) <= bound


class TestRegistry:
    def test_make_solver_fresh_instances(self):
        first = make_solver("nearest")
        assert isinstance(first, NearestSolver)
        assert make_solver("nearest") is not first
        assert isinstance(make_solver("tremaux"), TremauxSolver)

    def test_unknown_solver(self):
        with pytest.raises(ValueError, match="Unknown solver"):
            make_solver("wallfollower")


class FixedSolver(Solver):
    """Emits a fixed list of directions, then gives up."""

    name = "fixed"

    def __init__(self, moves):
        super().__init__()
        self.moves = list(moves)
        self.finished = False

    def next_direction(self, survey):
        if not self.moves:
            raise SolverError("out of moves")
        return self.moves.pop(0)

    async def solve(self, surveys, commands):
        await super().solve(surveys, commands)
        self.finished = True


class TestSolveChannels:
    """Tests for the channel form of a solver."""

    @pytest.mark.asyncio
    async def test_closing_surveys_closes_commands(self):
        surveys = asyncio.Queue(maxsize=1)
        commands = asyncio.Queue(maxsize=1)
        task = asyncio.create_task(TremauxSolver().solve(surveys, commands))

        await surveys.put(Survey(north=True, west=True, east=True))
        assert await commands.get() == S
        await surveys.put(CLOSED)

        assert await commands.get() is CLOSED
        await task

    @pytest.mark.asyncio
    async def test_solver_error_closes_commands(self):
        surveys = asyncio.Queue(maxsize=1)
        commands = asyncio.Queue(maxsize=1)
        task = asyncio.create_task(FixedSolver([]).solve(surveys, commands))

        await surveys.put(Survey())
        assert await commands.get() is CLOSED
        await task


class TestRunSession:
    """Tests for running a solver against a maze over channels."""

    @pytest.mark.asyncio
    async def test_two_room_victory(self):
        result = await run_session(two_room_grid(), NearestSolver())
        assert result == SessionResult(completed=True, steps=1)
        assert result.score == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("solver_class", [NearestSolver, TremauxSolver])
    async def test_comb(self, solver_class):
        result = await run_session(comb_grid(), solver_class(), max_steps=100)
        assert result.completed
        assert result.steps == 12

    @pytest.mark.asyncio
    async def test_step_limit(self):
        result = await run_session(comb_grid(), TremauxSolver(), max_steps=5)
        assert not result.completed
        assert result.steps == 5
        assert result.score is None
        assert "max-steps" in result.reason

    @pytest.mark.asyncio
    async def test_solver_gives_up(self):
        solver = FixedSolver([])
        result = await run_session(two_room_grid(), solver)
        assert not result.completed
        assert result.steps == 0
        assert solver.finished

    @pytest.mark.asyncio
    async def test_rejected_move_ends_session(self):
        solver = FixedSolver([E])
        result = await run_session(two_room_grid(), solver)
        assert not result.completed
        assert result.steps == 0
        assert "wall" in result.reason
        assert solver.finished

    @pytest.mark.asyncio
    async def test_solver_sees_channel_closed_after_victory(self):
        solver = FixedSolver([S, N])
        result = await run_session(two_room_grid(), solver)
        assert result.completed
        assert solver.finished
        assert solver.moves == [N]
