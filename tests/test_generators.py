"""Tests for maze generation, connectivity checks and placement."""

import random

import pytest

from labyrinth.core.connectivity import (
    check_invariants,
    has_one_way_walls,
    is_connected,
    one_way_walls,
    perimeter_openings,
    reachable_from,
)
from labyrinth.core.directions import Coordinate, Direction
from labyrinth.core.errors import (
    AsymmetricWallError,
    PerimeterOpeningError,
    PlacementError,
)
from labyrinth.core.generators import (
    GENERATOR_NAMES,
    braid_fill,
    braid_maze,
    build_maze,
    empty_maze,
    grow_tree,
    growing_tree_maze,
    make_generator,
)
from labyrinth.core.grid import Grid
from labyrinth.core.placement import place_randomly
from mazes import comb_grid, corridor_grid


class TestConnectivity:
    """Tests for reachability over open sides."""

    def test_same_room_is_connected(self):
        grid = Grid.full(2, 2)
        assert is_connected(grid, Coordinate(1, 1), Coordinate(1, 1))

    def test_corridor_ends_connected(self):
        grid = corridor_grid(6)
        assert is_connected(grid, Coordinate(0, 0), Coordinate(0, 5))
        assert is_connected(grid, Coordinate(0, 5), Coordinate(0, 0))

    def test_walled_rooms_not_connected(self):
        grid = Grid.full(3, 3)
        assert not is_connected(grid, Coordinate(0, 0), Coordinate(0, 1))

    def test_terminates_on_cycles(self):
        """Test an open grid full of cycles with an unreachable target."""
        grid = empty_maze(5, 5)
        for y in range(5):
            grid.add_wall(Coordinate(2, y), Direction.EAST)

        assert is_connected(grid, Coordinate(0, 0), Coordinate(2, 4))
        assert not is_connected(grid, Coordinate(0, 0), Coordinate(3, 0))

    def test_reachable_from(self):
        grid = comb_grid()
        assert reachable_from(grid, Coordinate(0, 2)) == set(grid.coordinates())
        assert reachable_from(Grid.full(2, 2), Coordinate(0, 0)) == {Coordinate(0, 0)}

    def test_open_perimeter_does_not_leave_grid(self):
        grid = Grid.empty(2, 1)
        assert reachable_from(grid, Coordinate(0, 0)) == {Coordinate(0, 0), Coordinate(1, 0)}


class TestInvariants:
    """Tests for wall symmetry and perimeter checks."""

    def test_symmetric_grid_passes(self):
        grid = comb_grid()
        assert not has_one_way_walls(grid)
        check_invariants(grid)

    def test_room_level_wall_is_one_way(self):
        grid = empty_maze(3, 3)
        grid.room(1, 1).add_wall(Direction.EAST)
        assert has_one_way_walls(grid)
        assert one_way_walls(grid) == [(Coordinate(1, 1), Direction.EAST)]

    def test_detects_mismatch_in_last_row_and_column(self):
        """Test the scan covers every adjacent pair, edges included."""
        grid = empty_maze(3, 3)
        grid.room(2, 2).add_wall(Direction.NORTH)
        grid.room(2, 1).add_wall(Direction.SOUTH)
        assert not has_one_way_walls(grid)

        grid.room(2, 2).add_wall(Direction.WEST)
        assert one_way_walls(grid) == [(Coordinate(1, 2), Direction.EAST)]

    def test_check_invariants_asymmetric(self):
        grid = empty_maze(2, 2)
        grid.room(0, 0).add_wall(Direction.SOUTH)
        with pytest.raises(AsymmetricWallError, match="One-way wall"):
            check_invariants(grid)

    def test_check_invariants_perimeter(self):
        grid = Grid.empty(2, 2)
        assert len(perimeter_openings(grid)) == 8
        with pytest.raises(PerimeterOpeningError):
            check_invariants(grid)


class TestPlacement:
    """Tests for random start/goal placement."""

    def test_places_distinct_connected_pair(self, rng):
        for _ in range(20):
            grid = braid_maze(6, 4, rng)
            start, goal = place_randomly(grid, rng)
            assert start != goal
            assert is_connected(grid, start, goal)
            assert grid.start == start and grid.goal == goal
            assert grid.room_at(start).is_start
            assert grid.room_at(goal).is_goal

    def test_only_connected_pair_is_chosen(self, rng):
        grid = Grid.full(2, 2)
        grid.remove_wall(Coordinate(0, 0), Direction.EAST)
        start, goal = place_randomly(grid, rng)
        assert {start, goal} == {Coordinate(0, 0), Coordinate(1, 0)}

    def test_replacement_clears_old_tags(self, rng):
        grid = empty_maze(4, 4)
        place_randomly(grid, rng)
        place_randomly(grid, rng)
        starts = [c for c in grid.coordinates() if grid.room_at(c).is_start]
        goals = [c for c in grid.coordinates() if grid.room_at(c).is_goal]
        assert starts == [grid.start]
        assert goals == [grid.goal]

    def test_single_room_grid(self, rng):
        with pytest.raises(PlacementError, match="at least two rooms"):
            place_randomly(empty_maze(1, 1), rng)

    def test_gives_up_after_max_attempts(self, rng):
        grid = Grid.full(2, 2)
        with pytest.raises(PlacementError, match="50 attempts"):
            place_randomly(grid, rng, max_attempts=50)
        assert grid.start is None and grid.goal is None


class TestBraid:
    """Tests for the braid generator."""

    @pytest.mark.parametrize("width,height", [(2, 2), (5, 5), (15, 10), (3, 12)])
    def test_no_dead_ends(self, width, height):
        """Test every room keeps at least two open sides."""
        rng = random.Random(width * 31 + height)
        for _ in range(5):
            grid = braid_maze(width, height, rng)
            assert all(grid.room_at(c).wall_count() <= 2 for c in grid.coordinates())

    def test_walls_symmetric_and_perimeter_closed(self, rng):
        for _ in range(10):
            grid = braid_maze(8, 6, rng)
            assert not has_one_way_walls(grid)
            assert perimeter_openings(grid) == []

    def test_adds_interior_walls(self, rng):
        grid = empty_maze(10, 10)
        added = braid_fill(grid, rng)
        assert added > 0
        assert sum(grid.room_at(c).wall_count() for c in grid.coordinates()) == 40 + 2 * added

    def test_zero_density_leaves_grid_open(self, rng):
        grid = empty_maze(4, 4)
        assert braid_fill(grid, rng, density=0) == 0
        assert grid.room(1, 1).wall_count() == 0

    def test_single_room(self, rng):
        grid = braid_maze(1, 1, rng)
        assert grid.room(0, 0).wall_count() == 4


class TestGrowingTree:
    """Tests for the growing-tree generator."""

    @pytest.mark.parametrize("probability", [0.0, 0.2, 0.5, 1.0])
    def test_every_room_reachable(self, probability):
        rng = random.Random(int(probability * 100))
        for width, height in [(1, 1), (1, 7), (6, 1), (8, 5)]:
            grid = growing_tree_maze(width, height, rng, carve_probability=probability)
            assert reachable_from(grid, Coordinate(0, 0)) == set(grid.coordinates())

    def test_carves_a_perfect_maze(self, rng):
        """Test exactly rooms - 1 passages are opened, so the maze is a tree."""
        grid = growing_tree_maze(7, 6, rng)
        open_sides = sum(4 - grid.room_at(c).wall_count() for c in grid.coordinates())
        assert open_sides == 2 * (grid.size - 1)

    def test_walls_symmetric_and_perimeter_closed(self, rng):
        grid = growing_tree_maze(9, 4, rng, carve_probability=0.3)
        check_invariants(grid)

    def test_returns_seed_inside_grid(self, rng):
        grid = Grid.full(4, 4)
        seed = grow_tree(grid, rng)
        assert grid.contains(seed)


class TestRegistry:
    """Tests for generator lookup and maze building."""

    @pytest.mark.parametrize("name", GENERATOR_NAMES)
    def test_every_name_builds_valid_maze(self, name, rng):
        grid = build_maze(make_generator(name), 6, 5, rng)
        assert grid.start is not None and grid.goal is not None
        assert grid.start != grid.goal
        assert is_connected(grid, grid.start, grid.goal)
        check_invariants(grid)

    def test_unknown_generator(self):
        with pytest.raises(ValueError, match="Unknown generator 'spiral'"):
            make_generator("spiral")

    def test_braid_density_is_bound(self, rng):
        grid = make_generator("braid", braid_density=0)(5, 5, rng)
        assert grid.room(2, 2).wall_count() == 0

    def test_build_rejects_open_perimeter(self, rng):
        with pytest.raises(PerimeterOpeningError):
            build_maze(lambda w, h, rng=None: Grid.empty(w, h), 3, 3, rng)

    @pytest.mark.parametrize("name", GENERATOR_NAMES)
    def test_generators_close_their_perimeter(self, name, rng):
        assert perimeter_openings(make_generator(name)(5, 4, rng)) == []

    def test_build_rejects_one_way_walls(self, rng):
        def broken(width, height, rng=None):
            grid = Grid.empty(width, height)
            grid.room(1, 1).add_wall(Direction.EAST)
            return grid

        with pytest.raises(AsymmetricWallError):
            build_maze(broken, 3, 3, rng)

    def test_build_single_room_fails(self, rng):
        with pytest.raises(PlacementError):
            build_maze(empty_maze, 1, 1, rng)
