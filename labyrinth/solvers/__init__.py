# Solvers module
from typing import Callable

from .base import CLOSED, Solver
from .nearest import NearestSolver, shortest_path_to_unexplored
from .tremaux import TremauxSolver

SOLVERS: dict[str, Callable[[], Solver]] = {
    NearestSolver.name: NearestSolver,
    TremauxSolver.name: TremauxSolver,
}


def make_solver(name: str) -> Solver:
    """
    Create a fresh solver by name.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        return SOLVERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown solver '{name}'. Must be one of: {', '.join(sorted(SOLVERS))}"
        ) from None


__all__ = [
    "CLOSED",
    "Solver",
    "NearestSolver",
    "TremauxSolver",
    "shortest_path_to_unexplored",
    "SOLVERS",
    "make_solver",
]
