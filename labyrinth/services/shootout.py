"""Benchmark every maze generator against every solver."""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from labyrinth.core.generators import GridGenerator, build_maze
from labyrinth.services.runner import run_session
from labyrinth.solvers.base import Solver

logger = logging.getLogger(__name__)


@dataclass
class FightResult:
    """Results of one generator/solver pairing."""

    generator: str
    solver: str
    solved: int
    failed: int
    average_steps: Optional[float]

    @property
    def sessions(self) -> int:
        return self.solved + self.failed


async def fight(
    generator_name: str,
    generator: GridGenerator,
    solver_name: str,
    solver_factory: Callable[[], Solver],
    times: int,
    width: int,
    height: int,
    max_steps: int,
    rng: Optional[random.Random] = None,
) -> FightResult:
    """
    Solve times fresh mazes from generator with fresh solvers.

    Every session gets its own grid and solver; only the local totals of
    this pairing are updated.
    """
    scores = []
    failed = 0
    for _ in range(times):
        grid = build_maze(generator, width, height, rng=rng)
        result = await run_session(grid, solver_factory(), max_steps=max_steps)
        if result.completed:
            scores.append(result.steps)
        else:
            failed += 1
            logger.debug(f"{solver_name} failed on {generator_name}: {result.reason}")

    return FightResult(
        generator=generator_name,
        solver=solver_name,
        solved=len(scores),
        failed=failed,
        average_steps=sum(scores) / len(scores) if scores else None,
    )


async def run_shootout(
    generators: dict[str, GridGenerator],
    solvers: dict[str, Callable[[], Solver]],
    times: int,
    width: int,
    height: int,
    max_steps: int,
    seed: Optional[int] = None,
) -> list[FightResult]:
    """
    Run every generator x solver pairing concurrently.

    Args:
        generators: Generators keyed by display name.
        solvers: Solver factories keyed by display name.
        times: Sessions per pairing.
        width: Maze width.
        height: Maze height.
        max_steps: Step budget per session.
        seed: Base seed; each pairing derives its own random source.

    Returns:
        FightResult per pairing, generators outer and solvers inner.
    """
    tasks = []
    for i, (gen_name, generator) in enumerate(generators.items()):
        for j, (solver_name, factory) in enumerate(solvers.items()):
            rng = random.Random(seed * 1000 + i * 100 + j) if seed is not None else random.Random()
            tasks.append(
                fight(gen_name, generator, solver_name, factory, times, width, height, max_steps, rng)
            )

    logger.info(
        f"Shootout: {len(generators)} generators x {len(solvers)} solvers, "
        f"{times} sessions each on {width}x{height}"
    )
    return list(await asyncio.gather(*tasks))


def format_table(results: list[FightResult]) -> str:
    """Render average steps as a generator x solver table."""
    generators = list(dict.fromkeys(r.generator for r in results))
    solvers = list(dict.fromkeys(r.solver for r in results))
    by_pair = {(r.generator, r.solver): r for r in results}

    width = max([len(g) for g in generators] + [len("generator")])
    lines = ["generator".ljust(width) + "".join(f"  {s:>16}" for s in solvers)]
    for gen in generators:
        cells = []
        for solver in solvers:
            result = by_pair[(gen, solver)]
            if result.average_steps is None:
                cell = f"- ({result.failed} failed)"
            elif result.failed:
                cell = f"{result.average_steps:.1f} ({result.failed} failed)"
            else:
                cell = f"{result.average_steps:.1f}"
            cells.append(f"  {cell:>16}")
        lines.append(gen.ljust(width) + "".join(cells))
    return "\n".join(lines)
