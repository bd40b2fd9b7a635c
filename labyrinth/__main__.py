"""
Command line entry point.

    python -m labyrinth serve              run the maze server
    python -m labyrinth solve              solve remote mazes with a solver
    python -m labyrinth shootout           bench every solver on every generator
    python -m labyrinth print              generate and print one maze
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional

from labyrinth.config import Settings, get_settings
from labyrinth.core.generators import GENERATOR_NAMES, build_maze, make_generator
from labyrinth.solvers import SOLVERS, make_solver

logger = logging.getLogger("labyrinth")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="labyrinth", description="Maze generator, server and solvers")
    parser.add_argument("--width", type=int, help="maze width in rooms")
    parser.add_argument("--height", type=int, help="maze height in rooms")
    parser.add_argument("--max-steps", type=int, help="step limit per session")
    parser.add_argument("--times", type=int, help="sessions to run")
    parser.add_argument("--generator", choices=GENERATOR_NAMES, help="maze generator")
    parser.add_argument("--solver", choices=sorted(SOLVERS), help="solver for 'solve'")
    parser.add_argument("--port", type=int, help="server port")
    parser.add_argument("--seed", type=int, help="random seed for reproducible mazes")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", aliases=["server"], help="run the maze server")
    sub.add_parser("solve", aliases=["client"], help="solve mazes served by a running server")
    sub.add_parser("shootout", aliases=["bench"], help="bench each solver against each maze type")
    sub.add_parser("print", aliases=["generate"], help="generate and print a maze")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Settings with command line values overriding the environment."""
    overrides = {
        "maze_width": args.width,
        "maze_height": args.height,
        "max_steps": args.max_steps,
        "times": args.times,
        "generator": args.generator,
        "solver": args.solver,
        "port": args.port,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.port is not None:
        overrides["api_url"] = f"http://{get_settings().host}:{args.port}/v1"
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def cmd_serve(settings: Settings) -> int:
    import uvicorn

    from labyrinth.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    uvicorn.run(app, host=settings.host, port=settings.port)
    return 0


def cmd_solve(settings: Settings) -> int:
    from labyrinth.client import MazeClient, MazeClientError, solve_remote

    client = MazeClient(settings.api_url)
    logger.info(f"Solving {settings.times} times with {settings.solver}")
    solved = []
    for _ in range(settings.times):
        try:
            result = solve_remote(client, make_solver(settings.solver), max_steps=settings.max_steps)
        except MazeClientError as e:
            logger.error(f"Server unavailable: {e}")
            return 1
        if result.completed:
            solved.append(result.steps)
        else:
            logger.warning(f"Not solved: {result.reason}")

    average = f"{sum(solved) / len(solved):.1f}" if solved else "n/a"
    print(f"Labyrinth solved {len(solved)} of {settings.times} times with an avg of {average} steps")
    return 0


def cmd_shootout(settings: Settings, seed: Optional[int]) -> int:
    from labyrinth.services.shootout import format_table, run_shootout

    generators = {
        name: make_generator(
            name,
            braid_density=settings.braid_density,
            carve_probability=settings.carve_probability,
        )
        for name in GENERATOR_NAMES
    }
    results = asyncio.run(
        run_shootout(
            generators,
            SOLVERS,
            times=settings.times,
            width=settings.maze_width,
            height=settings.maze_height,
            max_steps=settings.max_steps,
            seed=seed,
        )
    )
    print(format_table(results))
    return 0


def cmd_print(settings: Settings, seed: Optional[int]) -> int:
    generator = make_generator(
        settings.generator,
        braid_density=settings.braid_density,
        carve_probability=settings.carve_probability,
    )
    rng = random.Random(seed) if seed is not None else None
    grid = build_maze(
        generator,
        settings.maze_width,
        settings.maze_height,
        rng=rng,
        max_attempts=settings.placement_max_attempts,
    )
    print(grid.render())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command in ("serve", "server"):
        return cmd_serve(settings)
    if args.command in ("solve", "client"):
        return cmd_solve(settings)
    if args.command in ("shootout", "bench"):
        return cmd_shootout(settings, args.seed)
    return cmd_print(settings, args.seed)


if __name__ == "__main__":
    sys.exit(main())
