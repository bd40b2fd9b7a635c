"""Ownership of live sessions behind the transport."""

import logging
import random
import threading
from typing import Callable, Optional

from labyrinth.config import Settings
from labyrinth.core.generators import build_maze, make_generator
from labyrinth.core.grid import Grid
from labyrinth.core.maze_engine import MazeSession

logger = logging.getLogger(__name__)

# Builds a fresh, validated grid for each new session
MazeFactory = Callable[[], Grid]


def settings_maze_factory(settings: Settings, rng: Optional[random.Random] = None) -> MazeFactory:
    """Maze factory reading dimensions and generator from settings."""
    generator = make_generator(
        settings.generator,
        braid_density=settings.braid_density,
        carve_probability=settings.carve_probability,
    )

    def factory() -> Grid:
        return build_maze(
            generator,
            settings.maze_width,
            settings.maze_height,
            rng=rng,
            max_attempts=settings.placement_max_attempts,
        )

    return factory


class SessionStore:
    """Sessions keyed by id. Each session owns its own grid."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: dict[str, MazeSession] = {}

    def create(self, grid: Grid, max_steps: Optional[int] = None) -> MazeSession:
        session = MazeSession(grid, max_steps=max_steps)
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(f"Session {session.session_id} created on {grid.width}x{grid.height} maze")
        return session

    def get(self, session_id: str) -> Optional[MazeSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Optional[MazeSession]:
        with self._lock:
            return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
