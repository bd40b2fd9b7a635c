"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from labyrinth.config import Settings, get_settings
from labyrinth.services.scoreboard import Scoreboard
from labyrinth.services.session_store import MazeFactory, SessionStore, settings_maze_factory


def get_session_store(request: Request) -> SessionStore:
    """Session store owned by the running application."""
    return request.app.state.sessions


def get_scoreboard(request: Request) -> Scoreboard:
    """Scoreboard owned by the running application."""
    return request.app.state.scoreboard


def get_maze_factory(settings: Annotated[Settings, Depends(get_settings)]) -> MazeFactory:
    """Factory building a fresh maze per session from settings."""
    return settings_maze_factory(settings)


# Type aliases for cleaner route signatures
Sessions = Annotated[SessionStore, Depends(get_session_store)]
Scores = Annotated[Scoreboard, Depends(get_scoreboard)]
MazeBuilder = Annotated[MazeFactory, Depends(get_maze_factory)]
AppSettings = Annotated[Settings, Depends(get_settings)]
