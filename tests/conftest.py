"""Pytest configuration and fixtures."""

import random
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from labyrinth.api.deps import get_maze_factory, get_scoreboard, get_session_store
from labyrinth.config import Settings, get_settings
from labyrinth.main import app
from labyrinth.services.scoreboard import Scoreboard
from labyrinth.services.session_store import SessionStore
from mazes import two_room_grid


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests."""
    return Settings(maze_width=1, maze_height=2, max_steps=5)


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def scoreboard() -> Scoreboard:
    return Scoreboard()


@pytest.fixture
def maze_factory():
    """Factory handing out the two-room maze."""
    return two_room_grid


@pytest_asyncio.fixture(scope="function")
async def client(
    test_settings, session_store, scoreboard, maze_factory
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with isolated state and a fixed maze."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_scoreboard] = lambda: scoreboard
    app.dependency_overrides[get_maze_factory] = lambda: maze_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
