"""Labyrinth API - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from labyrinth.api.routes import scores, session
from labyrinth.config import get_settings
from labyrinth.services.scoreboard import Scoreboard
from labyrinth.services.session_store import SessionStore

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("labyrinth")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with a short id and logs its status and latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000
        logger.debug(
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} ({elapsed:.1f}ms)"
        )
        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        f"Starting {settings.app_name} API: {settings.generator} mazes "
        f"{settings.maze_width}x{settings.maze_height}, max {settings.max_steps} steps"
    )

    yield

    summary = app.state.scoreboard.summary()
    average = f"{summary.average_steps:.1f}" if summary.average_steps is not None else "n/a"
    logger.info(
        f"Labyrinth solved {summary.solved} of {summary.total} times "
        f"with an avg of {average} steps"
    )


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Maze authority serving room surveys to remote solvers",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Per-application state; each session inside owns its own maze
app.state.sessions = SessionStore()
app.state.scoreboard = Scoreboard()

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Include routers
app.include_router(session.router, prefix="/v1")
app.include_router(scores.router, prefix="/v1")
