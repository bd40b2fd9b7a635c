"""
Labyrinth remote client.

Talks to a running labyrinth server and drives a solver through its
request/response interface, one survey and one move at a time.

Usage:
    from labyrinth.client import MazeClient, solve_remote
    from labyrinth.solvers import TremauxSolver

    client = MazeClient("http://127.0.0.1:8000/v1")
    result = solve_remote(client, TremauxSolver(), max_steps=10000)
    print(f"Escaped in {result.steps} steps" if result.completed else result.reason)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from labyrinth.core.directions import Direction, Survey
from labyrinth.core.errors import InvalidDirectionError, SolverError
from labyrinth.services.runner import SessionResult
from labyrinth.solvers.base import Solver

logger = logging.getLogger(__name__)


@dataclass
class MoveReply:
    """Accepted move as reported by the server."""
    survey: Survey
    steps: int
    victory: bool
    abandoned: bool = False
    message: Optional[str] = None


class MazeClientError(Exception):
    """Base exception for maze client errors."""
    pass


class SessionError(MazeClientError):
    """Session-related errors."""
    pass


class MoveRejectedError(MazeClientError):
    """Server refused a move (wall, maze edge or finished session)."""
    pass


class MazeClient:
    """
    Client for a labyrinth server.

    Example:
        client = MazeClient("http://127.0.0.1:8000/v1")
        survey = client.begin_session()
        reply = client.move(Direction.SOUTH)
        client.end_session()
    """

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session_id: Optional[str] = None

    def _request(self, method: str, endpoint: str, **kwargs) -> dict:
        """Make an API request."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            detail = _error_detail(e.response)
            code = e.response.status_code
            if code == 404:
                raise SessionError(detail)
            elif code == 409:
                raise MoveRejectedError(detail)
            elif code == 422:
                raise InvalidDirectionError(detail)
            else:
                raise MazeClientError(f"API error {code}: {detail}")
        except requests.exceptions.RequestException as e:
            raise MazeClientError(f"Request failed: {e}")

    def _ensure_session(self) -> str:
        if not self.session_id:
            raise SessionError("No active session. Call begin_session() first.")
        return self.session_id

    def begin_session(self) -> Survey:
        """
        Wake up in a freshly generated maze.

        Returns:
            Survey of the start room.
        """
        data = self._request("POST", "/session")
        self.session_id = data["session_id"]
        return Survey(**data["survey"])

    def move(self, direction: Union[Direction, str]) -> MoveReply:
        """
        Move one room. COUNTS AS 1 STEP!

        Raises:
            MoveRejectedError: If a wall or the maze edge stops the move.
            InvalidDirectionError: If direction names no direction.
        """
        session_id = self._ensure_session()
        direction = Direction.parse(direction)
        data = self._request("POST", f"/session/{session_id}/move/{direction.value}")
        return MoveReply(
            survey=Survey(**data["survey"]),
            steps=data["steps"],
            victory=data["status"] == "victory",
            abandoned=data["status"] == "abandoned",
            message=data.get("message"),
        )

    def end_session(self) -> dict:
        """End the current session and return its score report."""
        session_id = self._ensure_session()
        data = self._request("POST", f"/session/{session_id}/end")
        self.session_id = None
        return data

    def scores(self) -> dict:
        """Aggregated scores of every finished session on the server."""
        return self._request("GET", "/scores")


def _error_detail(response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def solve_remote(
    client: MazeClient,
    solver: Solver,
    max_steps: Optional[int] = None,
) -> SessionResult:
    """
    Solve one remote maze with solver.

    Stops on victory, a rejected move, the solver giving up, the server's
    step limit, or max_steps.
    The remote session is always ended.
    """
    survey = client.begin_session()
    steps = 0
    try:
        while True:
            try:
                direction = solver.next_direction(survey)
            except SolverError as e:
                return SessionResult(False, steps, str(e))

            try:
                reply = client.move(direction)
            except MoveRejectedError as e:
                logger.warning(f"{solver.name} move {direction.value} rejected: {e}")
                return SessionResult(False, steps, str(e))

            steps = reply.steps
            if reply.victory:
                logger.info(reply.message or f"Victory achieved in {steps} steps")
                return SessionResult(True, steps)
            if reply.abandoned:
                return SessionResult(False, steps, reply.message or "Session abandoned by the server")

            if max_steps is not None and steps >= max_steps:
                return SessionResult(False, steps, f"Reached max-steps ({max_steps}), halting")

            survey = reply.survey
    finally:
        client.end_session()
