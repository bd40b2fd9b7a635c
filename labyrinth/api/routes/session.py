"""Session routes: awaken in a new maze, move, and end."""

import logging

from fastapi import APIRouter, HTTPException, status

from labyrinth.api.deps import AppSettings, MazeBuilder, Scores, Sessions
from labyrinth.core.errors import (
    GridInvariantError,
    InvalidDirectionError,
    OutOfBoundsError,
    PlacementError,
    SessionStateError,
    StepLimitExceededError,
    WallBlockedError,
)
from labyrinth.core.maze_engine import MazeSession
from labyrinth.schemas.session import (
    AwakeResponse,
    MoveResponse,
    ScoreReportResponse,
    SessionStateResponse,
    SurveyResponse,
)
from labyrinth.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Sessions"])


def _get_session(sessions: SessionStore, session_id: str) -> MazeSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return session


@router.post(
    "",
    response_model=AwakeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def awake(
    sessions: Sessions,
    build: MazeBuilder,
    settings: AppSettings,
) -> AwakeResponse:
    """Create a new maze and wake the agent at its start.

    Every call builds a fresh maze owned by the new session.
    """
    try:
        grid = build()
    except (GridInvariantError, PlacementError) as e:
        logger.error(f"Maze generation failed: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Maze generation failed",
        )

    session = sessions.create(grid, max_steps=settings.max_steps)
    survey = session.awaken()

    return AwakeResponse(
        session_id=session.session_id,
        survey=SurveyResponse(**survey.to_dict()),
        width=grid.width,
        height=grid.height,
        max_steps=session.max_steps,
    )


@router.get(
    "/{session_id}",
    response_model=SessionStateResponse,
)
async def get_session(session_id: str, sessions: Sessions) -> SessionStateResponse:
    """Get session state by ID."""
    session = _get_session(sessions, session_id)
    return SessionStateResponse(**session.to_dict())


@router.post(
    "/{session_id}/move/{direction}",
    response_model=MoveResponse,
)
async def move(
    session_id: str,
    direction: str,
    sessions: Sessions,
    scores: Scores,
) -> MoveResponse:
    """Move in a direction. COSTS 1 STEP.

    Rejected moves (walls, maze edge) do not cost a step.
    """
    session = _get_session(sessions, session_id)

    try:
        result = session.attempt_move(direction)
    except InvalidDirectionError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )
    except (WallBlockedError, OutOfBoundsError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if result.victory:
        scores.record(session_id, result.steps)
        return MoveResponse(
            status=result.status,
            survey=SurveyResponse(**result.survey.to_dict()),
            steps=result.steps,
            message=f"Victory achieved in {result.steps} steps",
        )

    # The move that spends the last step is still accepted and counted
    try:
        session.check_step_limit()
    except StepLimitExceededError as e:
        scores.record(session_id, None)
        return MoveResponse(
            status="abandoned",
            survey=SurveyResponse(**result.survey.to_dict()),
            steps=result.steps,
            message=str(e),
        )

    return MoveResponse(
        status=result.status,
        survey=SurveyResponse(**result.survey.to_dict()),
        steps=result.steps,
    )


@router.post(
    "/{session_id}/end",
    response_model=ScoreReportResponse,
)
async def end(session_id: str, sessions: Sessions, scores: Scores) -> ScoreReportResponse:
    """End a session and report its score.

    A session ended before victory is recorded as failed.
    """
    session = _get_session(sessions, session_id)

    report = scores.get(session_id)
    if report is None:
        session.abandon()
        report = scores.record(session_id, None)

    sessions.remove(session_id)
    return ScoreReportResponse(**report.to_dict())
