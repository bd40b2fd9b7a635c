"""Session schemas for request/response validation."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class SurveyResponse(BaseModel):
    """Schema for the walls of one room."""

    north: bool
    south: bool
    west: bool
    east: bool


class AwakeResponse(BaseModel):
    """Schema for a newly awakened session."""

    session_id: str
    survey: SurveyResponse
    width: int
    height: int
    max_steps: Optional[int] = None


class MoveResponse(BaseModel):
    """Schema for an accepted move. abandoned means it spent the last step."""

    status: Literal["moved", "victory", "abandoned"]
    survey: SurveyResponse
    steps: int
    message: Optional[str] = None


class ScoreReportResponse(BaseModel):
    """Schema for the score of one finished session."""

    session_id: str
    steps: Optional[int] = None
    completed: bool
    finished_at: datetime


class ScoreSummaryResponse(BaseModel):
    """Schema for aggregated scores."""

    total: int
    solved: int
    failed: int
    average_steps: Optional[float] = None


class SessionStateResponse(BaseModel):
    """Schema for session state (used in get session)."""

    session_id: str
    state: Literal["initial", "active", "victory", "abandoned"]
    steps: int
    width: int
    height: int
