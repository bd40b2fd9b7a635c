"""Score routes for aggregated session results."""

from fastapi import APIRouter

from labyrinth.api.deps import Scores
from labyrinth.schemas.session import ScoreSummaryResponse

router = APIRouter(prefix="/scores", tags=["Scores"])


@router.get(
    "",
    response_model=ScoreSummaryResponse,
)
async def get_scores(scores: Scores) -> ScoreSummaryResponse:
    """Aggregate of every finished session."""
    summary = scores.summary()
    return ScoreSummaryResponse(
        total=summary.total,
        solved=summary.solved,
        failed=summary.failed,
        average_steps=summary.average_steps,
    )
