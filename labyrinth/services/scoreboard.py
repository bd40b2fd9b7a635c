"""Per-session score reporting and aggregation."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ScoreReport:
    """Score of one finished session. steps is None when it failed."""

    session_id: str
    steps: Optional[int]
    completed: bool
    finished_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "session_id": self.session_id,
            "steps": self.steps,
            "completed": self.completed,
            "finished_at": self.finished_at.isoformat(),
        }


@dataclass
class ScoreSummary:
    """Aggregate over all recorded sessions."""

    total: int
    solved: int
    failed: int
    average_steps: Optional[float]


class Scoreboard:
    """Thread-safe record of finished sessions."""

    def __init__(self):
        self._lock = threading.Lock()
        self._reports: list[ScoreReport] = []

    def record(self, session_id: str, steps: Optional[int]) -> ScoreReport:
        """
        Record a finished session.

        Args:
            session_id: Session that finished.
            steps: Steps taken to reach the goal, or None if it failed.

        Returns:
            The stored report.
        """
        report = ScoreReport(
            session_id=session_id,
            steps=steps,
            completed=steps is not None,
            finished_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._reports.append(report)

        if report.completed:
            logger.info(f"Labyrinth solved by {session_id} in {steps} steps")
        else:
            logger.info(f"Labyrinth not solved by {session_id}")
        return report

    def reports(self) -> list[ScoreReport]:
        with self._lock:
            return list(self._reports)

    def get(self, session_id: str) -> Optional[ScoreReport]:
        """Most recent report for session_id, if any."""
        with self._lock:
            for report in reversed(self._reports):
                if report.session_id == session_id:
                    return report
        return None

    def summary(self) -> ScoreSummary:
        """Totals and average steps over solved sessions."""
        with self._lock:
            scores = [r.steps for r in self._reports if r.completed]
            total = len(self._reports)

        return ScoreSummary(
            total=total,
            solved=len(scores),
            failed=total - len(scores),
            average_steps=sum(scores) / len(scores) if scores else None,
        )

    def clear(self) -> None:
        with self._lock:
            self._reports.clear()
