"""Result type returned by workflow operations."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from mealsnap.domain.meal.analysis.entities.analysis_result import AnalysisResult
from mealsnap.domain.meal.core.exceptions import MealCaptureError
from mealsnap.domain.meal.core.value_objects import SessionStatus


@dataclass(frozen=True)
class WorkflowOutcome:
    """
    Outcome of one asynchronous workflow operation.

    Async failures never escape as exceptions: they come back here (and as
    a WorkflowStatusChanged event) so callers render them instead of
    wrapping every call in try/except.
    """

    status: SessionStatus
    session_id: Optional[UUID] = None
    error: Optional[MealCaptureError] = None
    analysis: Optional[AnalysisResult] = None
    persisted_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True when the operation completed without a surfaced error."""
        return self.error is None
