"""WorkflowStatusChanged domain event.

Raised on every status transition of the capture workflow. The
presentation layer renders from these events (status + surfaced error)
instead of tracking its own busy/visible flags.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from mealsnap.domain.meal.core.exceptions import MealCaptureError
from mealsnap.domain.meal.core.value_objects import SessionStatus

from .base import DomainEvent, new_event_header


@dataclass(frozen=True)
class WorkflowStatusChanged(DomainEvent):
    """Domain event: the workflow moved from one status to another.

    Attributes:
        session_id: Active session, None once cleared (committed/reset).
        previous: Status before the transition.
        current: Status after the transition.
        error: Failure surfaced by this transition, if any.
    """

    session_id: Optional[UUID]
    previous: SessionStatus
    current: SessionStatus
    error: Optional[MealCaptureError] = None

    @classmethod
    def create(
        cls,
        session_id: Optional[UUID],
        previous: SessionStatus,
        current: SessionStatus,
        error: Optional[MealCaptureError] = None,
    ) -> "WorkflowStatusChanged":
        """Create new event with generated event_id and current timestamp."""
        return cls(
            **new_event_header(),
            session_id=session_id,
            previous=previous,
            current=current,
            error=error,
        )

    @property
    def failed(self) -> bool:
        """True when the transition surfaced an error."""
        return self.error is not None
