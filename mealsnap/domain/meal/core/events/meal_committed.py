"""MealCommitted domain event.

Raised after the edited meal was persisted and the session cleared.
"""

from dataclasses import dataclass
from uuid import UUID

from .base import DomainEvent, new_event_header


@dataclass(frozen=True)
class MealCommitted(DomainEvent):
    """Domain event: the pending meal was stored.

    Attributes:
        session_id: Session that was committed.
        persisted_id: Identifier returned by the meal store.
        ingredient_count: Number of ingredients submitted.
        total_calories: Submitted calorie total (unrounded).
    """

    session_id: UUID
    persisted_id: str
    ingredient_count: int
    total_calories: float

    @classmethod
    def create(
        cls,
        session_id: UUID,
        persisted_id: str,
        ingredient_count: int,
        total_calories: float,
    ) -> "MealCommitted":
        """Create new MealCommitted event.

        Raises:
            ValueError: If ingredient_count <= 0 or persisted_id is empty.
        """
        if ingredient_count <= 0:
            raise ValueError(f"ingredient_count must be positive, got {ingredient_count}")

        if not persisted_id:
            raise ValueError("persisted_id cannot be empty")

        return cls(
            **new_event_header(),
            session_id=session_id,
            persisted_id=persisted_id,
            ingredient_count=ingredient_count,
            total_calories=total_calories,
        )
