"""MealSubmission entity - the payload persisted when a session is committed."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from mealsnap.domain.meal.core.entities.ingredient import Ingredient
from mealsnap.domain.meal.core.entities.session import PendingMeal
from mealsnap.domain.meal.core.value_objects import Language, NutritionTotals

DEFAULT_MEAL_NAME = "Edited Meal"


@dataclass(frozen=True)
class MealSubmission:
    """
    Entity: the aggregate the user approved.

    Built from the session's *edited* ingredients and totals, never from
    the raw analysis payload.
    """

    session_id: UUID
    meal_name: str
    ingredients: Tuple[Ingredient, ...]
    totals: NutritionTotals
    language: Language
    description: Optional[str] = None
    image_base64: Optional[str] = field(default=None, repr=False)
    image_mime_type: Optional[str] = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.ingredients:
            raise ValueError("Submission must have at least one ingredient")

    @classmethod
    def from_session(cls, session: PendingMeal) -> "MealSubmission":
        """
        Snapshot a session for persistence.

        The description is the post-analysis comment when present,
        otherwise the analysis description.
        """
        analysis = session.latest_analysis
        meal_name = (analysis.meal_name if analysis else None) or DEFAULT_MEAL_NAME
        description = session.post_comment.strip() or (analysis.description if analysis else None)

        return cls(
            session_id=session.id,
            meal_name=meal_name,
            ingredients=session.ingredients,
            totals=session.totals,
            language=session.language,
            description=description,
            image_base64=session.image.to_base64(),
            image_mime_type=session.image.mime_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body sent to the meal store."""
        return {
            "session_id": str(self.session_id),
            "meal_name": self.meal_name,
            "description": self.description,
            "language": self.language.value,
            "totals": self.totals.to_dict(),
            "items": [ingredient.to_dict() for ingredient in self.ingredients],
            "image_base64": self.image_base64,
            "image_mime_type": self.image_mime_type,
            "submitted_at": self.submitted_at.isoformat(),
        }
