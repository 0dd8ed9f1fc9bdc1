"""AnalysisResult entities - nutrition estimate returned by the AI service.

These entities keep item values exactly as the service reported them
(strings or numbers). Coercion happens only when ingredients are seeded.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from mealsnap.domain.meal.core.value_objects import NutritionTotals

ReportedValue = Union[str, int, float, None]


@dataclass(frozen=True)
class AnalyzedItem:
    """
    Entity: single item reported by the analysis service.

    Example:
        AnalyzedItem(name="rice", calories="205", protein="4.3", carbs="45", fat="0.4")
    """

    name: Optional[str]
    calories: ReportedValue = None
    protein: ReportedValue = None
    carbs: ReportedValue = None
    fat: ReportedValue = None
    fiber: ReportedValue = None
    sugar: ReportedValue = None
    sodium_mg: ReportedValue = None


@dataclass(frozen=True)
class AnalysisResult:
    """
    Entity: output of one analysis call.

    Immutable once returned; a re-analysis supersedes it wholesale.
    ``totals`` are the service's own figures and are informational only:
    session totals always come from the edited ingredient list.
    """

    meal_name: Optional[str]
    items: Tuple[AnalyzedItem, ...] = ()
    totals: NutritionTotals = field(default_factory=NutritionTotals)
    description: Optional[str] = None
    processing_time_ms: int = 0
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def item_count(self) -> int:
        """Number of reported items."""
        return len(self.items)

    def display_name(self) -> str:
        """Meal name with the fallback shown when the service omitted it."""
        return self.meal_name or "Analyzed Meal"
