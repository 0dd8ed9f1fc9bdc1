"""Stub analysis gateway for testing.

Returns fake meal analyses without calling external APIs.
Useful for integration/E2E tests and local development.
"""

from typing import Dict, List, Optional, Tuple

from mealsnap.domain.meal.analysis.entities.analysis_result import (
    AnalysisResult,
    AnalyzedItem,
)
from mealsnap.domain.meal.core.exceptions import (
    InvalidImageError,
    NetworkError,
    ServiceError,
)
from mealsnap.domain.meal.core.value_objects import Language, NutritionTotals

# Hints that make the stub fail, for exercising error paths end to end.
FAILURE_HINTS = {
    "fail:network": NetworkError,
    "fail:service": ServiceError,
    "fail:image": InvalidImageError,
}

# name, calories, protein, carbs, fat (strings, as the real service reports them)
_Row = Tuple[str, str, str, str, str]

_MEALS: Dict[str, Tuple[str, List[_Row]]] = {
    "salad": (
        "Garden Salad",
        [
            ("lettuce", "15", "1.4", "2.9", "0.2"),
            ("tomatoes", "22", "1.1", "4.8", "0.2"),
            ("olive oil", "119", "0", "0", "13.5"),
        ],
    ),
    "pasta": (
        "Pasta al Pomodoro",
        [
            ("pasta, cooked", "262", "9.6", "51.3", "1.5"),
            ("tomato sauce", "40", "1.6", "8.6", "0.3"),
            ("parmesan", "42", "3.8", "0.3", "2.8"),
        ],
    ),
}

_DEFAULT_MEAL: Tuple[str, List[_Row]] = (
    "Chicken and Rice",
    [
        ("chicken breast, grilled", "248", "46.5", "0", "5.4"),
        ("white rice, cooked", "205", "4.3", "44.5", "0.4"),
    ],
)

_HEBREW_NAMES = {
    "Garden Salad": "סלט ירקות",
    "Pasta al Pomodoro": "פסטה ברוטב עגבניות",
    "Chicken and Rice": "עוף ואורז",
}


class StubAnalysisGateway:
    """
    Stub implementation of IAnalysisGateway for testing.

    Returns hardcoded analyses chosen by keywords in the hint:
    "salad" and "pasta" select a dish, anything else returns chicken and rice.
    A hint of "fail:network", "fail:service" or "fail:image" raises the
    matching analysis error.

    Example:
        >>> gateway = StubAnalysisGateway()
        >>> result = await gateway.analyze(b"...", "pasta", Language.ENGLISH)
        >>> result.meal_name
        'Pasta al Pomodoro'
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Optional[str], Language]] = []

    async def __aenter__(self) -> "StubAnalysisGateway":
        """Enter async context (no-op for stub)."""
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Nothing to release."""
        return None

    async def analyze(
        self,
        image: bytes,
        hint: Optional[str],
        language: Language,
    ) -> AnalysisResult:
        """
        Return a stub analysis.

        Args:
            image: Raw image bytes (ignored)
            hint: Selects the stub dish or a failure
            language: Hebrew returns a translated meal name

        Returns:
            AnalysisResult with string-valued items
        """
        self.calls.append((hint, language))

        key = (hint or "").strip().lower()
        if key in FAILURE_HINTS:
            raise FAILURE_HINTS[key](f"Stub analysis failure: {key}")

        meal_name, rows = next(
            (meal for keyword, meal in _MEALS.items() if keyword in key),
            _DEFAULT_MEAL,
        )

        items = tuple(
            AnalyzedItem(name=name, calories=kcal, protein=protein, carbs=carbs, fat=fat)
            for name, kcal, protein, carbs, fat in rows
        )
        totals = NutritionTotals(
            calories=sum(float(row[1]) for row in rows),
            protein_g=sum(float(row[2]) for row in rows),
            carbs_g=sum(float(row[3]) for row in rows),
            fat_g=sum(float(row[4]) for row in rows),
        )

        if language is Language.HEBREW:
            meal_name = _HEBREW_NAMES[meal_name]

        return AnalysisResult(
            meal_name=meal_name,
            items=items,
            totals=totals,
            description=f"Stub analysis of {len(items)} items",
        )
