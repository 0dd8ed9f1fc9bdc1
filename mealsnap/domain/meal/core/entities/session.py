"""PendingMeal aggregate root - the single active capture session."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

from mealsnap.domain.meal.analysis.entities.analysis_result import AnalysisResult
from mealsnap.domain.meal.capture.entities.captured_image import CapturedImage
from mealsnap.domain.meal.core.entities.ingredient import Ingredient
from mealsnap.domain.meal.core.value_objects import Language, NutritionTotals
from mealsnap.domain.meal.nutrition.services.aggregator import NutritionAggregator


@dataclass
class PendingMeal:
    """
    Aggregate Root: the meal being captured, analyzed and edited.

    Lives from the first image acquisition until a successful submission
    or an explicit discard. Owned by the WorkflowCoordinator; editors and
    the submission coordinator receive it by reference.

    Invariants:
    - totals always equal the sum over ingredients
    - ingredient ids are unique within the session
    """

    image: CapturedImage
    language: Language = Language.ENGLISH
    id: UUID = field(default_factory=uuid4)

    # Free-text comments: "pre" is sent with the first analysis, "post"
    # with re-analysis and as the submitted description.
    pre_comment: str = ""
    post_comment: str = ""

    latest_analysis: Optional[AnalysisResult] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    _ingredients: List[Ingredient] = field(default_factory=list, init=False, repr=False)
    _totals: NutritionTotals = field(default_factory=NutritionTotals, init=False)
    _user_sequence: int = field(default=0, init=False, repr=False)

    @property
    def ingredients(self) -> Tuple[Ingredient, ...]:
        """Ordered, read-only view of the ingredient list."""
        return tuple(self._ingredients)

    @property
    def totals(self) -> NutritionTotals:
        """Derived totals; there is no setter."""
        return self._totals

    def has_ingredients(self) -> bool:
        """True when there is something to submit."""
        return bool(self._ingredients)

    def find_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        """Look up an ingredient by id."""
        for ingredient in self._ingredients:
            if ingredient.id == ingredient_id:
                return ingredient
        return None

    def replace_ingredients(self, ingredients: Iterable[Ingredient]) -> None:
        """
        Swap the ingredient list and recompute totals.

        This is the only mutation path for ingredients, so totals can
        never drift from the list.

        Args:
            ingredients: New ordered list

        Raises:
            ValueError: If two ingredients share an id
            ValidationError: If the totals overflow; nothing is changed
        """
        new_list = list(ingredients)

        seen: set[str] = set()
        for ingredient in new_list:
            if ingredient.id in seen:
                raise ValueError(f"Duplicate ingredient id in session {self.id}: {ingredient.id}")
            seen.add(ingredient.id)

        totals = NutritionAggregator.recompute(new_list)
        self._ingredients = new_list
        self._totals = totals

    def next_user_ingredient_id(self) -> str:
        """Allocate an id for a user-added ingredient (never reused in this session)."""
        while True:
            self._user_sequence += 1
            candidate = f"user_{self._user_sequence}"
            if self.find_ingredient(candidate) is None:
                return candidate

    def hint_for_analysis(self) -> Optional[str]:
        """Pre-analysis comment, or None when blank."""
        return self.pre_comment.strip() or None

    def hint_for_reanalysis(self) -> Optional[str]:
        """Post-analysis comment, or None when blank."""
        return self.post_comment.strip() or None
