"""Domain service for editing the ingredient list of a pending meal.

All edits go through PendingMeal.replace_ingredients(), so every add,
remove, update and re-seed recomputes the session totals.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from mealsnap.domain.meal.analysis.entities.analysis_result import AnalysisResult, AnalyzedItem
from mealsnap.domain.meal.core.entities.ingredient import (
    MACRO_FIELDS,
    OPTIONAL_FIELDS,
    Ingredient,
    Provenance,
)
from mealsnap.domain.meal.core.entities.session import PendingMeal
from mealsnap.domain.meal.core.exceptions import IngredientNotFoundError, ValidationError
from mealsnap.domain.meal.nutrition.services.coercion import (
    coerce_nutrient,
    coerce_optional_nutrient,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name",) + MACRO_FIELDS + OPTIONAL_FIELDS


@dataclass(frozen=True)
class IngredientCandidate:
    """
    Raw user input for a new ingredient.

    Numeric fields accept whatever the form produced ("50", "", "12g");
    they are coerced on add.
    """

    name: str
    calories: Any = ""
    protein_g: Any = ""
    carbs_g: Any = ""
    fat_g: Any = ""
    fiber_g: Any = None
    sugar_g: Any = None
    sodium_mg: Any = None


class IngredientEditor:
    """
    Edit the ingredient list of one session.

    Example:
        >>> editor = IngredientEditor(session)
        >>> added = editor.add(IngredientCandidate(name="olive oil", calories="40"))
        >>> editor.remove(added.id)
        True
    """

    def __init__(self, session: PendingMeal):
        """
        Initialize editor for a session.

        Args:
            session: Pending meal owned by the workflow coordinator
        """
        self._session = session

    def add(self, candidate: IngredientCandidate) -> Ingredient:
        """
        Append a user-added ingredient.

        Args:
            candidate: Raw form input

        Returns:
            The stored Ingredient (fresh id, provenance=user)

        Raises:
            ValidationError: If the name is empty after trimming
        """
        name = (candidate.name or "").strip()
        if not name:
            raise ValidationError("Please enter ingredient name")

        ingredient = Ingredient(
            id=self._session.next_user_ingredient_id(),
            name=name,
            calories=coerce_nutrient(candidate.calories),
            protein_g=coerce_nutrient(candidate.protein_g),
            carbs_g=coerce_nutrient(candidate.carbs_g),
            fat_g=coerce_nutrient(candidate.fat_g),
            fiber_g=coerce_optional_nutrient(candidate.fiber_g),
            sugar_g=coerce_optional_nutrient(candidate.sugar_g),
            sodium_mg=coerce_optional_nutrient(candidate.sodium_mg),
            provenance=Provenance.USER,
        )

        self._session.replace_ingredients([*self._session.ingredients, ingredient])

        logger.debug(
            "Ingredient added",
            extra={
                "session_id": str(self._session.id),
                "ingredient_id": ingredient.id,
                "calories": ingredient.calories,
            },
        )
        return ingredient

    def remove(self, ingredient_id: str) -> bool:
        """
        Remove an ingredient by id.

        Removing an unknown id is a no-op.

        Returns:
            True if an ingredient was removed, False otherwise
        """
        current = self._session.ingredients
        remaining = [i for i in current if i.id != ingredient_id]

        if len(remaining) == len(current):
            return False

        self._session.replace_ingredients(remaining)

        logger.debug(
            "Ingredient removed",
            extra={"session_id": str(self._session.id), "ingredient_id": ingredient_id},
        )
        return True

    def update(self, ingredient_id: str, patch: Mapping[str, Any]) -> Ingredient:
        """
        Replace selected fields of one ingredient, keeping id, position and provenance.

        Args:
            ingredient_id: Ingredient to edit
            patch: Field name → raw value (e.g. {"calories": "120"})

        Returns:
            The updated Ingredient

        Raises:
            IngredientNotFoundError: If the id is not in the session
            ValidationError: If a field is unknown or the name becomes empty
        """
        unknown = set(patch) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Invalid field(s): {', '.join(sorted(unknown))}")

        existing = self._session.find_ingredient(ingredient_id)
        if existing is None:
            raise IngredientNotFoundError(
                f"Ingredient {ingredient_id} not found in session {self._session.id}"
            )

        changes: dict[str, Any] = {}
        for key, raw in patch.items():
            if key == "name":
                name = str(raw or "").strip()
                if not name:
                    raise ValidationError("Please enter ingredient name")
                changes["name"] = name
            elif key in MACRO_FIELDS:
                changes[key] = coerce_nutrient(raw)
            else:
                changes[key] = coerce_optional_nutrient(raw)

        updated = dataclasses.replace(existing, **changes)
        self._session.replace_ingredients(
            updated if i.id == ingredient_id else i for i in self._session.ingredients
        )
        return updated

    def replace_from_analysis(self, result: AnalysisResult) -> Tuple[Ingredient, ...]:
        """
        Replace the whole list with the items of an analysis.

        User-added ingredients are NOT carried over: a re-analysis fully
        supersedes the previous estimate, including manual additions.

        Args:
            result: Latest analysis

        Returns:
            The seeded ingredients

        Raises:
            ValidationError: If the reported values overflow the totals;
                the session keeps its previous list and analysis
        """
        dropped_user_items = sum(1 for i in self._session.ingredients if i.is_user_added)

        seeded = [
            self._from_analyzed_item(index, item) for index, item in enumerate(result.items)
        ]
        self._session.replace_ingredients(seeded)
        self._session.latest_analysis = result

        logger.info(
            "Ingredients seeded from analysis",
            extra={
                "session_id": str(self._session.id),
                "ingredient_count": len(seeded),
                "dropped_user_items": dropped_user_items,
            },
        )
        return self._session.ingredients

    @staticmethod
    def _from_analyzed_item(index: int, item: AnalyzedItem) -> Ingredient:
        name = (item.name or "").strip() or f"Item {index + 1}"
        return Ingredient(
            id=f"ai_{index}",
            name=name,
            calories=coerce_nutrient(item.calories),
            protein_g=coerce_nutrient(item.protein),
            carbs_g=coerce_nutrient(item.carbs),
            fat_g=coerce_nutrient(item.fat),
            fiber_g=coerce_nutrient(item.fiber),
            sugar_g=coerce_nutrient(item.sugar),
            sodium_mg=coerce_nutrient(item.sodium_mg),
            provenance=Provenance.AI,
        )
