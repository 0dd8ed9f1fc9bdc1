"""Domain service for nutrition totals.

Pure, deterministic aggregation of ingredient nutrient fields.
"""

import math
from typing import Iterable, List

from mealsnap.domain.meal.core.entities.ingredient import Ingredient
from mealsnap.domain.meal.core.exceptions import ValidationError
from mealsnap.domain.meal.core.value_objects import NutritionTotals


class NutritionAggregator:
    """
    Sum ingredient nutrients into session totals.

    Uses ``math.fsum`` so the result is correctly rounded and therefore
    independent of ingredient order. Missing optional fields count as 0.
    No rounding is applied; that is a display concern.

    Example:
        >>> totals = NutritionAggregator.recompute([
        ...     Ingredient(id="a", name="rice", calories=100, protein_g=5, carbs_g=10, fat_g=2),
        ...     Ingredient(id="b", name="beans", calories=200, protein_g=10, carbs_g=20, fat_g=5),
        ... ])
        >>> totals.calories, totals.protein_g, totals.carbs_g, totals.fat_g
        (300.0, 15.0, 30.0, 7.0)
    """

    @staticmethod
    def recompute(ingredients: Iterable[Ingredient]) -> NutritionTotals:
        """
        Compute totals for an ingredient list.

        Args:
            ingredients: Ingredients in any order

        Returns:
            NutritionTotals with one summed value per nutrient field

        Raises:
            ValidationError: If a total exceeds the float range
        """
        items: List[Ingredient] = list(ingredients)

        try:
            return NutritionTotals(
                calories=math.fsum(i.calories for i in items),
                protein_g=math.fsum(i.protein_g for i in items),
                carbs_g=math.fsum(i.carbs_g for i in items),
                fat_g=math.fsum(i.fat_g for i in items),
                fiber_g=math.fsum(i.fiber_g or 0.0 for i in items),
                sugar_g=math.fsum(i.sugar_g or 0.0 for i in items),
                sodium_mg=math.fsum(i.sodium_mg or 0.0 for i in items),
            )
        except OverflowError as e:
            raise ValidationError("Nutrient totals are out of range") from e
