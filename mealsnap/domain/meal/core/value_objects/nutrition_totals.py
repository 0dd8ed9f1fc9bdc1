"""NutritionTotals value object.

Derived sum of every ingredient's nutrient fields for a session.
Never set independently: produced only by NutritionAggregator.
"""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class NutritionTotals:
    """
    Value object: aggregated macro/micro nutrients.

    Values are stored unrounded; rounding is applied only for display.

    Example:
        >>> totals = NutritionTotals(calories=300.4, protein_g=15.0)
        >>> totals.rounded()["calories"]
        300
    """

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    def rounded(self) -> Dict[str, int]:
        """Display values rounded to whole units."""
        return {key: round(value) for key, value in asdict(self).items()}

    @classmethod
    def zero(cls) -> "NutritionTotals":
        """Totals of an empty ingredient list."""
        return cls()
