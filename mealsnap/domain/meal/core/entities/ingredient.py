"""Ingredient entity - single line item within a pending meal."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Provenance(str, Enum):
    """Who produced the ingredient."""

    AI = "ai"
    USER = "user"


@dataclass(frozen=True)
class Ingredient:
    """
    Entity: one AI- or user-attributed ingredient of the pending meal.

    Identity: ``id`` is unique within its session only
    (e.g. ``ai_0``, ``user_3``).
    Mutability: immutable; editing a value produces a replacement with
    the same id.
    """

    id: str
    name: str

    # Macronutrients
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    # Micronutrients (optional, contribute 0 to totals when absent)
    fiber_g: Optional[float] = None
    sugar_g: Optional[float] = None
    sodium_mg: Optional[float] = None

    provenance: Provenance = Provenance.USER

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.id:
            raise ValueError("Ingredient id cannot be empty")

        if not self.name or not self.name.strip():
            raise ValueError("Ingredient name cannot be empty")

        for field_name in NUMERIC_FIELDS:
            value = getattr(self, field_name)
            if value is not None and value < 0:
                raise ValueError(f"{field_name} cannot be negative, got {value}")

    @property
    def is_user_added(self) -> bool:
        """True for ingredients the user typed in."""
        return self.provenance is Provenance.USER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["provenance"] = self.provenance.value
        return data


MACRO_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g")
OPTIONAL_FIELDS = ("fiber_g", "sugar_g", "sodium_mg")
NUMERIC_FIELDS = MACRO_FIELDS + OPTIONAL_FIELDS
