"""Core entities.

Import PendingMeal from .session directly; it depends on the nutrition
services, which themselves import Ingredient from here.
"""

from .ingredient import Ingredient, Provenance

__all__ = ["Ingredient", "Provenance"]
