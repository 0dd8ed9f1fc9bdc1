"""HTTP meal store."""

from .meal_store import HttpMealStore

__all__ = ["HttpMealStore"]
