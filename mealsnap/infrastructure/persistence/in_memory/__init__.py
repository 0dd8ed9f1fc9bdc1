"""In-memory meal store for testing."""

from .meal_store import InMemoryMealStore

__all__ = ["InMemoryMealStore"]
