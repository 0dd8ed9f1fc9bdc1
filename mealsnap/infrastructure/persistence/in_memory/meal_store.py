"""In-memory meal store implementation.

Provides an in-memory implementation of IMealStore port for testing.
Uses a dictionary for storage with no external dependencies.
"""

from copy import deepcopy
from typing import Dict, List, Optional
from uuid import uuid4

from mealsnap.domain.meal.submission.entities.meal_submission import MealSubmission


class InMemoryMealStore:
    """
    In-memory implementation of IMealStore port.

    Thread safety: NOT thread-safe (single event loop only)
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> store = InMemoryMealStore()
        >>> persisted_id = await store.save(submission)
        >>> store.get(persisted_id).meal_name
        'Chicken and Rice'
    """

    def __init__(self) -> None:
        """Initialize store with empty storage."""
        self._storage: Dict[str, MealSubmission] = {}

    async def save(self, submission: MealSubmission) -> str:
        """
        Store a submission under a new identifier.

        Args:
            submission: Edited meal to store

        Returns:
            Generated identifier ("meal_<hex>")
        """
        persisted_id = f"meal_{uuid4().hex}"
        self._storage[persisted_id] = deepcopy(submission)
        return persisted_id

    def get(self, persisted_id: str) -> Optional[MealSubmission]:
        """Return a copy of a stored submission, None if unknown."""
        submission = self._storage.get(persisted_id)
        return deepcopy(submission) if submission is not None else None

    def all(self) -> List[MealSubmission]:
        """All stored submissions in insertion order."""
        return [deepcopy(submission) for submission in self._storage.values()]

    async def aclose(self) -> None:
        return None

    def count(self) -> int:
        return len(self._storage)

    def clear(self) -> None:
        """Clear all stored meals (useful for testing)."""
        self._storage.clear()
