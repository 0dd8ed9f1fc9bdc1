"""Meal store port (interface).

Defines the contract for persisting committed meals.
Follows the Dependency Inversion Principle: domain defines the port,
infrastructure provides the implementation.
"""

from typing import Protocol

from mealsnap.domain.meal.submission.entities.meal_submission import MealSubmission


class IMealStore(Protocol):
    """
    Interface for meal persistence.

    Examples of implementations:
    - In-memory store (for testing)
    - HTTP store posting to the meals API (for production)
    """

    async def save(self, submission: MealSubmission) -> str:
        """
        Persist a submission.

        Args:
            submission: Edited meal to store

        Returns:
            Identifier assigned by the store

        Raises:
            SubmissionError: If the meal could not be stored
        """
        ...

    async def aclose(self) -> None:
        """Release connections held by the store."""
        ...
