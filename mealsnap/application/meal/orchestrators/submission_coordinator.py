"""Submission coordinator - persists the edited meal."""

import logging

from mealsnap.domain.meal.core.entities.session import PendingMeal
from mealsnap.domain.meal.core.exceptions import SubmissionError
from mealsnap.domain.meal.submission.entities.meal_submission import MealSubmission
from mealsnap.domain.meal.submission.ports.meal_store import IMealStore

logger = logging.getLogger(__name__)


class SubmissionCoordinator:
    """
    Persist a finalized session through the meal store.

    Always submits the session's current edited ingredients and totals.
    The session object itself is left untouched; clearing it after success
    is the workflow coordinator's job, and on failure it stays intact for
    a retry.

    Example:
        >>> coordinator = SubmissionCoordinator(store)
        >>> persisted_id = await coordinator.commit(session)
    """

    def __init__(self, store: IMealStore):
        """
        Initialize coordinator.

        Args:
            store: Meal persistence adapter
        """
        self._store = store

    async def aclose(self) -> None:
        """Close the underlying store."""
        await self._store.aclose()

    async def commit(self, session: PendingMeal) -> str:
        """
        Store the edited meal.

        Args:
            session: Session in editing state with at least one ingredient

        Returns:
            Identifier assigned by the store

        Raises:
            SubmissionError: If there is nothing to submit or the store fails
        """
        if not session.has_ingredients():
            raise SubmissionError("Cannot submit a meal without ingredients")

        submission = MealSubmission.from_session(session)

        logger.info(
            "Submitting meal",
            extra={
                "session_id": str(session.id),
                "ingredient_count": len(submission.ingredients),
                "total_calories": submission.totals.calories,
            },
        )

        try:
            persisted_id = await self._store.save(submission)
        except SubmissionError:
            logger.warning(
                "Meal store rejected submission",
                extra={"session_id": str(session.id)},
                exc_info=True,
            )
            raise
        except Exception as e:
            logger.error(
                "Meal store failed",
                extra={"session_id": str(session.id), "error": str(e)},
                exc_info=True,
            )
            raise SubmissionError(f"Failed to save meal: {e}") from e

        if not persisted_id:
            raise SubmissionError("Meal store returned an empty identifier")

        logger.info(
            "Meal submitted",
            extra={"session_id": str(session.id), "persisted_id": persisted_id},
        )
        return persisted_id
