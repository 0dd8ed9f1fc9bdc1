"""Unit tests for InMemoryMealStore."""

import pytest

from mealsnap.domain.meal.editing.ingredient_editor import IngredientEditor
from mealsnap.domain.meal.submission.entities.meal_submission import MealSubmission
from mealsnap.infrastructure.persistence.in_memory.meal_store import InMemoryMealStore


@pytest.fixture
def submission(session, sample_analysis):
    IngredientEditor(session).replace_from_analysis(sample_analysis)
    return MealSubmission.from_session(session)


class TestInMemoryMealStore:
    @pytest.mark.asyncio
    async def test_save_and_get(self, submission):
        store = InMemoryMealStore()

        persisted_id = await store.save(submission)

        assert persisted_id.startswith("meal_")
        stored = store.get(persisted_id)
        assert stored == submission
        assert stored is not submission

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, submission):
        store = InMemoryMealStore()

        first = await store.save(submission)
        second = await store.save(submission)

        assert first != second
        assert store.count() == 2
        assert len(store.all()) == 2

    def test_get_unknown(self):
        assert InMemoryMealStore().get("meal_missing") is None

    @pytest.mark.asyncio
    async def test_clear(self, submission):
        store = InMemoryMealStore()
        await store.save(submission)

        store.clear()

        assert store.count() == 0
