"""Unit tests for workflow domain events."""

from datetime import datetime
from uuid import uuid4

import pytest

from mealsnap.domain.meal.core.events import MealCommitted, WorkflowStatusChanged
from mealsnap.domain.meal.core.exceptions import NetworkError
from mealsnap.domain.meal.core.value_objects import SessionStatus


class TestWorkflowStatusChanged:
    def test_create(self):
        session_id = uuid4()

        event = WorkflowStatusChanged.create(
            session_id=session_id,
            previous=SessionStatus.AWAITING_ANALYSIS,
            current=SessionStatus.ANALYZING,
        )

        assert event.session_id == session_id
        assert event.current is SessionStatus.ANALYZING
        assert not event.failed
        assert event.occurred_at.tzinfo is not None
        assert event.event_name == "WorkflowStatusChanged"

    def test_failed_when_error_attached(self):
        event = WorkflowStatusChanged.create(
            session_id=None,
            previous=SessionStatus.ANALYZING,
            current=SessionStatus.AWAITING_ANALYSIS,
            error=NetworkError("offline"),
        )

        assert event.failed

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValueError):
            WorkflowStatusChanged(
                event_id=uuid4(),
                occurred_at=datetime(2024, 1, 1),
                session_id=None,
                previous=SessionStatus.IDLE,
                current=SessionStatus.CAPTURING,
            )


class TestMealCommitted:
    def test_create(self):
        event = MealCommitted.create(
            session_id=uuid4(), persisted_id="meal_1", ingredient_count=2, total_calories=453.0
        )

        assert event.persisted_id == "meal_1"
        assert event.ingredient_count == 2

    @pytest.mark.parametrize(
        "persisted_id, ingredient_count",
        [("", 1), ("meal_1", 0)],
    )
    def test_invalid_values_rejected(self, persisted_id, ingredient_count):
        with pytest.raises(ValueError):
            MealCommitted.create(
                session_id=uuid4(),
                persisted_id=persisted_id,
                ingredient_count=ingredient_count,
                total_calories=0.0,
            )
