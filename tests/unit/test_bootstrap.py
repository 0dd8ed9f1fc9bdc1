"""Unit tests for the composition root."""

import pytest

from mealsnap.bootstrap import create_workflow_coordinator
from mealsnap.config import Settings
from mealsnap.domain.meal.core.value_objects import Language, SessionStatus
from mealsnap.infrastructure.events.in_memory_bus import InMemoryEventBus


class TestCreateWorkflowCoordinator:
    def test_wires_settings(self):
        bus = InMemoryEventBus()

        coordinator = create_workflow_coordinator(
            Settings(language=Language.HEBREW), event_bus=bus
        )

        assert coordinator.status is SessionStatus.IDLE
        assert coordinator.language is Language.HEBREW

    def test_reads_environment_when_no_settings(self, monkeypatch):
        monkeypatch.setenv("MEAL_LANGUAGE", "he")
        monkeypatch.setenv("ANALYSIS_PROVIDER", "stub")
        monkeypatch.setenv("MEAL_STORE", "memory")

        coordinator = create_workflow_coordinator()

        assert coordinator.language is Language.HEBREW

    @pytest.mark.asyncio
    async def test_context_manager_releases_http_store(self):
        settings = Settings(meal_store="http", meal_store_url="https://api.example.com/meals")

        async with create_workflow_coordinator(settings) as coordinator:
            assert coordinator.status is SessionStatus.IDLE

        assert coordinator.status is SessionStatus.IDLE
