"""Provider factory for the capture workflow adapters.

Settings-based provider selection with stubs as the default.
Strategy:
- .env (runtime): ANALYSIS_PROVIDER=openai, MEAL_STORE=http
- tests: ANALYSIS_PROVIDER=stub, MEAL_STORE=memory
- Default: stub gateway + in-memory store (safe if nothing is set)

Usage:
    from mealsnap.infrastructure.meal.providers.factory import (
        create_analysis_gateway,
        create_meal_store,
    )

    gateway = create_analysis_gateway(settings)
    store = create_meal_store(settings)
"""

from typing import Optional

from mealsnap.config import Settings
from mealsnap.domain.meal.analysis.ports.analysis_gateway import IAnalysisGateway
from mealsnap.domain.meal.submission.ports.meal_store import IMealStore
from mealsnap.infrastructure.ai.openai.client import OpenAIAnalysisGateway
from mealsnap.infrastructure.meal.providers.stub_analysis_gateway import StubAnalysisGateway
from mealsnap.infrastructure.persistence.http.meal_store import HttpMealStore
from mealsnap.infrastructure.persistence.in_memory.meal_store import InMemoryMealStore


def create_analysis_gateway(settings: Optional[Settings] = None) -> IAnalysisGateway:
    """Create analysis gateway based on settings.analysis_provider.

    Values:
        - "openai": OpenAI GPT-4o (requires OPENAI_API_KEY)
        - "stub": Stub gateway (default)

    Raises:
        ValueError: If openai is selected without an API key
    """
    settings = settings or Settings()

    if settings.analysis_provider == "openai":
        if not settings.openai_api_key:
            raise ValueError(
                "ANALYSIS_PROVIDER=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use ANALYSIS_PROVIDER=stub"
            )
        return OpenAIAnalysisGateway(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
        )

    return StubAnalysisGateway()


def create_meal_store(settings: Optional[Settings] = None) -> IMealStore:
    """Create meal store based on settings.meal_store.

    Values:
        - "http": POST to MEAL_STORE_URL
        - "memory": In-memory store (default)

    Raises:
        ValueError: If http is selected without a URL
    """
    settings = settings or Settings()

    if settings.meal_store == "http":
        if not settings.meal_store_url:
            raise ValueError("MEAL_STORE=http but MEAL_STORE_URL not set")
        return HttpMealStore(
            url=settings.meal_store_url,
            token=settings.meal_store_token,
            timeout_s=settings.submission_timeout_s,
        )

    return InMemoryMealStore()
