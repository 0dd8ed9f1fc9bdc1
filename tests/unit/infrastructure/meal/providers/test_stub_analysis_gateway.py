"""Unit tests for StubAnalysisGateway."""

import pytest

from mealsnap.domain.meal.core.exceptions import (
    InvalidImageError,
    NetworkError,
    ServiceError,
)
from mealsnap.domain.meal.core.value_objects import Language
from mealsnap.infrastructure.meal.providers.stub_analysis_gateway import StubAnalysisGateway


@pytest.fixture
def gateway():
    return StubAnalysisGateway()


class TestStubAnalysisGateway:
    @pytest.mark.asyncio
    async def test_default_meal(self, gateway, jpeg_bytes):
        result = await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        assert result.meal_name == "Chicken and Rice"
        assert result.item_count() == 2
        assert result.items[0].calories == "248"
        assert result.totals.calories == 453

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "hint, meal_name",
        [("Caesar SALAD please", "Garden Salad"), ("pasta without cheese", "Pasta al Pomodoro")],
    )
    async def test_hint_selects_meal(self, gateway, jpeg_bytes, hint, meal_name):
        result = await gateway.analyze(jpeg_bytes, hint, Language.ENGLISH)

        assert result.meal_name == meal_name

    @pytest.mark.asyncio
    async def test_hebrew_meal_name(self, gateway, jpeg_bytes):
        result = await gateway.analyze(jpeg_bytes, None, Language.HEBREW)

        assert result.meal_name == "עוף ואורז"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "hint, error_type",
        [
            ("fail:network", NetworkError),
            ("fail:service", ServiceError),
            ("FAIL:IMAGE", InvalidImageError),
        ],
    )
    async def test_failure_hints(self, gateway, jpeg_bytes, hint, error_type):
        with pytest.raises(error_type):
            await gateway.analyze(jpeg_bytes, hint, Language.ENGLISH)

    @pytest.mark.asyncio
    async def test_records_calls(self, gateway, jpeg_bytes):
        async with gateway as g:
            await g.analyze(jpeg_bytes, "salad", Language.HEBREW)

        assert gateway.calls == [("salad", Language.HEBREW)]
