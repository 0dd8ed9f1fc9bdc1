"""Unit tests for OpenAIAnalysisGateway.

Tests focus on:
- Request construction (data URL, hint, language prompt)
- Pydantic response mapping to domain entities
- SDK error mapping to the analysis error taxonomy

Note: These are UNIT tests with mocked OpenAI API calls.
"""

from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from mealsnap.domain.meal.core.exceptions import (
    InvalidImageError,
    NetworkError,
    ServiceError,
)
from mealsnap.domain.meal.core.value_objects import Language
from mealsnap.infrastructure.ai.openai.client import OpenAIAnalysisGateway, guess_mime_type
from mealsnap.infrastructure.ai.openai.models import (
    MealAnalysisResponse,
    MealItemResponse,
    MealTotalsResponse,
)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _status_error(error_type: Any, status: int) -> Exception:
    response = httpx.Response(status, request=httpx.Request("POST", OPENAI_URL))
    return error_type(f"HTTP {status}", response=response, body=None)


def _completion(parsed: Any, refusal: Any = None) -> Any:
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(parsed=parsed, refusal=refusal))]
    mock_response.usage = MagicMock(total_tokens=1500, prompt_tokens=1200, completion_tokens=300)
    return mock_response


@pytest.fixture
def mock_openai_client() -> Iterator[Any]:
    """Fixture providing mocked OpenAI AsyncClient."""
    with patch("mealsnap.infrastructure.ai.openai.client.AsyncOpenAI") as mock:
        yield mock


@pytest.fixture
def gateway(mock_openai_client: Any) -> OpenAIAnalysisGateway:
    return OpenAIAnalysisGateway(api_key="test-key")


@pytest.fixture
def parse_mock(mock_openai_client: Any) -> AsyncMock:
    parse = AsyncMock()
    mock_openai_client.return_value.beta.chat.completions.parse = parse
    return parse


@pytest.fixture
def sample_response() -> MealAnalysisResponse:
    return MealAnalysisResponse(
        meal_name="Chicken and Rice",
        description="Grilled chicken breast with white rice",
        items=[
            MealItemResponse(name="chicken breast", calories=248, protein=46.5, carbs=0, fat=5.4),
            MealItemResponse(
                name="white rice", calories=205, protein=4.3, carbs=44.5, fat=0.4, fiber=0.6
            ),
        ],
        totals=MealTotalsResponse(calories=453, protein_g=50.8, carbs_g=44.5, fats_g=5.8),
    )


class TestOpenAIAnalysisGateway:
    def test_init(self, mock_openai_client):
        OpenAIAnalysisGateway(api_key="test-key", model="gpt-4o-mini")

        mock_openai_client.assert_called_once_with(api_key="test-key")

    @pytest.mark.asyncio
    async def test_analyze_success(self, gateway, parse_mock, sample_response, jpeg_bytes):
        parse_mock.return_value = _completion(sample_response)

        result = await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        assert result.meal_name == "Chicken and Rice"
        assert result.item_count() == 2
        assert result.items[1].fiber == 0.6
        assert result.items[0].fiber is None
        assert result.totals.fat_g == 5.8
        assert result.description == "Grilled chicken breast with white rice"
        assert result.processing_time_ms >= 0

    @pytest.mark.asyncio
    async def test_request_contents(self, gateway, parse_mock, sample_response, jpeg_bytes):
        parse_mock.return_value = _completion(sample_response)

        await gateway.analyze(jpeg_bytes, "no sauce", Language.HEBREW)

        kwargs = parse_mock.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-2024-08-06"
        assert kwargs["response_format"] is MealAnalysisResponse
        system, user = kwargs["messages"]
        assert "Hebrew" in system["content"]
        assert user["content"][0]["image_url"]["url"].startswith("data:image/jpeg;base64,")
        assert user["content"][1] == {"type": "text", "text": "User comment: no sauce"}

    @pytest.mark.asyncio
    async def test_no_hint_sends_image_only(self, gateway, parse_mock, sample_response, jpeg_bytes):
        parse_mock.return_value = _completion(sample_response)

        await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        user = parse_mock.call_args.kwargs["messages"][1]
        assert len(user["content"]) == 1

    @pytest.mark.asyncio
    async def test_empty_meal_name_becomes_none(self, gateway, parse_mock, jpeg_bytes):
        parse_mock.return_value = _completion(MealAnalysisResponse())

        result = await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        assert result.meal_name is None
        assert result.display_name() == "Analyzed Meal"
        assert result.items == ()

    @pytest.mark.asyncio
    async def test_bad_request_maps_to_invalid_image(self, gateway, parse_mock, jpeg_bytes):
        parse_mock.side_effect = _status_error(openai.BadRequestError, 400)

        with pytest.raises(InvalidImageError):
            await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        assert parse_mock.await_count == 1

    @pytest.mark.asyncio
    async def test_auth_error_maps_to_service_error(self, gateway, parse_mock, jpeg_bytes):
        parse_mock.side_effect = _status_error(openai.AuthenticationError, 401)

        with pytest.raises(ServiceError):
            await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

    @pytest.mark.asyncio
    async def test_empty_parse_maps_to_service_error(self, gateway, parse_mock, jpeg_bytes):
        parse_mock.return_value = _completion(None)

        with pytest.raises(ServiceError, match="empty parsed response"):
            await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

    @pytest.mark.asyncio
    async def test_refusal_maps_to_service_error(self, gateway, parse_mock, jpeg_bytes):
        parse_mock.return_value = _completion(None, refusal="I can't help with that")

        with pytest.raises(ServiceError, match="refused"):
            await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_network_error(self, gateway, parse_mock, sample_response, jpeg_bytes):
        """Transient errors are retried (3 attempts) before surfacing."""
        parse_mock.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", OPENAI_URL)
        )

        with pytest.raises(NetworkError):
            await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)

        assert parse_mock.await_count == 3

        # A later success closes the breaker's failure count again
        parse_mock.side_effect = None
        parse_mock.return_value = _completion(sample_response)
        result = await gateway.analyze(jpeg_bytes, None, Language.ENGLISH)
        assert result.item_count() == 2


class TestGuessMimeType:
    @pytest.mark.parametrize(
        "prefix, expected",
        [
            (b"\x89PNG\r\n\x1a\n", "image/png"),
            (b"GIF89a", "image/gif"),
            (b"RIFF\x00\x00\x00\x00WEBP", "image/webp"),
            (b"\xff\xd8\xff", "image/jpeg"),
            (b"unknown", "image/jpeg"),
        ],
    )
    def test_signatures(self, prefix, expected):
        assert guess_mime_type(prefix + b"\x00" * 16) == expected


class TestGatewayLifecycle:
    @pytest.mark.asyncio
    async def test_aclose_closes_client(self, gateway: OpenAIAnalysisGateway, mock_openai_client: Any) -> None:
        mock_openai_client.return_value.close = AsyncMock()

        await gateway.aclose()

        mock_openai_client.return_value.close.assert_awaited_once()
