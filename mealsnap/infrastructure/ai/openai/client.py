"""OpenAI analysis gateway - Implements IAnalysisGateway port.

Key Features:
- Structured outputs (native Pydantic support)
- Image sent inline as a base64 data URL
- Circuit breaker (5 transient failures → 60s open)
- Retry logic (exponential backoff) on transient errors only
- SDK errors mapped to the domain analysis error taxonomy
"""

# mypy: warn-unused-ignores=False

import base64
import logging
import time
from typing import Any, Dict, List, Optional

from circuitbreaker import CircuitBreakerError, circuit
from openai import (
    APIConnectionError,
    APIError,
    AsyncOpenAI,
    BadRequestError,
    InternalServerError,
    OpenAIError,
    UnprocessableEntityError,
)
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mealsnap.domain.meal.analysis.entities.analysis_result import (
    AnalysisResult,
    AnalyzedItem,
)
from mealsnap.domain.meal.core.exceptions import (
    InvalidImageError,
    NetworkError,
    ServiceError,
)
from mealsnap.domain.meal.core.value_objects import Language, NutritionTotals
from mealsnap.infrastructure.ai.openai.models import MealAnalysisResponse
from mealsnap.infrastructure.ai.prompts.meal_analysis import build_system_prompt

logger = logging.getLogger(__name__)

# Errors worth retrying and counting towards the circuit breaker.
TRANSIENT_ERRORS = (APIConnectionError, InternalServerError)

_IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF8", "image/gif"),
    (b"RIFF", "image/webp"),
)


def guess_mime_type(image: bytes) -> str:
    """Mime type from magic bytes, JPEG when unknown."""
    for signature, mime_type in _IMAGE_SIGNATURES:
        if image.startswith(signature):
            return mime_type
    return "image/jpeg"


class OpenAIAnalysisGateway:
    """
    OpenAI GPT-4o meal analysis implementing IAnalysisGateway port.

    Follows Dependency Inversion Principle:
    - Domain defines IAnalysisGateway interface (port)
    - Infrastructure provides OpenAIAnalysisGateway implementation (adapter)

    Example:
        >>> gateway = OpenAIAnalysisGateway(api_key="sk-...")
        >>> result = await gateway.analyze(image_bytes, "no dressing", Language.ENGLISH)
        >>> print(f"{result.display_name()}: {result.item_count()} items")
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-2024-08-06",
        temperature: float = 0.1,
    ):
        """
        Initialize OpenAI gateway.

        Args:
            api_key: OpenAI API key
            model: Model name (default: gpt-4o-2024-08-06 with structured outputs)
            temperature: Sampling temperature (0.1 for consistency)
        """
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model
        self._temperature = temperature

    async def aclose(self) -> None:
        await self._client.close()

    async def analyze(
        self,
        image: bytes,
        hint: Optional[str],
        language: Language,
    ) -> AnalysisResult:
        """
        Estimate the nutrition of a meal photo.

        Implements IAnalysisGateway.analyze() port.

        Args:
            image: Raw image bytes
            hint: Optional free-text hint from the user
            language: Language for names and description

        Returns:
            AnalysisResult with reported items and totals

        Raises:
            NetworkError: Service unreachable or timed out
            InvalidImageError: Request (image) rejected by the service
            ServiceError: Any other service failure or unusable response
        """
        start_time = time.time()

        logger.info(
            "Analyzing meal photo",
            extra={
                "size_bytes": len(image),
                "has_hint": bool(hint),
                "language": language.value,
                "model": self._model,
            },
        )

        data_url = f"data:{guess_mime_type(image)};base64,{base64.b64encode(image).decode('ascii')}"
        content: List[Dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": data_url}},
        ]
        if hint:
            content.append({"type": "text", "text": f"User comment: {hint}"})

        messages = [
            {"role": "system", "content": build_system_prompt(language)},
            {"role": "user", "content": content},
        ]

        try:
            response = await self._structured_completion(messages)
        except CircuitBreakerError as e:
            raise ServiceError("Analysis service temporarily unavailable") from e
        except APIConnectionError as e:
            # Includes APITimeoutError
            raise NetworkError(f"Analysis service unreachable: {e}") from e
        except (BadRequestError, UnprocessableEntityError) as e:
            raise InvalidImageError(f"Analysis service rejected the image: {e}") from e
        except APIError as e:
            raise ServiceError(f"Analysis service error: {e}") from e
        except (OpenAIError, PydanticValidationError) as e:
            raise ServiceError(f"Unusable analysis response: {e}") from e

        processing_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            "Meal analysis complete",
            extra={
                "item_count": len(response.items),
                "meal_name": response.meal_name,
                "processing_time_ms": processing_time_ms,
            },
        )

        return self._to_domain_result(response, processing_time_ms)

    @circuit(  # type: ignore[misc]
        failure_threshold=5,
        recovery_timeout=60,
        expected_exception=TRANSIENT_ERRORS,
        name="openai_meal_analysis",
    )
    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    async def _structured_completion(
        self,
        messages: List[Dict[str, Any]],
    ) -> MealAnalysisResponse:
        """
        Execute OpenAI completion with structured output.

        Raises:
            APIError: On API failures
            ServiceError: If the model returned no parsed payload
        """
        logger.debug(
            "Calling OpenAI structured completion",
            extra={"model": self._model, "message_count": len(messages)},
        )

        response = await self._client.beta.chat.completions.parse(
            model=self._model,
            messages=messages,  # type: ignore[arg-type]
            response_format=MealAnalysisResponse,
            temperature=self._temperature,
        )

        usage = response.usage
        if usage:
            logger.info(
                "OpenAI response received",
                extra={
                    "model": self._model,
                    "total_tokens": usage.total_tokens,
                    "prompt_tokens": usage.prompt_tokens,
                    "completion_tokens": usage.completion_tokens,
                },
            )

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise ServiceError(f"Model refused the request: {message.refusal}")

        parsed = message.parsed
        if not parsed:
            raise ServiceError("OpenAI returned empty parsed response")

        return parsed

    @staticmethod
    def _to_domain_result(
        response: MealAnalysisResponse,
        processing_time_ms: int,
    ) -> AnalysisResult:
        """Map the Pydantic response to the domain AnalysisResult."""
        items = tuple(
            AnalyzedItem(
                name=item.name,
                calories=item.calories,
                protein=item.protein,
                carbs=item.carbs,
                fat=item.fat,
                fiber=item.fiber,
                sugar=item.sugar,
                sodium_mg=item.sodium_mg,
            )
            for item in response.items
        )

        totals = response.totals
        return AnalysisResult(
            meal_name=response.meal_name or None,
            items=items,
            totals=NutritionTotals(
                calories=max(totals.calories, 0.0),
                protein_g=max(totals.protein_g, 0.0),
                carbs_g=max(totals.carbs_g, 0.0),
                fat_g=max(totals.fats_g, 0.0),
                fiber_g=max(totals.fiber_g, 0.0),
                sugar_g=max(totals.sugar_g, 0.0),
                sodium_mg=max(totals.sodium_mg, 0.0),
            ),
            description=response.description or None,
            processing_time_ms=processing_time_ms,
        )
