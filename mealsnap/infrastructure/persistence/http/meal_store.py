"""HTTP meal store - Implements IMealStore port.

Posts the edited meal as JSON to the meals API and returns the identifier
it assigns. Transport failures and non-2xx answers become SubmissionError;
the workflow keeps the session so the user can retry.
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from mealsnap.domain.meal.core.exceptions import SubmissionError
from mealsnap.domain.meal.submission.entities.meal_submission import MealSubmission

logger = structlog.get_logger(__name__)


class HttpMealStore:
    """
    Meals API client implementing IMealStore port.

    Expects a JSON answer carrying the new meal id in ``id`` (or
    ``meal_id``).

    Example:
        >>> async with HttpMealStore("https://api.example.com/meals", token="...") as store:
        ...     persisted_id = await store.save(submission)
    """

    TIMEOUT_S = 30.0

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout_s: float = TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize store.

        Args:
            url: Endpoint receiving POSTed meals
            token: Bearer token (optional)
            timeout_s: Per-request timeout
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._url = url
        self._token = token
        self._timeout_s = timeout_s
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpMealStore":
        """Async context manager entry."""
        self._client = self._build_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(self._timeout_s),
            transport=self._transport,
        )

    async def save(self, submission: MealSubmission) -> str:
        """
        POST the submission.

        Args:
            submission: Edited meal to store

        Returns:
            Identifier assigned by the meals API

        Raises:
            SubmissionError: On transport error, non-2xx status or missing id
        """
        if self._client is None:
            # Lazily created so the store also works outside `async with`
            self._client = self._build_client()

        logger.info(
            "Posting meal",
            session_id=str(submission.session_id),
            ingredient_count=len(submission.ingredients),
        )

        try:
            response = await self._client.post(self._url, json=submission.to_dict())
        except httpx.HTTPError as e:
            logger.warning("Meal store unreachable", error=str(e))
            raise SubmissionError(f"Meal store unreachable: {e}") from e

        if not response.is_success:
            logger.warning(
                "Meal store rejected meal",
                status=response.status_code,
                session_id=str(submission.session_id),
            )
            raise SubmissionError(f"Meal store error: HTTP {response.status_code}")

        persisted_id = self._extract_id(response)

        logger.info("Meal stored", persisted_id=persisted_id)
        return persisted_id

    @staticmethod
    def _extract_id(response: httpx.Response) -> str:
        try:
            data: Dict[str, Any] = response.json()
        except ValueError as e:
            raise SubmissionError("Meal store returned invalid JSON") from e

        if not isinstance(data, dict):
            raise SubmissionError("Meal store returned an unexpected payload")

        persisted_id = data.get("id") or data.get("meal_id")
        if not persisted_id:
            raise SubmissionError("Meal store response has no meal id")
        return str(persisted_id)
