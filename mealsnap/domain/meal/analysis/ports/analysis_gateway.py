"""Port (interface) for AI nutrition analysis services.

This port defines the contract that external analysis providers
(e.g., OpenAI vision models) must implement to be used by the workflow.
"""

from typing import Optional, Protocol

from mealsnap.domain.meal.analysis.entities.analysis_result import AnalysisResult
from mealsnap.domain.meal.core.value_objects import Language


class IAnalysisGateway(Protocol):
    """
    Interface for AI nutrition estimation.

    This port follows the Dependency Inversion Principle:
    - Domain layer defines the interface (port)
    - Infrastructure layer implements it (adapter)

    Implementations must be safe to call repeatedly on the same image with
    different hints (re-analysis).
    """

    async def analyze(
        self,
        image: bytes,
        hint: Optional[str],
        language: Language,
    ) -> AnalysisResult:
        """
        Estimate the meal shown in an image.

        Args:
            image: Raw image bytes
            hint: Optional free text from the user ("no sauce", "half portion")
            language: Locale for names and descriptions

        Returns:
            AnalysisResult with per-item values and service totals

        Raises:
            NetworkError: Service unreachable or timed out
            ServiceError: Service failed or returned an unusable payload
            InvalidImageError: Service rejected the image
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying client."""
        ...
