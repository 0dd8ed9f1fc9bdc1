"""OpenAI gateway implementation for meal photo analysis."""

from mealsnap.infrastructure.ai.openai.client import OpenAIAnalysisGateway
from mealsnap.infrastructure.ai.openai.models import (
    MealAnalysisResponse,
    MealItemResponse,
    MealTotalsResponse,
)

__all__ = [
    "OpenAIAnalysisGateway",
    "MealAnalysisResponse",
    "MealItemResponse",
    "MealTotalsResponse",
]
