"""Meal analysis prompts for OpenAI."""

from mealsnap.infrastructure.ai.prompts.meal_analysis import (
    MEAL_ANALYSIS_SYSTEM_PROMPT,
    build_system_prompt,
)

__all__ = [
    "MEAL_ANALYSIS_SYSTEM_PROMPT",
    "build_system_prompt",
]
