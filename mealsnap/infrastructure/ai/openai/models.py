"""Pydantic models for OpenAI structured outputs.

These models define the schema for structured outputs from OpenAI API.
Used with beta.chat.completions.parse() for native Pydantic support.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MealItemResponse(BaseModel):
    """
    Single ingredient estimated from the meal photo.

    Maps to domain entity AnalyzedItem.
    """

    name: str = Field(
        ...,
        description="Ingredient name in the requested language (e.g., 'white rice, cooked')",
    )
    calories: float = Field(..., description="Energy in kcal for the visible portion")
    protein: float = Field(..., description="Protein in grams")
    carbs: float = Field(..., description="Carbohydrates in grams")
    fat: float = Field(..., description="Fat in grams")
    fiber: Optional[float] = Field(default=None, description="Fiber in grams, null if unknown")
    sugar: Optional[float] = Field(default=None, description="Sugar in grams, null if unknown")
    sodium_mg: Optional[float] = Field(
        default=None, description="Sodium in milligrams, null if unknown"
    )


class MealTotalsResponse(BaseModel):
    """Whole-meal totals as estimated by the model."""

    calories: float = Field(default=0.0, description="Total kcal")
    protein_g: float = Field(default=0.0, description="Total protein in grams")
    carbs_g: float = Field(default=0.0, description="Total carbohydrates in grams")
    fats_g: float = Field(default=0.0, description="Total fat in grams")
    fiber_g: float = Field(default=0.0, description="Total fiber in grams")
    sugar_g: float = Field(default=0.0, description="Total sugar in grams")
    sodium_mg: float = Field(default=0.0, description="Total sodium in milligrams")


class MealAnalysisResponse(BaseModel):
    """
    Complete response from meal analysis.

    This is the root model for OpenAI structured outputs.
    """

    meal_name: str = Field(
        default="",
        description="Short name of the whole meal in the requested language",
    )
    description: str = Field(
        default="",
        description="One or two sentences describing the meal",
    )
    items: List[MealItemResponse] = Field(
        default_factory=list,
        max_length=15,
        description="Ingredients visible in the photo (max 15)",
    )
    totals: MealTotalsResponse = Field(
        default_factory=MealTotalsResponse,
        description="Totals for the whole meal",
    )
