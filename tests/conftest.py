"""Shared test fixtures.

Unit and integration tests never touch real services: the analysis
gateway and meal store are stubs or mocks throughout.
"""

from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv

from mealsnap.domain.meal.analysis.entities.analysis_result import (
    AnalysisResult,
    AnalyzedItem,
)
from mealsnap.domain.meal.capture.entities.captured_image import CapturedImage
from mealsnap.domain.meal.core.entities.ingredient import Ingredient
from mealsnap.domain.meal.core.entities.session import PendingMeal
from mealsnap.domain.meal.core.value_objects import NutritionTotals

# Load .env.test when present (explicit test settings, never the dev .env)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def captured_image() -> CapturedImage:
    return CapturedImage(data=JPEG_BYTES)


@pytest.fixture
def session(captured_image: CapturedImage) -> PendingMeal:
    return PendingMeal(image=captured_image)


@pytest.fixture
def make_ingredient() -> Callable[..., Ingredient]:
    """Factory for ingredients with sequential ids."""
    counter = {"n": 0}

    def _make(
        calories: float = 0.0,
        protein_g: float = 0.0,
        carbs_g: float = 0.0,
        fat_g: float = 0.0,
        **kwargs,
    ) -> Ingredient:
        counter["n"] += 1
        kwargs.setdefault("id", f"test_{counter['n']}")
        kwargs.setdefault("name", f"ingredient {counter['n']}")
        return Ingredient(
            calories=calories,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fat_g=fat_g,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_analysis() -> AnalysisResult:
    """Analysis as the service reports it: string values, unedited totals."""
    return AnalysisResult(
        meal_name="Chicken and Rice",
        items=(
            AnalyzedItem(name="chicken breast", calories="248", protein="46.5", carbs="0", fat="5.4"),
            AnalyzedItem(name="white rice", calories="205", protein="4.3", carbs="44.5", fat="0.4"),
        ),
        totals=NutritionTotals(calories=453, protein_g=50.8, carbs_g=44.5, fat_g=5.8),
        description="Grilled chicken with rice",
    )
