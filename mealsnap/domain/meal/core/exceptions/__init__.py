"""Meal capture domain exceptions."""

from .domain_errors import (
    AnalysisError,
    CaptureError,
    IngredientNotFoundError,
    InvalidImageError,
    InvalidTransitionError,
    MealCaptureError,
    NetworkError,
    OperationCancelledError,
    ServiceError,
    SubmissionError,
    ValidationError,
)

__all__ = [
    "MealCaptureError",
    "CaptureError",
    "AnalysisError",
    "NetworkError",
    "ServiceError",
    "InvalidImageError",
    "ValidationError",
    "IngredientNotFoundError",
    "SubmissionError",
    "InvalidTransitionError",
    "OperationCancelledError",
]
