"""Nutrition domain services."""

from .aggregator import NutritionAggregator

__all__ = ["NutritionAggregator"]
