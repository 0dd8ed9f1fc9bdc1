"""Submission ports."""

from .meal_store import IMealStore

__all__ = ["IMealStore"]
