"""Core value objects for the meal capture domain.

Immutable value objects that form the building blocks of the session.
"""

from .language import Language
from .nutrition_totals import NutritionTotals
from .session_status import BUSY_STATUSES, SessionStatus

__all__ = [
    "BUSY_STATUSES",
    "Language",
    "NutritionTotals",
    "SessionStatus",
]
