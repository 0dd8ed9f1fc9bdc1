"""Unit tests for core value objects."""

import pytest

from mealsnap.domain.meal.core.value_objects import (
    BUSY_STATUSES,
    Language,
    NutritionTotals,
    SessionStatus,
)


class TestSessionStatus:
    @pytest.mark.parametrize(
        "status",
        [
            SessionStatus.CAPTURING,
            SessionStatus.ANALYZING,
            SessionStatus.RE_ANALYZING,
            SessionStatus.SUBMITTING,
        ],
    )
    def test_busy_statuses(self, status):
        assert status.is_busy()
        assert status in BUSY_STATUSES

    @pytest.mark.parametrize(
        "status",
        [
            SessionStatus.IDLE,
            SessionStatus.AWAITING_ANALYSIS,
            SessionStatus.EDITING,
            SessionStatus.COMMITTED,
            SessionStatus.FAILED,
        ],
    )
    def test_idle_statuses(self, status):
        assert not status.is_busy()

    def test_terminal_statuses(self):
        assert SessionStatus.COMMITTED.is_terminal()
        assert SessionStatus.FAILED.is_terminal()
        assert not SessionStatus.EDITING.is_terminal()

    def test_wire_values(self):
        assert SessionStatus.AWAITING_ANALYSIS.value == "awaitingAnalysis"
        assert SessionStatus.RE_ANALYZING.value == "reAnalyzing"


class TestLanguage:
    @pytest.mark.parametrize("code, expected", [("en", Language.ENGLISH), (" HE ", Language.HEBREW)])
    def test_from_code(self, code, expected):
        assert Language.from_code(code) is expected

    def test_unsupported_code(self):
        with pytest.raises(ValueError, match="Unsupported language"):
            Language.from_code("fr")

    def test_rtl(self):
        assert Language.HEBREW.is_rtl()
        assert not Language.ENGLISH.is_rtl()


class TestNutritionTotals:
    def test_zero(self):
        assert NutritionTotals.zero().to_dict() == {
            "calories": 0.0,
            "protein_g": 0.0,
            "carbs_g": 0.0,
            "fat_g": 0.0,
            "fiber_g": 0.0,
            "sugar_g": 0.0,
            "sodium_mg": 0.0,
        }

    def test_rounded_is_display_only(self):
        totals = NutritionTotals(calories=300.6, protein_g=14.4)

        assert totals.rounded()["calories"] == 301
        assert totals.rounded()["protein_g"] == 14
        assert totals.calories == 300.6
