"""Analysis entities."""

from .analysis_result import AnalysisResult, AnalyzedItem

__all__ = ["AnalysisResult", "AnalyzedItem"]
