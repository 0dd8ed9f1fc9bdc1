"""Analysis ports."""

from .analysis_gateway import IAnalysisGateway

__all__ = ["IAnalysisGateway"]
