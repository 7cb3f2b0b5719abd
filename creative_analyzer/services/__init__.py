"""Business logic services."""

from .accounts import ClientService, ConnectionService
from .analysis import AnalysisService
from .cache import AnalysisCache
from .insights import InsightsService
from .performance import PerformanceService

__all__ = [
    "AnalysisCache",
    "AnalysisService",
    "ClientService",
    "ConnectionService",
    "InsightsService",
    "PerformanceService",
]
