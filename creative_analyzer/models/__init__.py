"""Data models."""

from .analysis import AnalysisResult, error_result
from .client import Client
from .creative import Creative, CreativeSet, SQUARE_LIKE, VERTICAL
from .history import AnalysisHistoryEntry
from .performance import MatchedPerformanceRecord, PerformanceRecord
from .placement import PLACEMENTS, Placement

__all__ = [
    "AnalysisResult",
    "error_result",
    "Client",
    "Creative",
    "CreativeSet",
    "SQUARE_LIKE",
    "VERTICAL",
    "AnalysisHistoryEntry",
    "MatchedPerformanceRecord",
    "PerformanceRecord",
    "PLACEMENTS",
    "Placement",
]
