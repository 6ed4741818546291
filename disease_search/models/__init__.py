"""Data models for the disease search engine."""

from .document import Disease, coerce_disease
from .request import BoostFactors, FilterCriteria, SearchConfig
from .response import (
    FieldSuggestion,
    HighlightSegment,
    Recommendation,
    SearchResult,
    SearchStats,
)

__all__ = [
    "Disease",
    "coerce_disease",
    "BoostFactors",
    "FilterCriteria",
    "SearchConfig",
    "FieldSuggestion",
    "HighlightSegment",
    "Recommendation",
    "SearchResult",
    "SearchStats",
]
