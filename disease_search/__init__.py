"""
Disease Search - fuzzy, field-weighted search for a disease glossary.

Builds an inverted index over an in-memory corpus of disease entries and
answers free-text queries with ranked, highlighted results and typeahead
suggestions, tolerating typos through edit-distance matching.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .exceptions import InvalidSearchConfigError
from .models import Disease, FilterCriteria, SearchConfig, SearchResult, SearchStats

__all__ = [
    "SearchEngine",
    "InvalidSearchConfigError",
    "Disease",
    "FilterCriteria",
    "SearchConfig",
    "SearchResult",
    "SearchStats",
]
