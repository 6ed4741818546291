"""Core search engine functionality."""

from .cache import QueryCache
from .engine import SearchEngine
from .fuzzy_matcher import FuzzyMatcher
from .index import InvertedIndex
from .locking import ReadWriteLock
from .normalizer import TextNormalizer
from .scorer import FieldScorer
from .stemmer import Stemmer, stem
from .synonyms import SynonymTable

__all__ = [
    "SearchEngine",
    "FuzzyMatcher",
    "TextNormalizer",
    "InvertedIndex",
    "QueryCache",
    "ReadWriteLock",
    "FieldScorer",
    "Stemmer",
    "stem",
    "SynonymTable",
]
