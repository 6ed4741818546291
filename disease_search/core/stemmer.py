"""Heuristic suffix-stripping stemmer."""

from functools import lru_cache
from typing import Tuple

# Order matters: the first suffix that applies wins.
SUFFIXES: Tuple[str, ...] = ("ing", "ed", "er", "est", "ly", "tion", "sion", "ness", "ment")


@lru_cache(maxsize=None)
def stem(word: str) -> str:
    """
    Strip the first matching suffix from ``word``.

    A suffix is only removed when the word is longer than the suffix plus two
    characters. Results are memoized for the lifetime of the process.

    Args:
        word: Lowercase token

    Returns:
        The stemmed token
    """
    for suffix in SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix) + 2:
            return word[: -len(suffix)]
    return word


class Stemmer:
    """Stemming that can be switched off."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def stem(self, word: str) -> str:
        if not self.enabled:
            return word
        return stem(word)

    @staticmethod
    def cache_size() -> int:
        """Number of memoized stems."""
        return stem.cache_info().currsize
