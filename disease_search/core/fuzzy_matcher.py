"""Edit-distance matching against the index vocabulary."""

from typing import Iterable, List

from rapidfuzz.distance import Levenshtein


class FuzzyMatcher:
    """Finds vocabulary keys within a bounded Levenshtein distance."""

    def __init__(self, max_distance: int = 2) -> None:
        """
        Initialize the fuzzy matcher.

        Args:
            max_distance: Largest edit distance counted as a match
        """
        self.max_distance = max_distance

    def distance(self, source: str, target: str) -> int:
        """Unit-cost insert/delete/substitute distance between two strings."""
        return Levenshtein.distance(source, target)

    def find_matches(self, word: str, vocabulary: Iterable[str]) -> List[str]:
        """
        Find vocabulary keys close to ``word``.

        Distance 0 is excluded: exact hits are looked up directly.
        Every key is compared, so cost grows with vocabulary size.

        Args:
            word: Query stem
            vocabulary: Candidate keys, in the order they should be returned

        Returns:
            Keys with ``0 < distance <= max_distance``
        """
        if not word or self.max_distance <= 0:
            return []

        cutoff = self.max_distance
        matches = []
        for key in vocabulary:
            # score_cutoff lets rapidfuzz stop early once the bound is exceeded
            distance = Levenshtein.distance(word, key, score_cutoff=cutoff)
            if 0 < distance <= cutoff:
                matches.append(key)
        return matches
