"""Static domain synonym groups."""

from typing import Dict, Iterable, List, Tuple

SYNONYM_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("bird", "poultry", "fowl", "chicken", "hen", "rooster"),
    ("disease", "illness", "condition", "disorder", "infection"),
    ("symptom", "sign", "indication", "manifestation"),
    ("treatment", "therapy", "cure", "remedy", "medication"),
    ("prevention", "prophylaxis", "precaution", "protection"),
    ("respiratory", "breathing", "lung", "airway"),
    ("digestive", "gastrointestinal", "stomach", "intestinal"),
    ("viral", "virus", "viral infection"),
    ("bacterial", "bacteria", "bacterial infection"),
    ("parasitic", "parasite", "parasitic infection"),
)


class SynonymTable:
    """Bidirectional lookup from a word to the full group it belongs to."""

    def __init__(self, groups: Iterable[Iterable[str]] = SYNONYM_GROUPS) -> None:
        """
        Build the lookup table.

        Args:
            groups: Synonym groups; every member maps to its whole group,
                itself included. A word listed in several groups maps to
                the last one.
        """
        self._table: Dict[str, List[str]] = {}
        for group in groups:
            members = [word.lower() for word in group]
            for word in members:
                self._table[word] = members

    def get(self, word: str) -> List[str]:
        """Return the synonym group of ``word`` or an empty list."""
        return list(self._table.get(word.lower(), []))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._table

    def __len__(self) -> int:
        return len(self._table)
