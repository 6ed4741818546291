"""Inverted index from stemmed tokens to document positions."""

import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from ..models.document import Disease
from .normalizer import TextNormalizer
from .stemmer import Stemmer
from .synonyms import SynonymTable

logger = structlog.get_logger(__name__)


class InvertedIndex:
    """
    One generation of the search index.

    Built once from a full corpus and never patched afterwards: a new corpus
    means a new ``InvertedIndex``. Stemming and synonym settings are fixed at
    build time so queries are stemmed the same way the documents were.
    """

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        stemmer: Optional[Stemmer] = None,
        synonyms: Optional[SynonymTable] = None,
    ) -> None:
        """
        Initialize an empty index.

        Args:
            normalizer: Tokenizer used for document text
            stemmer: Stemmer applied to every token
            synonyms: Synonym table, or None to skip synonym expansion
        """
        self.normalizer = normalizer or TextNormalizer()
        self.stemmer = stemmer or Stemmer()
        self.synonyms = synonyms
        self._postings: Dict[str, List[int]] = {}
        self._diseases: Tuple[Disease, ...] = ()
        self._stats = {
            "total_documents": 0,
            "total_postings": 0,
            "build_time_ms": 0.0,
        }

    @classmethod
    def build(
        cls,
        diseases: Sequence[Disease],
        normalizer: Optional[TextNormalizer] = None,
        stemmer: Optional[Stemmer] = None,
        synonyms: Optional[SynonymTable] = None,
    ) -> "InvertedIndex":
        """Create and populate an index for ``diseases``."""
        index = cls(normalizer=normalizer, stemmer=stemmer, synonyms=synonyms)
        index._populate(diseases)
        return index

    def _populate(self, diseases: Sequence[Disease]) -> None:
        start_time = time.time()
        self._diseases = tuple(diseases)

        for position, disease in enumerate(self._diseases):
            for word in self.normalizer.tokenize(disease.searchable_text()):
                self._add(self.stemmer.stem(word), position)

                if self.synonyms is not None:
                    for synonym in self.synonyms.get(word):
                        self._add(self.stemmer.stem(synonym), position)

        self._stats["total_documents"] = len(self._diseases)
        self._stats["total_postings"] = sum(len(p) for p in self._postings.values())
        self._stats["build_time_ms"] = (time.time() - start_time) * 1000

        logger.info(
            "search_index_built",
            total_diseases=len(self._diseases),
            vocabulary_size=len(self._postings),
            elapsed_ms=round(self._stats["build_time_ms"], 3),
        )

    def _add(self, key: str, position: int) -> None:
        postings = self._postings.setdefault(key, [])
        # Documents are added in position order, so a duplicate is always last
        if not postings or postings[-1] != position:
            postings.append(position)

    def stem(self, word: str) -> str:
        """Stem a query word the way this index stemmed its documents."""
        return self.stemmer.stem(word)

    def lookup(self, key: str) -> List[int]:
        """
        Get document positions for a vocabulary key.

        Args:
            key: Stemmed token

        Returns:
            Positions in ascending order, empty if the key is unknown
        """
        return list(self._postings.get(key, ()))

    def vocabulary(self) -> List[str]:
        """All keys in insertion order."""
        return list(self._postings.keys())

    def iter_vocabulary(self) -> Iterable[str]:
        return iter(self._postings)

    def __contains__(self, key: object) -> bool:
        return key in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    def document(self, position: int) -> Disease:
        return self._diseases[position]

    @property
    def diseases(self) -> Tuple[Disease, ...]:
        return self._diseases

    def get_stats(self) -> Dict[str, float]:
        """Get index statistics."""
        stats = dict(self._stats)
        stats["vocabulary_size"] = len(self._postings)
        return stats
