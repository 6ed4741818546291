"""Main search engine implementation."""

import threading
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import structlog
from pydantic import ValidationError

from ..catalog import filter_diseases
from ..config import Settings
from ..exceptions import InvalidSearchConfigError
from ..models.document import Disease, DiseaseInput, coerce_disease
from ..models.request import FilterCriteria, SearchConfig
from ..models.response import SearchResult, SearchStats
from .cache import QueryCache
from .fuzzy_matcher import FuzzyMatcher
from .index import InvertedIndex
from .locking import ReadWriteLock
from .normalizer import TextNormalizer
from .scorer import FieldScorer
from .stemmer import Stemmer
from .synonyms import SynonymTable

logger = structlog.get_logger(__name__)

ConfigUpdate = Union[SearchConfig, Mapping[str, Any]]


class SearchEngine:
    """
    Fuzzy, field-weighted search over an in-memory disease corpus.

    ``build_index`` is the only operation that replaces the corpus. Every
    rebuild starts a new generation with an empty query cache; searches and
    suggestions read one consistent generation under a shared lock.
    """

    def __init__(
        self,
        config: Optional[ConfigUpdate] = None,
        cache_max_size: int = 100,
        max_query_length: int = 200,
        min_suggestion_length: int = 2,
        highlight_tag: str = "mark",
    ) -> None:
        """
        Initialize the search engine.

        Args:
            config: Initial search configuration (partial mappings are merged
                over the defaults)
            cache_max_size: Number of queries kept in the result cache
            max_query_length: Longer queries return no results
            min_suggestion_length: Shorter prefixes return no suggestions
            highlight_tag: Element name used to mark highlighted matches

        Raises:
            InvalidSearchConfigError: If ``config`` is invalid
        """
        self.cache_max_size = cache_max_size
        self.max_query_length = max_query_length
        self.min_suggestion_length = min_suggestion_length
        self.highlight_tag = highlight_tag

        self.normalizer = TextNormalizer()
        self.synonyms = SynonymTable()
        self._config = self._merge_config(SearchConfig(), config or {})
        self._lock = ReadWriteLock()

        # An engine that has never been built behaves like an empty corpus
        self._index = self._new_index([])
        self._cache: QueryCache[List[SearchResult]] = QueryCache(cache_max_size)

        self._stats_lock = threading.Lock()
        self._stats = {
            "total_queries": 0,
            "cache_hits": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
            "index_builds": 0,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchEngine":
        """Create an engine configured from application settings."""
        return cls(
            config={
                "enable_fuzzy_search": settings.enable_fuzzy_search,
                "max_fuzzy_distance": settings.max_fuzzy_distance,
                "enable_stemming": settings.enable_stemming,
                "enable_synonyms": settings.enable_synonyms,
            },
            cache_max_size=settings.cache_max_size,
            max_query_length=settings.max_query_length,
            min_suggestion_length=settings.min_suggestion_length,
            highlight_tag=settings.highlight_tag,
        )

    @property
    def config(self) -> SearchConfig:
        """A copy of the active configuration."""
        return self._config.model_copy(deep=True)

    def build_index(self, diseases: Iterable[DiseaseInput]) -> None:
        """
        Replace the corpus and rebuild the index from scratch.

        Args:
            diseases: Full corpus; mappings are coerced to ``Disease`` and
                missing fields treated as empty
        """
        corpus = [coerce_disease(d) for d in diseases]
        index = self._new_index(corpus)

        with self._lock.write_locked():
            self._index = index
            self._cache = QueryCache(self.cache_max_size)
            self._count("index_builds")

    def search(self, query: str) -> List[SearchResult]:
        """
        Search the corpus.

        Args:
            query: Free-text query

        Returns:
            Results sorted by descending score. Repeating a query within the
            same generation returns the cached list object itself.
        """
        if not query or not query.strip():
            return []

        if len(query) > self.max_query_length:
            logger.warning(
                "query_too_long",
                query_length=len(query),
                max_query_length=self.max_query_length,
            )
            return []

        with self._lock.read_locked():
            return self._search(query)

    def _search(self, query: str) -> List[SearchResult]:
        start_time = time.time()
        self._count("total_queries")

        cache_key = self.normalizer.cache_key(query)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._count("cache_hits")
            logger.debug("search_cache_hit", query=cache_key, result_count=len(cached))
            return cached

        index = self._index
        config = self._config
        scorer = FieldScorer(config.boost_factors, self.highlight_tag)
        fuzzy_matcher = FuzzyMatcher(config.max_fuzzy_distance)
        query_words = self.normalizer.tokenize(query)

        # position -> [score, matched fields]; insertion order breaks score ties
        candidates: Dict[int, List[Any]] = {}

        for word in query_words:
            stemmed = index.stem(word)
            positions = dict.fromkeys(index.lookup(stemmed))

            if config.enable_fuzzy_search:
                for key in fuzzy_matcher.find_matches(stemmed, index.iter_vocabulary()):
                    positions.update(dict.fromkeys(index.lookup(key)))

            for position in positions:
                # Candidates found through a stem may still score zero here:
                # scoring uses the literal word against raw field text
                field_scores = scorer.score_fields(index.document(position), word)
                entry = candidates.setdefault(position, [0.0, {}])
                entry[0] += sum(field_scores.values())
                for field, score in field_scores.items():
                    if score > 0:
                        entry[1][field] = None

        results = [
            SearchResult(
                disease=index.document(position),
                score=score,
                matched_fields=list(fields),
                highlighted_text=scorer.highlight(index.document(position), query_words),
            )
            for position, (score, fields) in candidates.items()
        ]
        results.sort(key=lambda r: r.score, reverse=True)

        self._cache.put(cache_key, results)

        execution_time = (time.time() - start_time) * 1000
        self._count("total_execution_time", execution_time)
        if not results:
            self._count("no_matches")

        logger.info(
            "search_completed",
            query_length=len(query),
            result_count=len(results),
            elapsed_ms=round(execution_time, 3),
        )
        return results

    def get_suggestions(self, prefix: str, limit: int = 5) -> List[str]:
        """
        Typeahead over the index vocabulary.

        Prefix matches come first, in vocabulary order; when there are fewer
        than ``limit`` of them and fuzzy search is on, fuzzy matches of the
        prefix fill the rest. Suggestions are stems, not ranked.

        Args:
            prefix: Partial user input
            limit: Maximum number of suggestions

        Returns:
            At most ``limit`` vocabulary keys
        """
        if not prefix or len(prefix) < self.min_suggestion_length or limit <= 0:
            return []

        partial = prefix.lower()
        with self._lock.read_locked():
            index = self._index
            config = self._config

            suggestions: Dict[str, None] = {}
            for key in index.iter_vocabulary():
                if len(suggestions) >= limit:
                    break
                if key.startswith(partial):
                    suggestions[key] = None

            if len(suggestions) < limit and config.enable_fuzzy_search:
                fuzzy_matcher = FuzzyMatcher(config.max_fuzzy_distance)
                matches = fuzzy_matcher.find_matches(partial, index.iter_vocabulary())
                for key in matches[: limit - len(suggestions)]:
                    suggestions[key] = None

        return list(suggestions)[:limit]

    def search_with_filters(
        self, query: str, criteria: Optional[FilterCriteria] = None
    ) -> List[SearchResult]:
        """
        Ranked search restricted by facet filters.

        An empty query lists the whole filtered corpus with zero scores.
        """
        if query and query.strip():
            results = self.search(query)
            allowed = {id(d) for d in filter_diseases((r.disease for r in results), criteria)}
            return [r for r in results if id(r.disease) in allowed]

        with self._lock.read_locked():
            diseases = self._index.diseases
        return [
            SearchResult(disease=disease, score=0.0)
            for disease in filter_diseases(diseases, criteria)
        ]

    def update_config(self, partial: Optional[ConfigUpdate] = None, **changes: Any) -> None:
        """
        Merge configuration changes and drop cached results.

        Keys may be given in snake_case or camelCase; ``boost_factors`` is
        merged field by field. Stemming and synonym changes apply from the
        next ``build_index``.

        Raises:
            InvalidSearchConfigError: If the merged configuration is invalid;
                the previous configuration and cache are kept
        """
        update: Dict[str, Any] = self._as_update(partial)
        update.update(changes)

        with self._lock.write_locked():
            self._config = self._merge_config(self._config, update)
            self._cache = QueryCache(self.cache_max_size)

        logger.info("search_config_updated", changed=sorted(update))

    def clear_cache(self) -> None:
        """Empty the query cache; the stem memo is kept."""
        with self._lock.write_locked():
            self._cache = QueryCache(self.cache_max_size)

    def get_search_stats(self) -> SearchStats:
        """Vocabulary, cache and corpus sizes for the current generation."""
        with self._lock.read_locked():
            index_size = len(self._index)
            total = len(self._index.diseases)
            return SearchStats(
                index_size=index_size,
                cache_size=len(self._cache),
                total_diseases=total,
                average_words_per_disease=index_size / total if total else 0.0,
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get engine query statistics."""
        with self._stats_lock:
            stats = self._stats.copy()

        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["cache_hit_rate"] = stats["cache_hits"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["cache_hit_rate"] = 0.0

        with self._lock.read_locked():
            stats["index_stats"] = self._index.get_stats()
            stats["cache_stats"] = self._cache.get_stats()
        return stats

    def _count(self, key: str, amount: float = 1) -> None:
        with self._stats_lock:
            self._stats[key] += amount

    @property
    def diseases(self) -> List[Disease]:
        """The corpus of the current generation."""
        with self._lock.read_locked():
            return list(self._index.diseases)

    def _new_index(self, corpus: List[Disease]) -> InvertedIndex:
        config = self._config
        return InvertedIndex.build(
            corpus,
            normalizer=self.normalizer,
            stemmer=Stemmer(enabled=config.enable_stemming),
            synonyms=self.synonyms if config.enable_synonyms else None,
        )

    @staticmethod
    def _as_update(partial: Optional[ConfigUpdate]) -> Dict[str, Any]:
        if partial is None:
            return {}
        if isinstance(partial, SearchConfig):
            return partial.model_dump(exclude_unset=True)
        return dict(partial)

    @staticmethod
    def _merge_config(current: SearchConfig, update: Mapping[str, Any]) -> SearchConfig:
        """Overlay ``update`` on ``current`` and validate the result."""
        aliases = {field.alias: name for name, field in SearchConfig.model_fields.items()}
        data = current.model_dump()

        for key, value in update.items():
            name = aliases.get(key, key)
            if name == "boost_factors" and isinstance(value, Mapping):
                data[name] = {**data[name], **value}
            elif name == "boost_factors" and hasattr(value, "model_dump"):
                data[name] = {**data[name], **value.model_dump(exclude_unset=True)}
            else:
                data[name] = value

        try:
            return SearchConfig.model_validate(data)
        except ValidationError as exc:
            logger.warning("search_config_rejected", errors=exc.errors(include_url=False))
            raise InvalidSearchConfigError(
                f"Invalid search configuration: {exc.error_count()} error(s)",
                errors=exc.errors(include_url=False),
            ) from exc
