"""Glossary helpers that work directly on a disease corpus."""

import re
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models.document import Disease
from .models.request import FilterCriteria
from .models.response import FieldSuggestion, HighlightSegment, Recommendation

# (exact, starts with, contains) scores per suggestion type
SUGGESTION_SCORES: Dict[str, Tuple[int, int, int]] = {
    "disease": (100, 80, 60),
    "symptom": (90, 70, 50),
    "cause": (85, 65, 45),
    "tag": (75, 55, 35),
}

KNOWN_CATEGORIES = ("viral", "bacterial", "parasitic", "nutritional", "genetic", "environmental")
KNOWN_SEVERITIES = ("low", "moderate", "high")
KNOWN_SPECIES = ("chickens", "turkeys", "ducks", "geese")


def filter_diseases(diseases: Iterable[Disease], criteria: Optional[FilterCriteria]) -> List[Disease]:
    """
    Apply category, severity and species filters.

    Args:
        diseases: Diseases to filter, order is preserved
        criteria: Filters; empty lists leave that facet unfiltered

    Returns:
        Matching diseases
    """
    filtered = list(diseases)
    if criteria is None:
        return filtered

    if criteria.categories:
        filtered = [d for d in filtered if d.category in criteria.categories]
    if criteria.severities:
        filtered = [d for d in filtered if d.severity in criteria.severities]
    if criteria.species:
        filtered = [d for d in filtered if any(s in criteria.species for s in d.common_in)]
    return filtered


def _suggestion_score(text: str, term: str, kind: str) -> Optional[int]:
    lowered = text.lower()
    if term not in lowered:
        return None
    exact, prefix, contains = SUGGESTION_SCORES[kind]
    if lowered == term:
        return exact
    if lowered.startswith(term):
        return prefix
    return contains


def field_suggestions(
    diseases: Iterable[Disease], query: str, limit: int = 8
) -> List[FieldSuggestion]:
    """
    Typed typeahead over disease names, symptoms, causes and tags.

    Args:
        diseases: Corpus to draw suggestions from
        query: Partial user input
        limit: Maximum number of suggestions

    Returns:
        Suggestions sorted by score, one per distinct (case-insensitive) text
    """
    term = (query or "").lower().strip()
    if len(term) < 2 or limit <= 0:
        return []

    best: Dict[str, FieldSuggestion] = {}

    def offer(text: str, kind: str, disease: Optional[Disease] = None) -> None:
        score = _suggestion_score(text, term, kind)
        if score is None:
            return
        key = text.lower()
        existing = best.get(key)
        if existing is None or score > existing.score:
            # Re-insert so the newer, better entry takes the later slot
            best.pop(key, None)
            best[key] = FieldSuggestion(text=text, type=kind, score=score, disease=disease)

    for disease in diseases:
        offer(disease.name, "disease", disease)
        for symptom in disease.symptoms:
            offer(symptom, "symptom")
        for cause in disease.causes:
            offer(cause, "cause")
        for tag in disease.tags:
            offer(tag, "tag")

    ranked = sorted(best.values(), key=lambda s: s.score, reverse=True)
    return ranked[:limit]


def highlight_segments(text: str, query: str) -> List[HighlightSegment]:
    """Split ``text`` into highlighted and plain runs around ``query``."""
    if not query or not query.strip():
        return [HighlightSegment(text=text, is_highlighted=False)]

    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    # With a capturing group, odd indices are the matches
    return [
        HighlightSegment(text=part, is_highlighted=i % 2 == 1)
        for i, part in enumerate(pattern.split(text))
    ]


def popular_terms(diseases: Iterable[Disease], limit: int = 10) -> List[str]:
    """Most frequent names, symptoms and categories, weighted 3/1/2."""
    frequency: Counter = Counter()
    for disease in diseases:
        frequency[disease.name] += 3
        for symptom in disease.symptoms:
            frequency[symptom] += 1
        frequency[disease.category] += 2
    return [term for term, _ in frequency.most_common(limit)]


def recommend_diseases(
    diseases: Iterable[Disease],
    symptoms: Sequence[str],
    species: Optional[str] = None,
    severity: Optional[str] = None,
    limit: int = 10,
) -> List[Recommendation]:
    """
    Rank diseases against observed symptoms.

    Args:
        diseases: Corpus to rank
        symptoms: Observed symptoms, matched as case-insensitive substrings
        species: Optional species that must appear in ``common_in`` for a bonus
        severity: Optional severity for a bonus
        limit: Maximum number of recommendations

    Returns:
        Diseases with a positive score, best first
    """
    wanted = [s.lower() for s in symptoms if s]
    results = []

    for disease in diseases:
        score = 0.0
        disease_symptoms = [s.lower() for s in disease.symptoms]
        matched = [s for s in wanted if any(s in ds for ds in disease_symptoms)]

        if wanted:
            score += len(matched) / len(wanted) * 50
        if species and species in disease.common_in:
            score += 25
        if severity and disease.severity == severity:
            score += 15
        if wanted and len(matched) >= len(wanted) * 0.7:
            score += 10

        if score > 0:
            results.append(Recommendation(disease=disease, score=score))

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]


def corpus_stats(diseases: Sequence[Disease]) -> Dict[str, object]:
    """Counts of diseases by category, severity and species."""
    by_category = {category: 0 for category in KNOWN_CATEGORIES}
    by_severity = {severity: 0 for severity in KNOWN_SEVERITIES}
    by_species = {species: 0 for species in KNOWN_SPECIES}

    for disease in diseases:
        if disease.category:
            by_category[disease.category] = by_category.get(disease.category, 0) + 1
        if disease.severity:
            by_severity[disease.severity] = by_severity.get(disease.severity, 0) + 1
        for species in disease.common_in:
            normalized = species.lower()
            if normalized in by_species:
                by_species[normalized] += 1

    return {
        "total": len(diseases),
        "by_category": by_category,
        "by_severity": by_severity,
        "by_species": by_species,
    }


def disease_by_id(diseases: Iterable[Disease], disease_id: str) -> Optional[Disease]:
    """Return the disease with ``disease_id`` or None."""
    return next((d for d in diseases if d.id == disease_id), None)


def diseases_by_category(diseases: Iterable[Disease], category: str) -> List[Disease]:
    return [d for d in diseases if d.category == category]


def related_diseases(
    diseases: Sequence[Disease], disease_id: str, fallback_limit: int = 3
) -> List[Disease]:
    """
    Diseases related to ``disease_id``.

    Explicit ``related_diseases`` ids win. Without any resolvable ids, other
    diseases of the same category are returned instead.

    Args:
        diseases: Corpus to search
        disease_id: Id of the disease to find relatives for
        fallback_limit: Maximum number of same-category diseases

    Returns:
        Related diseases in corpus order, empty for an unknown id
    """
    disease = disease_by_id(diseases, disease_id)
    if disease is None:
        return []

    related = [d for d in diseases if d.id in disease.related_diseases]
    if related:
        return related

    same_category = [
        d for d in diseases if d.id != disease_id and d.category == disease.category
    ]
    return same_category[:fallback_limit]
