"""Unit tests for the glossary catalog helpers."""

import pytest
from disease_search.catalog import (
    corpus_stats,
    disease_by_id,
    diseases_by_category,
    field_suggestions,
    filter_diseases,
    highlight_segments,
    popular_terms,
    recommend_diseases,
    related_diseases,
)
from disease_search.models import Disease, FilterCriteria


@pytest.fixture
def diseases():
    """Small glossary corpus."""
    return [
        Disease(
            id="newcastle",
            name="Newcastle Disease",
            category="viral",
            severity="high",
            symptoms=["respiratory distress", "high fever", "coughing"],
            causes=["Paramyxovirus type 1"],
            tags=["viral", "respiratory"],
            common_in=["chickens", "turkeys"],
        ),
        Disease(
            id="cholera",
            name="Fowl Cholera",
            category="bacterial",
            severity="high",
            symptoms=["sudden death", "diarrhea"],
            causes=["Pasteurella multocida"],
            tags=["fowl", "bacterial"],
            common_in=["ducks", "geese"],
        ),
        Disease(
            id="coccidiosis",
            name="Coccidiosis",
            category="parasitic",
            severity="moderate",
            symptoms=["bloody diarrhea", "weight loss"],
            causes=["Eimeria parasites"],
            tags=["parasitic"],
            common_in=["chickens"],
        ),
    ]


class TestFilterDiseases:
    """Test cases for facet filtering."""

    def test_no_criteria(self, diseases):
        """Test missing or empty criteria keep everything."""
        assert filter_diseases(diseases, None) == diseases
        assert filter_diseases(diseases, FilterCriteria()) == diseases

    def test_filters_combine(self, diseases):
        """Test every non-empty facet must match."""
        criteria = FilterCriteria(severities=["high"], species=["chickens"])
        assert [d.id for d in filter_diseases(diseases, criteria)] == ["newcastle"]

    def test_category_filter(self, diseases):
        """Test category filtering."""
        criteria = FilterCriteria(categories=["parasitic", "bacterial"])
        assert [d.id for d in filter_diseases(diseases, criteria)] == ["cholera", "coccidiosis"]


class TestFieldSuggestions:
    """Test cases for typed typeahead."""

    def test_scores_by_type_and_position(self, diseases):
        """Test name and tag suggestions are scored by type."""
        suggestions = field_suggestions(diseases, "fowl")

        assert [(s.text, s.type, s.score) for s in suggestions] == [
            ("Fowl Cholera", "disease", 80),
            ("fowl", "tag", 75),
        ]
        assert suggestions[0].disease.id == "cholera"
        assert suggestions[1].disease is None

    def test_duplicates_keep_best_score(self, diseases):
        """Test duplicate texts keep their highest scoring entry."""
        suggestions = field_suggestions(diseases, "diarrhea")

        texts = [s.text.lower() for s in suggestions]
        assert texts == ["diarrhea", "bloody diarrhea"]
        assert suggestions[0].score == 90
        assert suggestions[1].score == 50

    def test_limit_and_short_query(self, diseases):
        """Test the limit and the two character minimum."""
        assert len(field_suggestions(diseases, "di", limit=2)) == 2
        assert field_suggestions(diseases, "d") == []
        assert field_suggestions(diseases, "") == []


class TestHighlightSegments:
    """Test cases for segment highlighting."""

    def test_split_around_matches(self):
        """Test text is split into highlighted and plain runs."""
        segments = highlight_segments("Newcastle disease, a Disease of birds", "disease")

        assert [s.text for s in segments if s.is_highlighted] == ["disease", "Disease"]
        assert "".join(s.text for s in segments) == "Newcastle disease, a Disease of birds"

    def test_regex_characters_are_literal(self):
        """Test the query is matched literally."""
        segments = highlight_segments("type (1) strain", "(1)")
        assert [s.text for s in segments if s.is_highlighted] == ["(1)"]

    def test_empty_query(self):
        """Test an empty query yields one plain segment."""
        segments = highlight_segments("Fowl Pox", "  ")
        assert len(segments) == 1
        assert segments[0].is_highlighted is False


class TestPopularTerms:
    """Test cases for popular term extraction."""

    def test_weighted_frequency(self, diseases):
        """Test names outrank categories which outrank symptoms."""
        terms = popular_terms(diseases, limit=4)

        assert terms[:3] == ["Newcastle Disease", "Fowl Cholera", "Coccidiosis"]
        assert terms[3] == "viral"

    def test_limit(self, diseases):
        """Test the limit is applied."""
        assert len(popular_terms(diseases, limit=2)) == 2


class TestRecommendDiseases:
    """Test cases for symptom-based recommendations."""

    def test_symptom_coverage(self, diseases):
        """Test full coverage earns the coverage bonus."""
        results = recommend_diseases(diseases, ["fever", "cough"])

        assert [r.disease.id for r in results] == ["newcastle"]
        assert results[0].score == pytest.approx(60.0)

    def test_species_and_severity_bonus(self, diseases):
        """Test species and severity bonuses."""
        results = recommend_diseases(diseases, ["diarrhea"], species="chickens", severity="moderate")

        assert results[0].disease.id == "coccidiosis"
        assert results[0].score == pytest.approx(50 + 25 + 15 + 10)
        assert {r.disease.id for r in results} == {"coccidiosis", "cholera", "newcastle"}

    def test_no_matches(self, diseases):
        """Test nothing is recommended without any signal."""
        assert recommend_diseases(diseases, ["feather loss"]) == []


class TestCorpusStats:
    """Test cases for corpus statistics."""

    def test_counts(self, diseases):
        """Test counts by category, severity and species."""
        stats = corpus_stats(diseases)

        assert stats["total"] == 3
        assert stats["by_category"]["viral"] == 1
        assert stats["by_category"]["genetic"] == 0
        assert stats["by_severity"]["high"] == 2
        assert stats["by_species"]["chickens"] == 2
        assert stats["by_species"]["geese"] == 1


class TestLookups:
    """Test cases for id and category lookups."""

    def test_disease_by_id(self, diseases):
        """Test lookup by id."""
        assert disease_by_id(diseases, "cholera").name == diseases[1].name
        assert disease_by_id(diseases, "unknown") is None

    def test_diseases_by_category(self, diseases):
        """Test lookup by category."""
        assert [d.id for d in diseases_by_category(diseases, "parasitic")] == ["coccidiosis"]
        assert diseases_by_category(diseases, "genetic") == []


class TestRelatedDiseases:
    """Test cases for related diseases."""

    @pytest.fixture
    def viral(self):
        """Five viral diseases, the first naming an explicit relative."""
        return [
            Disease.model_validate(
                {"id": "v0", "name": "Fowl Pox", "category": "viral", "relatedDiseases": ["v4"]}
            ),
            *(Disease(id=f"v{i}", name=f"Virus {i}", category="viral") for i in range(1, 5)),
        ]

    def test_explicit_ids(self, viral):
        """Test explicit related ids take precedence over the category."""
        assert [d.id for d in related_diseases(viral, "v0")] == ["v4"]

    def test_same_category_fallback(self, viral):
        """Test the fallback returns at most three other diseases of the category."""
        related = related_diseases(viral, "v1")

        assert [d.id for d in related] == ["v0", "v2", "v3"]
        assert all(d.id != "v1" for d in related)

    def test_unresolvable_ids_fall_back(self, viral):
        """Test ids missing from the corpus are ignored."""
        viral[2] = Disease(id="v2", category="viral", related_diseases=["gone"])
        assert [d.id for d in related_diseases(viral, "v2")] == ["v0", "v1", "v3"]

    def test_only_member_of_category(self, diseases):
        """Test a lone disease in its category has no relatives."""
        assert related_diseases(diseases, "newcastle") == []

    def test_unknown_id(self, diseases):
        """Test an unknown id yields nothing."""
        assert related_diseases(diseases, "unknown") == []
