"""Unit tests for field scoring and highlighting."""

import pytest
from disease_search.core.scorer import FieldScorer
from disease_search.models import BoostFactors, Disease


class TestFieldScorer:
    """Test cases for the FieldScorer class."""

    @pytest.fixture
    def scorer(self):
        """Create a scorer with default boosts."""
        return FieldScorer(BoostFactors())

    def test_whole_word_at_start(self, scorer):
        """Test contains, word boundary and full position bonus."""
        assert scorer.score_text("viral disease", "viral") == pytest.approx(1.8)

    def test_position_bonus_decreases(self, scorer):
        """Test later occurrences earn a smaller position bonus."""
        expected = 1.0 + 0.5 + (1 - 4 / 9) * 0.3
        assert scorer.score_text("abc viral", "viral") == pytest.approx(expected)

    def test_substring_without_word_boundary(self, scorer):
        """Test partial-word matches miss the boundary bonus."""
        assert scorer.score_text("viruses", "virus") == pytest.approx(1.3)

    def test_case_insensitive(self, scorer):
        """Test that field text is lowercased before matching."""
        assert scorer.score_text("Newcastle Disease", "newcastle") == pytest.approx(1.8)

    def test_no_match(self, scorer):
        """Test absent words score zero."""
        assert scorer.score_text("viral disease", "bacterial") == 0.0
        assert scorer.score_text("", "viral") == 0.0

    def test_boost_factors_applied(self, scorer):
        """Test field boosts multiply the raw score."""
        disease = Disease(name="viral", tags=["viral"], description="viral")
        scores = scorer.score_fields(disease, "viral")
        assert scores["name"] == pytest.approx(1.8 * 3.0)
        assert scores["tags"] == pytest.approx(1.8 * 2.5)
        assert scores["description"] == pytest.approx(1.8 * 1.0)
        assert scores["symptoms"] == 0.0
        assert scores["causes"] == 0.0

    def test_list_fields_are_joined(self, scorer):
        """Test list fields are scored as one space-joined text."""
        disease = Disease(symptoms=["sneezing", "fever"])
        scores = scorer.score_fields(disease, "fever")
        expected = (1.0 + 0.5 + (1 - 9 / 14) * 0.3) * 2.0
        assert scores["symptoms"] == pytest.approx(expected)

    def test_zero_boost(self):
        """Test a zero boost silences a field."""
        scorer = FieldScorer(BoostFactors(name=0.0))
        assert scorer.score_fields(Disease(name="viral"), "viral")["name"] == 0.0

    def test_highlight_marks_every_occurrence(self, scorer):
        """Test case-insensitive highlighting in name, description and symptoms."""
        disease = Disease(
            name="Viral Arthritis",
            description="A viral disease. Viral spread is fast.",
            symptoms=["lameness", "viral shedding"],
            causes=["viral agent"],
            tags=["viral"],
        )
        highlights = scorer.highlight(disease, ["viral"])
        assert highlights["name"] == "<mark>Viral</mark> Arthritis"
        assert highlights["description"] == (
            "A <mark>viral</mark> disease. <mark>Viral</mark> spread is fast."
        )
        assert highlights["symptoms"] == "lameness, <mark>viral</mark> shedding"
        assert set(highlights) == {"name", "description", "symptoms"}

    def test_highlight_multiple_words(self, scorer):
        """Test several query words are marked without nesting."""
        highlights = scorer.highlight(Disease(name="Fowl Pox"), ["fowl", "pox"])
        assert highlights["name"] == "<mark>Fowl</mark> <mark>Pox</mark>"

    def test_highlight_custom_tag(self):
        """Test the highlight element is configurable."""
        scorer = FieldScorer(BoostFactors(), highlight_tag="em")
        assert scorer.highlight(Disease(name="Fowl Pox"), ["pox"])["name"] == "Fowl <em>Pox</em>"

    def test_highlight_without_words(self, scorer):
        """Test text is returned unchanged when nothing is highlighted."""
        highlights = scorer.highlight(Disease(name="Fowl Pox"), [])
        assert highlights["name"] == "Fowl Pox"

    def test_highlight_word_inside_another_word(self, scorer):
        """Test a word contained in a longer query word is still inside a mark."""
        disease = Disease(name="Newcastle Disease", description="castle and newcastle")
        highlights = scorer.highlight(disease, ["newcastle", "castle"])

        assert highlights["name"] == "<mark>Newcastle</mark> Disease"
        assert highlights["description"] == "<mark>castle</mark> and <mark>newcastle</mark>"
        assert "<mark><mark>" not in highlights["name"]

    def test_highlight_overlapping_words_share_one_mark(self, scorer):
        """Test overlapping occurrences are merged into one marked run."""
        highlights = scorer.highlight(Disease(name="Fowl Pox"), ["fowl", "wl po"])
        assert highlights["name"] == "<mark>Fowl Po</mark>x"
