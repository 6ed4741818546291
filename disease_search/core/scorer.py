"""Field-weighted relevance scoring and highlighting."""

import re
from typing import Dict, List, Set, Tuple

from ..models.document import Disease
from ..models.request import BoostFactors

SCORED_FIELDS: Tuple[str, ...] = ("name", "description", "symptoms", "causes", "tags")
HIGHLIGHTED_FIELDS: Tuple[str, ...] = ("name", "description", "symptoms")

CONTAINS_SCORE = 1.0
WORD_BOUNDARY_BONUS = 0.5
POSITION_WEIGHT = 0.3


class FieldScorer:
    """Scores literal query words against the raw text of each field."""

    def __init__(self, boost_factors: BoostFactors, highlight_tag: str = "mark") -> None:
        """
        Initialize the scorer.

        Args:
            boost_factors: Per-field multipliers
            highlight_tag: Element name wrapped around highlighted matches
        """
        self.boost_factors = boost_factors
        self.open_tag = f"<{highlight_tag}>"
        self.close_tag = f"</{highlight_tag}>"

    @staticmethod
    def field_texts(disease: Disease) -> Dict[str, str]:
        return {
            "name": disease.name,
            "description": disease.description,
            "symptoms": " ".join(disease.symptoms),
            "causes": " ".join(disease.causes),
            "tags": " ".join(disease.tags),
        }

    def score_text(self, text: str, word: str) -> float:
        """
        Unboosted score of ``word`` in ``text``.

        Substring presence is worth 1.0, a whole-word occurrence adds 0.5
        and an earlier first occurrence adds up to 0.3.
        """
        field_text = text.lower()
        word = word.lower()
        if not word or word not in field_text:
            return 0.0

        score = CONTAINS_SCORE
        if re.search(rf"\b{re.escape(word)}\b", field_text):
            score += WORD_BOUNDARY_BONUS

        position = field_text.find(word)
        score += max(0.0, 1.0 - position / len(field_text)) * POSITION_WEIGHT
        return score

    def score_fields(self, disease: Disease, word: str) -> Dict[str, float]:
        """
        Boosted score for every scorable field.

        Args:
            disease: Candidate document
            word: Literal (unstemmed) query word

        Returns:
            Mapping of field name to score, zero for non-matching fields
        """
        return {
            field: self.score_text(text, word) * getattr(self.boost_factors, field)
            for field, text in self.field_texts(disease).items()
        }

    def highlight(self, disease: Disease, words: List[str]) -> Dict[str, str]:
        """Wrap every case-insensitive occurrence of ``words`` in highlight tags."""
        texts = {
            "name": disease.name,
            "description": disease.description,
            "symptoms": ", ".join(disease.symptoms),
        }
        terms = {w.lower() for w in words if w}
        if not terms:
            return texts
        return {field: self._mark(text, terms) for field, text in texts.items()}

    def _mark(self, text: str, terms: Set[str]) -> str:
        lowered = text.lower()
        spans = []
        for term in terms:
            start = lowered.find(term)
            while start != -1:
                spans.append((start, start + len(term)))
                start = lowered.find(term, start + 1)
        if not spans:
            return text

        # Overlapping occurrences share one marked run so tags never nest
        spans.sort()
        merged = [list(spans[0])]
        for start, end in spans[1:]:
            if start <= merged[-1][1]:
                merged[-1][1] = max(merged[-1][1], end)
            else:
                merged.append([start, end])

        parts = []
        cursor = 0
        for start, end in merged:
            parts.append(text[cursor:start])
            parts.append(f"{self.open_tag}{text[start:end]}{self.close_tag}")
            cursor = end
        parts.append(text[cursor:])
        return "".join(parts)
