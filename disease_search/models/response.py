"""Result models returned by the engine."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .document import Disease


class SearchResult(BaseModel):
    """Individual ranked search result."""

    disease: Disease = Field(..., description="The matched document")
    score: float = Field(..., ge=0.0, description="Relevance score")
    matched_fields: List[str] = Field(
        default_factory=list, description="Scorable fields that matched a query word"
    )
    highlighted_text: Dict[str, str] = Field(
        default_factory=dict, description="Field text with query words marked up"
    )


class SearchStats(BaseModel):
    """Index and cache statistics."""

    index_size: int = Field(..., description="Number of distinct stems in the index")
    cache_size: int = Field(..., description="Number of cached queries")
    total_diseases: int = Field(..., description="Number of indexed documents")
    average_words_per_disease: float = Field(
        ..., description="Vocabulary size divided by corpus size"
    )


class FieldSuggestion(BaseModel):
    """Typed typeahead entry drawn from a disease field."""

    text: str
    type: Literal["disease", "symptom", "cause", "tag"]
    score: int
    disease: Optional[Disease] = None


class HighlightSegment(BaseModel):
    """A run of text that is or is not part of a query match."""

    text: str
    is_highlighted: bool


class Recommendation(BaseModel):
    """A disease ranked against a set of observed symptoms."""

    disease: Disease
    score: float = Field(..., ge=0.0)
