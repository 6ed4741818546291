"""Configuration and filter models accepted by the engine."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BoostFactors(BaseModel):
    """Per-field score multipliers."""

    name: float = Field(default=3.0, ge=0.0, allow_inf_nan=False)
    symptoms: float = Field(default=2.0, ge=0.0, allow_inf_nan=False)
    description: float = Field(default=1.0, ge=0.0, allow_inf_nan=False)
    causes: float = Field(default=1.5, ge=0.0, allow_inf_nan=False)
    tags: float = Field(default=2.5, ge=0.0, allow_inf_nan=False)

    model_config = ConfigDict(extra="forbid")


class SearchConfig(BaseModel):
    """Tunable search behaviour."""

    enable_fuzzy_search: bool = Field(default=True, description="Match vocabulary by edit distance")
    max_fuzzy_distance: int = Field(default=2, ge=0, description="Largest edit distance accepted")
    enable_stemming: bool = Field(default=True, description="Strip common suffixes before indexing")
    enable_synonyms: bool = Field(default=True, description="Index words under their synonym group")
    boost_factors: BoostFactors = Field(default_factory=BoostFactors)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class FilterCriteria(BaseModel):
    """Facet filters applied on top of ranked results."""

    categories: List[str] = Field(default_factory=list)
    severities: List[str] = Field(default_factory=list)
    species: List[str] = Field(default_factory=list)
