"""Document model for disease glossary entries."""

from typing import Any, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return value


class Disease(BaseModel):
    """A disease entry as supplied by the content provider."""

    id: str = Field(default="", description="Stable disease identifier")
    name: str = Field(default="", description="Display name")
    description: str = Field(default="", description="Free-text description")
    symptoms: List[str] = Field(default_factory=list, description="Observed symptoms")
    causes: List[str] = Field(default_factory=list, description="Known causes")
    tags: List[str] = Field(default_factory=list, description="Glossary tags")
    category: str = Field(default="", description="Disease category (viral, bacterial, ...)")
    severity: str = Field(default="", description="Severity level (low, moderate, high)")
    common_in: List[str] = Field(
        default_factory=list, alias="commonIn", description="Species commonly affected"
    )
    related_diseases: List[str] = Field(
        default_factory=list, alias="relatedDiseases", description="Ids of related diseases"
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("id", "name", "description", "category", "severity", mode="before")
    @classmethod
    def lenient_text(cls, v: Any) -> Any:
        """Treat missing text values as empty strings and scalars as text."""
        return _as_text(v)

    @field_validator(
        "symptoms", "causes", "tags", "common_in", "related_diseases", mode="before"
    )
    @classmethod
    def lenient_list(cls, v: Any) -> Any:
        """Treat missing lists as empty, a lone string as one item, scalars as text."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return [_as_text(item) for item in v]
        return v

    def searchable_text(self) -> str:
        """All indexed text joined into one lowercase blob."""
        return " ".join(
            [
                self.name,
                self.description,
                *self.symptoms,
                *self.causes,
                *self.tags,
                self.category,
                self.severity,
                *self.common_in,
            ]
        ).lower()


DiseaseInput = Union[Disease, Mapping[str, Any]]


def coerce_disease(value: DiseaseInput) -> Disease:
    """Return ``value`` as a Disease, validating plain mappings."""
    if isinstance(value, Disease):
        return value
    return Disease.model_validate(value)
