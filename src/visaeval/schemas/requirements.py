from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import EDUCATION_ORDER, EducationLevel


class RequirementTuple(BaseModel):
    """Minimum qualifications for a (country, visa category) pair."""

    country: str
    visa_category: str
    min_salary: float = Field(gt=0)
    accepted_education: frozenset[EducationLevel]
    min_experience_years: int = Field(default=0, ge=0)
    required_documents: tuple[str, ...] = ()
    recommended_documents: tuple[str, ...] = ()
    special_requirements: frozenset[str] = frozenset()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def required_document_count(self) -> int:
        return len(self.required_documents)

    def accepts(self, level: EducationLevel) -> bool:
        return level in self.accepted_education

    def accepted_education_ordered(self) -> list[EducationLevel]:
        """Accepted levels from lowest to highest."""
        return [level for level in EDUCATION_ORDER if level in self.accepted_education]
