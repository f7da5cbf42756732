from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import EducationLevel, LanguageProficiency


class Award(BaseModel):
    """Professional award or distinction."""

    title: str = ""
    organization: str | None = None
    year: int | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class DocumentMetadata(BaseModel):
    """Metadata for a submitted document; contents are never inspected."""

    declared_type: str | None = None
    filename: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class ApplicantProfile(BaseModel):
    """Normalized applicant profile consumed by the evaluators."""

    education_level: EducationLevel
    experience_years: int = Field(default=0, ge=0)
    current_salary: float | None = Field(default=None, ge=0)
    language_proficiency: LanguageProficiency = LanguageProficiency.INTERMEDIATE
    has_awards: bool = False
    awards: tuple[Award, ...] = ()
    has_recognized_employer: bool = False
    documents: tuple[DocumentMetadata, ...] = ()
    document_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def declared_document_types(self) -> set[str]:
        return {
            doc.declared_type.strip().casefold()
            for doc in self.documents
            if doc.declared_type and doc.declared_type.strip()
        }


class EvaluationRequest(BaseModel):
    """A single evaluation call: profile plus visa selection."""

    profile: ApplicantProfile
    country: str
    visa_category: str
    partner_score_cap: float | None = Field(default=None, ge=0, le=100)
    reference: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
