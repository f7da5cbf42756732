"""Pydantic schema definitions for applicants, requirements and model output."""

from __future__ import annotations

from .ai import AIDimensionScores, AIEvaluationResponse, AIRecommendation
from .applicant import ApplicantProfile, Award, DocumentMetadata, EvaluationRequest
from .enums import (
    EDUCATION_ORDER,
    LIKELIHOOD_BANDS,
    PRIORITIES,
    EducationLevel,
    LanguageProficiency,
    Likelihood,
    Priority,
    Source,
)
from .requirements import RequirementTuple

__all__ = [
    "AIDimensionScores",
    "AIEvaluationResponse",
    "AIRecommendation",
    "ApplicantProfile",
    "Award",
    "DocumentMetadata",
    "EDUCATION_ORDER",
    "EducationLevel",
    "EvaluationRequest",
    "LIKELIHOOD_BANDS",
    "LanguageProficiency",
    "Likelihood",
    "PRIORITIES",
    "Priority",
    "RequirementTuple",
    "Source",
]
