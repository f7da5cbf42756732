"""Schema for the structured response expected from the generative model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import Likelihood, Priority


class AIDimensionScores(BaseModel):
    education: float
    experience: float
    salary: float
    documents: float
    awards: float
    language: float
    employer: float

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)


class AIRecommendation(BaseModel):
    category: str
    priority: Priority
    suggestion: str

    model_config = ConfigDict(extra="ignore")


class AIEvaluationResponse(BaseModel):
    """Model output; every field is required."""

    overall_score: float = Field(alias="overallScore")
    likelihood: Likelihood
    scores: AIDimensionScores
    summary: str
    recommendations: list[AIRecommendation]

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False, populate_by_name=True)
