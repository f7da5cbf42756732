"""Eligibility engine orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from ..schemas import ApplicantProfile, EvaluationRequest, Likelihood, RequirementTuple, Source
from .catalog import RequirementsCatalog
from .classifier import LikelihoodClassifier
from .evaluators import AIAttempt, AIEvaluator, RuleEvaluator, ScoreTotal
from .recommendations import Recommendation, RecommendationSynthesizer
from .vector import NOMINAL_CEILING, ScoreVector

_CEILING_CONCERNS: dict[str, str] = {
    "education": "your education level does not meet the requirement for this visa category",
    "experience": "your work experience is below the minimum for this visa category",
    "salary": "your salary is below the minimum requirement",
}


@dataclass(slots=True)
class EvaluationResult:
    """Complete evaluation payload for downstream consumers."""

    country: str
    visa_category: str
    source: Source
    scores: ScoreVector
    raw_score: float
    total_score: float
    final_score: float
    likelihood: Likelihood
    summary: str
    recommendations: list[Recommendation] = field(default_factory=list)
    ceilings: dict[str, float] = field(default_factory=dict)
    partner_score_cap: float | None = None
    fallback_reason: str | None = None


def apply_cap(score: float, partner_cap: float | None = None) -> float:
    """Apply an optional external ceiling to an already-bounded score."""
    if partner_cap is None:
        return score
    return min(score, partner_cap)


class EligibilityEngine:
    """Two-stage evaluation: AI attempt first, deterministic rules on any failure."""

    def __init__(
        self,
        *,
        catalog: RequirementsCatalog,
        rules: RuleEvaluator,
        classifier: LikelihoodClassifier | None = None,
        synthesizer: RecommendationSynthesizer | None = None,
        ai: AIEvaluator | None = None,
    ) -> None:
        self._catalog = catalog
        self._rules = rules
        self._classifier = classifier or LikelihoodClassifier()
        self._synthesizer = synthesizer or RecommendationSynthesizer()
        self._ai = ai
        self._logger = structlog.get_logger(__name__)

    @property
    def catalog(self) -> RequirementsCatalog:
        return self._catalog

    def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """Raises UnknownVisaCategory; every other failure degrades to rules."""
        requirements = self._catalog.lookup(request.country, request.visa_category)
        profile = request.profile
        document_count = profile.document_count

        attempt = self._attempt_ai(profile, requirements, document_count)
        if attempt.ok:
            source: Source = "ai"
            vector = attempt.vector
            overall = min(max(attempt.response.overall_score, 0.0), NOMINAL_CEILING)
            score_total = self._rules.bound(overall, profile, requirements)
        else:
            source = "rule-based"
            vector = self._rules.evaluate(profile, requirements, document_count)
            score_total = self._rules.total(vector, profile, requirements)

        final_score = apply_cap(score_total.total, request.partner_score_cap)
        likelihood = self._classifier.classify(final_score)
        summary = self._summary(attempt, source, final_score, likelihood, score_total, profile, requirements)
        recommendations = self._synthesizer.synthesize(vector, profile, requirements, document_count)

        result = EvaluationResult(
            country=requirements.country,
            visa_category=requirements.visa_category,
            source=source,
            scores=vector,
            raw_score=score_total.raw,
            total_score=score_total.total,
            final_score=final_score,
            likelihood=likelihood,
            summary=summary,
            recommendations=recommendations,
            ceilings=dict(score_total.ceilings),
            partner_score_cap=request.partner_score_cap,
            fallback_reason=None if attempt.ok else attempt.failure,
        )
        self._logger.info(
            "evaluation.completed",
            reference=request.reference,
            country=result.country,
            visa_category=result.visa_category,
            source=result.source,
            fallback_reason=result.fallback_reason,
            total_score=result.total_score,
            final_score=result.final_score,
            likelihood=result.likelihood,
            ceilings=result.ceilings,
        )
        return result

    def _attempt_ai(
        self,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
        document_count: int,
    ) -> AIAttempt:
        if self._ai is None:
            return AIAttempt.failed("not_configured")
        return self._ai.evaluate(profile, requirements, document_count)

    @staticmethod
    def _summary(
        attempt: AIAttempt,
        source: Source,
        score: float,
        likelihood: Likelihood,
        score_total: ScoreTotal,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
    ) -> str:
        if source == "ai" and attempt.response and attempt.response.summary.strip():
            return attempt.response.summary.strip()

        summary = (
            f"Based on your profile, you have a {likelihood.lower()} chance of "
            f"{requirements.visa_category} approval for {requirements.country}."
        )
        concerns = [_CEILING_CONCERNS[name] for name in score_total.ceilings]
        if concerns:
            summary += f" However, there are some concerns: {concerns[0]}."
        if profile.has_recognized_employer and score > 50:
            summary += " Your recognized sponsor status significantly strengthens your application."
        if score < 30:
            summary += " Your current profile may not meet the basic requirements for this visa category."
        elif score >= 60:
            summary += " Your qualifications align well with the visa requirements."
        return summary


__all__ = ["EligibilityEngine", "EvaluationResult", "apply_cap"]
