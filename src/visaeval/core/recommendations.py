"""Improvement recommendations derived from score shortfalls."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Callable

from ..schemas import PRIORITIES, ApplicantProfile, Priority, RequirementTuple
from .vector import DIMENSIONS, ScoreVector

MAX_RECOMMENDATIONS = 4


@dataclass(frozen=True, slots=True)
class Recommendation:
    category: str
    priority: Priority
    suggestion: str


@dataclass
class RecommendationConfig:
    """Ratio thresholds (dimension points / dimension maximum)."""

    healthy_ratio: float = 0.9
    high_below: float = 0.5
    medium_below: float = 0.8
    max_items: int = MAX_RECOMMENDATIONS

    def __post_init__(self) -> None:
        if not 0 <= self.high_below <= self.medium_below:
            raise ValueError("high_below must not exceed medium_below")
        self.max_items = max(0, min(int(self.max_items), MAX_RECOMMENDATIONS))


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).strip().casefold()


def _money(amount: float) -> str:
    return f"{amount:,.0f}"


class RecommendationSynthesizer:
    """Emit at most four recommendations, most urgent first."""

    def __init__(self, *, config: RecommendationConfig | None = None) -> None:
        self._config = config or RecommendationConfig()
        self._templates: dict[str, Callable[[ApplicantProfile, RequirementTuple, int], str]] = {
            "education": self._education,
            "experience": self._experience,
            "salary": self._salary,
            "documents": self._documents,
            "awards": self._awards,
            "language": self._language,
            "employer": self._employer,
        }

    def synthesize(
        self,
        vector: ScoreVector,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
        document_count: int | None = None,
    ) -> list[Recommendation]:
        count = profile.document_count if document_count is None else document_count
        ranked: list[tuple[int, int, Recommendation]] = []
        for order, dimension in enumerate(DIMENSIONS):
            ratio = vector.ratio(dimension)
            if ratio >= self._config.healthy_ratio:
                continue
            priority = self.priority_for(ratio)
            recommendation = Recommendation(
                category=dimension.capitalize(),
                priority=priority,
                suggestion=self._templates[dimension](profile, requirements, count),
            )
            ranked.append((PRIORITIES.index(priority), order, recommendation))
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [item[2] for item in ranked[: self._config.max_items]]

    def priority_for(self, ratio: float) -> Priority:
        if ratio < self._config.high_below:
            return "High"
        if ratio < self._config.medium_below:
            return "Medium"
        return "Low"

    @staticmethod
    def _education(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        if not requirements.accepts(profile.education_level):
            accepted = ", ".join(level.value for level in requirements.accepted_education_ordered())
            return (
                f"Your education level ({profile.education_level.value}) does not meet the "
                f"{requirements.visa_category} requirement ({accepted}). Consider obtaining "
                "additional qualifications or targeting a different visa category."
            )
        return (
            "Consider obtaining higher education qualifications or additional professional "
            "certifications to strengthen your profile."
        )

    @staticmethod
    def _experience(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        if profile.experience_years < requirements.min_experience_years:
            return (
                f"You need at least {requirements.min_experience_years} years of experience for "
                f"this visa; you currently have {profile.experience_years}. Consider gaining more "
                "relevant work experience."
            )
        return "Gain more relevant professional experience in your field to improve your eligibility."

    @staticmethod
    def _salary(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        minimum = _money(requirements.min_salary)
        if profile.current_salary is None:
            return (
                f"Provide your current annual salary; the minimum for {requirements.visa_category} "
                f"is {minimum}."
            )
        if profile.current_salary < requirements.min_salary:
            return (
                f"Your current salary of {_money(profile.current_salary)} is below the required "
                f"minimum of {minimum}. Negotiate a higher salary offer or seek positions that meet "
                "the minimum requirements."
            )
        return (
            f"A salary of {_money(requirements.min_salary * 1.5)} or more (150% of the {minimum} "
            "minimum) would place you in the strongest salary tier."
        )

    @staticmethod
    def _documents(profile: ApplicantProfile, requirements: RequirementTuple, count: int) -> str:
        message = (
            f"You submitted {count} of {requirements.required_document_count} required documents."
        )
        declared = {_fold(kind) for kind in profile.declared_document_types()}
        if declared:
            missing = [doc for doc in requirements.required_documents if _fold(doc) not in declared]
            if missing:
                message += f" Missing: {', '.join(missing)}."
        return message + " Upload all required documents to complete your application."

    @staticmethod
    def _awards(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        if profile.has_awards and profile.awards:
            return (
                "Seek recognition from international or global organizations to strengthen "
                "evidence of distinction."
            )
        return "Seek professional recognition, awards, or certifications in your field."

    @staticmethod
    def _language(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        return (
            f"Improve your language proficiency (currently {profile.language_proficiency.value}) "
            "through formal training or certification."
        )

    @staticmethod
    def _employer(profile: ApplicantProfile, requirements: RequirementTuple, _: int) -> str:
        return (
            "Seek employment with a recognized sponsor or employer. This provides a significant "
            "advantage in visa applications."
        )


__all__ = [
    "MAX_RECOMMENDATIONS",
    "Recommendation",
    "RecommendationConfig",
    "RecommendationSynthesizer",
]
