"""Deterministic rule-based eligibility evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rapidfuzz import fuzz

from ...schemas import ApplicantProfile, Award, EducationLevel, LanguageProficiency, RequirementTuple
from ..vector import DIMENSION_MAXIMA, ScoreVector

STRICTNESS_CAPS: dict[str, float] = {"strict": 75.0, "lenient": 85.0}


def _default_education_points() -> dict[str, float]:
    return {
        EducationLevel.PHD.value: 35.0,
        EducationLevel.MASTER.value: 30.0,
        EducationLevel.BACHELOR.value: 25.0,
        EducationLevel.PROFESSIONAL_CERTIFICATION.value: 15.0,
        EducationLevel.HIGH_SCHOOL.value: 5.0,
    }


def _default_language_points() -> dict[str, float]:
    return {
        LanguageProficiency.NATIVE.value: 3.0,
        LanguageProficiency.FLUENT.value: 3.0,
        LanguageProficiency.ADVANCED.value: 2.5,
        LanguageProficiency.INTERMEDIATE.value: 1.5,
        LanguageProficiency.BEGINNER.value: 0.5,
    }


@dataclass
class RuleConfig:
    """Point tables, disqualification ceilings and caps for rule scoring."""

    education_points: dict[str, float] = field(default_factory=_default_education_points)
    experience_tiers: tuple[tuple[float, float], ...] = (
        (10, 25.0),
        (5, 20.0),
        (3, 15.0),
        (1, 10.0),
    )
    experience_shortfall_penalty: float = 10.0
    salary_tiers: tuple[tuple[float, float], ...] = (
        (1.5, 20.0),
        (1.2, 16.0),
        (1.0, 12.0),
        (0.8, 6.0),
    )
    salary_neutral_points: float = 10.0
    document_tiers: tuple[tuple[float, float], ...] = (
        (1.0, 5.0),
        (0.8, 4.0),
        (0.6, 3.0),
        (0.4, 2.0),
        (0.2, 1.0),
    )
    award_points: float = 1.0
    international_award_points: float = 2.0
    international_keywords: tuple[str, ...] = ("international", "global", "world")
    keyword_match_threshold: float = 90.0
    language_points: dict[str, float] = field(default_factory=_default_language_points)
    recognized_employer_points: float = 10.0
    regular_employer_points: float = 3.0
    employer_boost: float = 1.15
    education_ceiling: float = 35.0
    experience_ceiling: float = 40.0
    salary_ceiling: float = 45.0
    absolute_cap: float = STRICTNESS_CAPS["strict"]

    def __post_init__(self) -> None:
        # YAML delivers nested lists; tiers are kept sorted by threshold, highest first.
        self.experience_tiers = _normalize_tiers(self.experience_tiers)
        self.salary_tiers = _normalize_tiers(self.salary_tiers)
        self.document_tiers = _normalize_tiers(self.document_tiers)
        self.international_keywords = tuple(k.casefold() for k in self.international_keywords)
        self._check_bounds()

    def _check_bounds(self) -> None:
        checks: list[tuple[str, Iterable[float]]] = [
            ("education", self.education_points.values()),
            ("experience", (points for _, points in self.experience_tiers)),
            ("salary", [self.salary_neutral_points, *(p for _, p in self.salary_tiers)]),
            ("documents", (points for _, points in self.document_tiers)),
            ("awards", (self.award_points, self.international_award_points)),
            ("language", self.language_points.values()),
            ("employer", (self.recognized_employer_points, self.regular_employer_points)),
        ]
        for dimension, values in checks:
            for value in values:
                if value < 0 or value > DIMENSION_MAXIMA[dimension]:
                    raise ValueError(
                        f"{dimension} points {value} outside [0, {DIMENSION_MAXIMA[dimension]}]"
                    )
        if self.employer_boost < 1.0:
            raise ValueError("employer_boost must be >= 1.0")
        if not 0 < self.absolute_cap <= 100:
            raise ValueError("absolute_cap must be within (0, 100]")


def _normalize_tiers(tiers: Iterable[Iterable[float]]) -> tuple[tuple[float, float], ...]:
    normalized = [(float(threshold), float(points)) for threshold, points in tiers]
    return tuple(sorted(normalized, key=lambda item: item[0], reverse=True))


def _tier_points(value: float, tiers: tuple[tuple[float, float], ...], default: float = 0.0) -> float:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return default


@dataclass(frozen=True, slots=True)
class ScoreTotal:
    """Aggregate view of a score vector after ceilings and the absolute cap."""

    raw: float
    adjusted: float
    ceilings: dict[str, float]
    total: float


class RuleEvaluator:
    """Score an applicant against a requirement tuple using fixed tables."""

    def __init__(self, *, config: RuleConfig | None = None) -> None:
        self._config = config or RuleConfig()

    @property
    def absolute_cap(self) -> float:
        return self._config.absolute_cap

    def evaluate(
        self,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
        document_count: int,
    ) -> ScoreVector:
        return ScoreVector(
            education=self._education(profile),
            experience=self._experience(profile, requirements),
            salary=self._salary(profile, requirements),
            documents=self._documents(document_count, requirements),
            awards=self._awards(profile),
            language=self._config.language_points.get(profile.language_proficiency.value, 0.0),
            employer=(
                self._config.recognized_employer_points
                if profile.has_recognized_employer
                else self._config.regular_employer_points
            ),
        )

    def total(
        self,
        vector: ScoreVector,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
    ) -> ScoreTotal:
        """Sum the vector, apply the employer boost, then ceilings and the cap."""
        raw = vector.total
        adjusted = raw * self._config.employer_boost if profile.has_recognized_employer else raw
        return self._finalize(raw, adjusted, profile, requirements)

    def bound(
        self,
        score: float,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
    ) -> ScoreTotal:
        """Apply ceilings and the cap to an externally computed overall score."""
        return self._finalize(score, score, profile, requirements)

    def ceilings(self, profile: ApplicantProfile, requirements: RequirementTuple) -> dict[str, float]:
        """Disqualification ceilings triggered by unmet requirements."""
        triggered: dict[str, float] = {}
        if not requirements.accepts(profile.education_level):
            triggered["education"] = self._config.education_ceiling
        if profile.experience_years < requirements.min_experience_years:
            triggered["experience"] = self._config.experience_ceiling
        ratio = self._salary_ratio(profile, requirements)
        if ratio is not None and ratio < 1.0:
            triggered["salary"] = self._config.salary_ceiling
        return triggered

    def _finalize(
        self,
        raw: float,
        adjusted: float,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
    ) -> ScoreTotal:
        triggered = self.ceilings(profile, requirements)
        total = min([max(adjusted, 0.0), *triggered.values(), self._config.absolute_cap])
        return ScoreTotal(
            raw=round(raw, 2),
            adjusted=round(adjusted, 2),
            ceilings=triggered,
            total=round(total, 2),
        )

    def _education(self, profile: ApplicantProfile) -> float:
        return self._config.education_points.get(profile.education_level.value, 0.0)

    def _experience(self, profile: ApplicantProfile, requirements: RequirementTuple) -> float:
        points = _tier_points(profile.experience_years, self._config.experience_tiers)
        if profile.experience_years < requirements.min_experience_years:
            points = max(points - self._config.experience_shortfall_penalty, 0.0)
        return points

    def _salary(self, profile: ApplicantProfile, requirements: RequirementTuple) -> float:
        ratio = self._salary_ratio(profile, requirements)
        if ratio is None:
            return self._config.salary_neutral_points
        return _tier_points(ratio, self._config.salary_tiers)

    @staticmethod
    def _salary_ratio(profile: ApplicantProfile, requirements: RequirementTuple) -> float | None:
        if profile.current_salary is None:
            return None
        return profile.current_salary / requirements.min_salary

    def _documents(self, document_count: int, requirements: RequirementTuple) -> float:
        required = requirements.required_document_count
        if required == 0:
            return DIMENSION_MAXIMA["documents"]
        return _tier_points(max(document_count, 0) / required, self._config.document_tiers)

    def _awards(self, profile: ApplicantProfile) -> float:
        if not profile.has_awards or not profile.awards:
            return 0.0
        if any(self.is_international(award) for award in profile.awards):
            return self._config.international_award_points
        return self._config.award_points

    def is_international(self, award: Award) -> bool:
        organization = (award.organization or "").casefold()
        return any(
            len(organization) >= len(keyword)
            and fuzz.partial_ratio(keyword, organization) >= self._config.keyword_match_threshold
            for keyword in self._config.international_keywords
        )


__all__ = ["RuleConfig", "RuleEvaluator", "ScoreTotal", "STRICTNESS_CAPS"]
