"""Enumerations shared by schemas and the scoring core."""

from __future__ import annotations

from enum import Enum
from typing import Literal


class EducationLevel(str, Enum):
    """Highest completed education, lowest first."""

    HIGH_SCHOOL = "High School"
    PROFESSIONAL_CERTIFICATION = "Professional Certification"
    BACHELOR = "Bachelor"
    MASTER = "Master"
    PHD = "PhD"


class LanguageProficiency(str, Enum):
    """Self-declared proficiency in the destination's working language."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    FLUENT = "Fluent"
    NATIVE = "Native"


EDUCATION_ORDER: tuple[EducationLevel, ...] = tuple(EducationLevel)

Likelihood = Literal["Very Low", "Low", "Fair", "Good", "Excellent"]
LIKELIHOOD_BANDS: tuple[Likelihood, ...] = ("Very Low", "Low", "Fair", "Good", "Excellent")

Priority = Literal["High", "Medium", "Low"]
PRIORITIES: tuple[Priority, ...] = ("High", "Medium", "Low")

Source = Literal["ai", "rule-based"]
