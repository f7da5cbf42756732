"""Core eligibility engine components."""

from __future__ import annotations

from ..errors import (
    AIServiceUnavailable,
    InvalidProfileField,
    MalformedAIResponse,
    UnknownVisaCategory,
)
from .vector import DIMENSIONS, DIMENSION_MAXIMA, NOMINAL_CEILING, ScoreVector
from .catalog import RequirementsCatalog
from .evaluators import (
    AIAttempt,
    AIEvaluator,
    RuleConfig,
    RuleEvaluator,
    ScoreTotal,
    STRICTNESS_CAPS,
)
from .classifier import LikelihoodClassifier
from .recommendations import Recommendation, RecommendationConfig, RecommendationSynthesizer
from .engine import EligibilityEngine, EvaluationResult, apply_cap


__all__ = [
    "AIAttempt",
    "AIEvaluator",
    "AIServiceUnavailable",
    "DIMENSIONS",
    "DIMENSION_MAXIMA",
    "EligibilityEngine",
    "EvaluationResult",
    "InvalidProfileField",
    "LikelihoodClassifier",
    "MalformedAIResponse",
    "NOMINAL_CEILING",
    "Recommendation",
    "RecommendationConfig",
    "RecommendationSynthesizer",
    "RequirementsCatalog",
    "RuleConfig",
    "RuleEvaluator",
    "STRICTNESS_CAPS",
    "ScoreTotal",
    "ScoreVector",
    "UnknownVisaCategory",
    "apply_cap",
]
