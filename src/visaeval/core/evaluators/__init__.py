"""Evaluator implementations for the eligibility engine."""

from .rules import STRICTNESS_CAPS, RuleConfig, RuleEvaluator, ScoreTotal
from .ai import AIAttempt, AIEvaluator, EvaluationFailure, GenerativeClient

__all__ = [
    "AIAttempt",
    "AIEvaluator",
    "EvaluationFailure",
    "GenerativeClient",
    "RuleConfig",
    "RuleEvaluator",
    "ScoreTotal",
    "STRICTNESS_CAPS",
]
