"""AI-assisted evaluation with a typed success/failure result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import structlog
from pydantic import ValidationError

from ...errors import AIServiceUnavailable, MalformedAIResponse
from ...schemas import AIEvaluationResponse, ApplicantProfile, RequirementTuple
from ..prompts import build_evaluation_prompt, extract_json_object
from ..vector import DIMENSION_MAXIMA, NOMINAL_CEILING, ScoreVector
from .rules import RuleConfig

EvaluationFailure = Literal["not_configured", "unavailable", "timeout", "malformed", "out_of_bounds"]


@runtime_checkable
class GenerativeClient(Protocol):
    """Single-shot text generation contract."""

    def generate(self, prompt: str) -> str:
        """Return raw model text, raising AIServiceUnavailable on transport failure."""


@dataclass(frozen=True, slots=True)
class AIAttempt:
    """Outcome of one AI evaluation attempt: a vector or a failure reason."""

    vector: ScoreVector | None = None
    response: AIEvaluationResponse | None = None
    failure: EvaluationFailure | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.vector is not None

    @classmethod
    def success(cls, vector: ScoreVector, response: AIEvaluationResponse) -> "AIAttempt":
        return cls(vector=vector, response=response)

    @classmethod
    def failed(cls, failure: EvaluationFailure, detail: str | None = None) -> "AIAttempt":
        return cls(failure=failure, detail=detail)


class AIEvaluator:
    """Ask the generative model for a score vector; never raises."""

    def __init__(
        self,
        client: GenerativeClient | None = None,
        *,
        rules: RuleConfig | None = None,
    ) -> None:
        self._client = client
        self._rules = rules or RuleConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def configured(self) -> bool:
        return self._client is not None and getattr(self._client, "configured", True)

    def evaluate(
        self,
        profile: ApplicantProfile,
        requirements: RequirementTuple,
        document_count: int,
    ) -> AIAttempt:
        if not self.configured:
            return AIAttempt.failed("not_configured")

        prompt = build_evaluation_prompt(
            profile=profile,
            requirements=requirements,
            document_count=document_count,
            rules=self._rules,
        )
        try:
            text = self._client.generate(prompt)  # type: ignore[union-attr]
            vector, response = self.parse(text)
        except AIServiceUnavailable as exc:
            return self._failed(exc.reason, str(exc))  # type: ignore[arg-type]
        except MalformedAIResponse as exc:
            return self._failed(exc.reason, str(exc))  # type: ignore[arg-type]
        except Exception as exc:  # noqa: BLE001
            return self._failed("unavailable", f"{type(exc).__name__}: {exc}")
        return AIAttempt.success(vector, response)

    @staticmethod
    def parse(text: str | None) -> tuple[ScoreVector, AIEvaluationResponse]:
        """Validate model text against the response schema and dimension bounds."""
        data = extract_json_object(text)
        try:
            response = AIEvaluationResponse.model_validate(data)
        except ValidationError as exc:
            raise MalformedAIResponse(
                f"Model response failed validation: {exc.error_count()} error(s)"
            ) from exc

        scores = response.scores.model_dump()
        out_of_bounds = sorted(
            name for name, value in scores.items() if not 0 <= value <= DIMENSION_MAXIMA[name]
        )
        if out_of_bounds:
            raise MalformedAIResponse(
                f"Dimensions outside their bounds: {', '.join(out_of_bounds)}",
                reason="out_of_bounds",
            )
        if not 0 <= response.overall_score <= NOMINAL_CEILING:
            raise MalformedAIResponse(
                f"overallScore {response.overall_score} outside [0, {NOMINAL_CEILING:g}]",
                reason="out_of_bounds",
            )
        return ScoreVector.clamped(scores), response

    def _failed(self, failure: EvaluationFailure, detail: str) -> AIAttempt:
        self._logger.warning("ai.unavailable", failure=failure, detail=detail)
        return AIAttempt.failed(failure, detail)


__all__ = ["AIAttempt", "AIEvaluator", "EvaluationFailure", "GenerativeClient"]
