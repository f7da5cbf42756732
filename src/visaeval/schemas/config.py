"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class EngineConfig(BaseModel):
    strictness: Literal["strict", "lenient"] | None = None
    absolute_cap: float | None = Field(default=None, gt=0, le=100)

    model_config = ConfigDict(extra="forbid")


class EvaluatorConfig(BaseModel):
    rules: dict[str, Any] | None = None
    ai: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")


class ClassifierConfig(BaseModel):
    thresholds: dict[str, float] | None = None

    model_config = ConfigDict(extra="forbid")


class RecommendationConfig(BaseModel):
    healthy_ratio: float | None = Field(default=None, gt=0, le=1)
    max_items: int | None = Field(default=None, ge=0, le=4)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    catalog_path: str | None = None
    engine: EngineConfig = Field(default_factory=EngineConfig)
    evaluators: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    recommendations: RecommendationConfig = Field(default_factory=RecommendationConfig)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        if self.catalog_path:
            settings["catalog_path"] = self.catalog_path
        for section in ("engine", "classifier", "recommendations"):
            dumped = getattr(self, section).model_dump(exclude_none=True)
            if dumped:
                settings[section] = dumped
        evaluator_settings = self.evaluators.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluators"] = evaluator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    """Validate a raw settings mapping; raises pydantic.ValidationError."""
    return AppConfig.model_validate(raw if raw is not None else {})
