"""Dependency injection container for the eligibility engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .core import (
    AIEvaluator,
    EligibilityEngine,
    LikelihoodClassifier,
    RecommendationConfig,
    RecommendationSynthesizer,
    RequirementsCatalog,
    RuleConfig,
    RuleEvaluator,
    STRICTNESS_CAPS,
)
from .intake import ApplicationParser
from .llm import GeminiClient, GeminiConfig
from .pipeline import ApplicationLoader, EvaluationPipeline


class EligibilityContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    catalog = providers.Singleton(RequirementsCatalog.load, path=config.catalog_path)

    rule_config = providers.Singleton(RuleConfig)
    rule_evaluator = providers.Singleton(RuleEvaluator, config=rule_config)

    gemini_client = providers.Singleton(
        GeminiClient,
        api_key=config.gemini_api_key,
        config=providers.Singleton(GeminiConfig),
    )
    ai_evaluator = providers.Singleton(AIEvaluator, client=gemini_client, rules=rule_config)

    classifier = providers.Singleton(
        LikelihoodClassifier,
        thresholds=config.classifier.thresholds,
    )
    synthesizer = providers.Singleton(
        RecommendationSynthesizer,
        config=providers.Singleton(RecommendationConfig),
    )

    engine = providers.Singleton(
        EligibilityEngine,
        catalog=catalog,
        rules=rule_evaluator,
        classifier=classifier,
        synthesizer=synthesizer,
        ai=ai_evaluator,
    )

    parser = providers.Singleton(ApplicationParser)
    application_loader = providers.Singleton(ApplicationLoader, parser=parser)

    pipeline = providers.Factory(
        EvaluationPipeline,
        engine=engine,
        loader=application_loader,
    )


def create_container(
    *,
    settings: dict[str, Any] | None = None,
    gemini_api_key: str | None = None,
) -> EligibilityContainer:
    """Instantiate container with optional overrides."""

    container = EligibilityContainer()
    settings = settings if isinstance(settings, dict) else {}

    container.config.from_dict(
        {
            "catalog_path": settings.get("catalog_path"),
            "gemini_api_key": gemini_api_key,
            "classifier": settings.get("classifier", {}),
        }
    )

    engine_settings = settings.get("engine", {})
    evaluator_settings = settings.get("evaluators", {})
    rule_settings = dict(evaluator_settings.get("rules", {}))
    if "strictness" in engine_settings and "absolute_cap" not in rule_settings:
        rule_settings["absolute_cap"] = STRICTNESS_CAPS[engine_settings["strictness"]]
    if "absolute_cap" in engine_settings:
        rule_settings["absolute_cap"] = engine_settings["absolute_cap"]
    if rule_settings:
        container.rule_config.override(providers.Singleton(RuleConfig, **rule_settings))

    if "ai" in evaluator_settings:
        gemini_config = GeminiConfig(**evaluator_settings["ai"])
        container.gemini_client.override(
            providers.Singleton(GeminiClient, api_key=gemini_api_key, config=gemini_config)
        )

    if "recommendations" in settings:
        recommendation_config = RecommendationConfig(**settings["recommendations"])
        container.synthesizer.override(
            providers.Singleton(RecommendationSynthesizer, config=recommendation_config)
        )

    return container
