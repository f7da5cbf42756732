from __future__ import annotations

from pathlib import Path

from dependency_injector import providers

from visaeval.container import create_container
from visaeval.schemas.config import AppConfig, load_config


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "engine": {"strictness": "lenient"},
            "evaluators": {
                "rules": {"employer_boost": 1.1},
                "ai": {"model": "gemini-1.5-pro", "timeout": 3.0},
            },
            "classifier": {"thresholds": {"Excellent": 80.0}},
            "recommendations": {"max_items": 2},
        }
    )

    rules = container.rule_evaluator()
    classifier = container.classifier()
    synthesizer = container.synthesizer()
    client = container.gemini_client()

    assert rules.absolute_cap == 85.0
    assert container.rule_config().employer_boost == 1.1
    assert classifier.thresholds["Excellent"] == 80.0
    assert synthesizer._config.max_items == 2
    assert client._config.model == "gemini-1.5-pro"
    assert client._config.timeout == 3.0


def test_explicit_absolute_cap_wins_over_strictness():
    container = create_container(settings={"engine": {"strictness": "lenient", "absolute_cap": 70.0}})

    assert container.rule_evaluator().absolute_cap == 70.0


def test_default_container_is_strict_and_rule_only():
    container = create_container()

    assert container.rule_evaluator().absolute_cap == 75.0
    assert not container.ai_evaluator().configured
    assert container.engine().catalog.lookup("Germany", "EU Blue Card").min_salary == 56_400


def test_api_key_enables_ai_evaluator():
    container = create_container(gemini_api_key="test-key")

    assert container.gemini_client()._api_key == "test-key"
    assert container.ai_evaluator().configured


def test_catalog_path_replaces_bundled_catalog(tmp_path: Path):
    catalog_path = tmp_path / "catalog.yaml"
    catalog_path.write_text(
        "countries:\n"
        "  Atlantis:\n"
        "    Ocean Researcher:\n"
        "      min_salary: 50000\n"
        "      accepted_education: [PhD]\n",
        encoding="utf-8",
    )

    container = create_container(settings={"catalog_path": str(catalog_path)})

    assert container.catalog().countries() == ["Atlantis"]
    assert container.engine().catalog.lookup("Atlantis", "Ocean Researcher").min_salary == 50_000


def test_gemini_client_can_be_replaced():
    class Stub:
        def generate(self, prompt: str) -> str:
            return ""

    container = create_container()
    container.gemini_client.override(providers.Object(Stub()))

    assert container.ai_evaluator().configured


def test_load_config_validation():
    data = {
        "engine": {"strictness": "strict"},
        "evaluators": {"rules": {"salary_ceiling": 40.0}},
        "recommendations": {"healthy_ratio": 0.85},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["engine"] == {"strictness": "strict"}
    assert settings["evaluators"]["rules"]["salary_ceiling"] == 40.0
    assert settings["recommendations"] == {"healthy_ratio": 0.85}
    assert "classifier" not in settings
