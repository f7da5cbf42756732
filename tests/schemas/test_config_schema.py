from __future__ import annotations

import pytest
from pydantic import ValidationError

from visaeval.schemas.config import AppConfig, load_config


def test_empty_config_yields_no_settings():
    assert load_config(None).to_settings() == {}
    assert isinstance(load_config({}), AppConfig)


def test_catalog_path_and_sections_are_carried():
    settings = load_config(
        {
            "catalog_path": "/etc/visaeval/catalog.yaml",
            "engine": {"absolute_cap": 80},
            "classifier": {"thresholds": {"Good": 62}},
            "evaluators": {"ai": {"timeout": 5}},
        }
    ).to_settings()

    assert settings["catalog_path"] == "/etc/visaeval/catalog.yaml"
    assert settings["engine"] == {"absolute_cap": 80.0}
    assert settings["classifier"] == {"thresholds": {"Good": 62.0}}
    assert settings["evaluators"] == {"ai": {"timeout": 5}}


@pytest.mark.parametrize(
    "raw",
    [
        {"engine": {"strictness": "extreme"}},
        {"engine": {"absolute_cap": 120}},
        {"recommendations": {"max_items": 9}},
        {"unknown": {}},
    ],
)
def test_invalid_config_is_rejected(raw):
    with pytest.raises(ValidationError):
        load_config(raw)
