"""Read-only requirements catalog."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from ..config import ConfigManager, load_yaml
from ..schemas import RequirementTuple
from ..errors import UnknownVisaCategory


class RequirementsCatalog:
    """Immutable lookup of requirement tuples by exact country and visa name."""

    def __init__(self, entries: Mapping[tuple[str, str], RequirementTuple]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RequirementsCatalog":
        countries = raw.get("countries")
        if not isinstance(countries, Mapping) or not countries:
            raise ValueError("Catalog must define a non-empty 'countries' mapping")
        entries: dict[tuple[str, str], RequirementTuple] = {}
        for country, visas in countries.items():
            if not isinstance(visas, Mapping):
                raise ValueError(f"Catalog entry for {country!r} must be a mapping")
            for visa_category, data in visas.items():
                entries[(country, visa_category)] = RequirementTuple.model_validate(
                    {"country": country, "visa_category": visa_category, **(data or {})}
                )
        return cls(entries)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "RequirementsCatalog":
        """Load from an explicit YAML path, or the bundled catalog."""
        raw = load_yaml(path) if path else ConfigManager().load("catalog")
        catalog = cls.from_mapping(raw)
        structlog.get_logger(__name__).debug(
            "catalog.loaded", source=str(path or "bundled"), entries=len(catalog)
        )
        return catalog

    def lookup(self, country: str, visa_category: str) -> RequirementTuple:
        try:
            return self._entries[(country, visa_category)]
        except KeyError as exc:
            raise UnknownVisaCategory(country, visa_category) from exc

    def countries(self) -> list[str]:
        return list(dict.fromkeys(country for country, _ in self._entries))

    def visas(self, country: str) -> list[str]:
        return [visa for (name, visa) in self._entries if name == country]

    def documents(self, country: str) -> dict[str, tuple[str, ...]]:
        return {
            visa: self._entries[(country, visa)].recommended_documents
            for visa in self.visas(country)
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["RequirementsCatalog"]
