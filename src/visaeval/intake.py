"""Boundary parsing of raw (often form-encoded) application payloads."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypeVar

import structlog
from pydantic import ValidationError
from rapidfuzz import fuzz, process, utils

from .errors import InvalidProfileField
from .schemas import (
    ApplicantProfile,
    Award,
    DocumentMetadata,
    EducationLevel,
    EvaluationRequest,
    LanguageProficiency,
)

E = TypeVar("E", bound=Enum)

_TRUE = {"true", "1", "yes", "y", "on"}
_FALSE = {"false", "0", "no", "n", "off", ""}
# Currency symbols, codes and digit grouping around an otherwise plain number.
_NUMBER_NOISE = re.compile(r"[$€£¥,_\s]|[A-Za-z]{3}")

# Form keys as sent by the web client, mapped onto profile fields.
FIELD_ALIASES: dict[str, str] = {
    "educationLevel": "education_level",
    "experienceYears": "experience_years",
    "currentSalary": "current_salary",
    "languageProficiency": "language_proficiency",
    "hasAwards": "has_awards",
    "hasRecognizedEmployer": "has_recognized_employer",
    "uploadedDocuments": "documents",
    "documentCount": "document_count",
    "visaType": "visa_category",
    "visaCategory": "visa_category",
    "partnerScoreCap": "partner_score_cap",
}

EDUCATION_ALIASES: dict[str, EducationLevel] = {
    "high school": EducationLevel.HIGH_SCHOOL,
    "secondary school": EducationLevel.HIGH_SCHOOL,
    "professional certification": EducationLevel.PROFESSIONAL_CERTIFICATION,
    "certificate": EducationLevel.PROFESSIONAL_CERTIFICATION,
    "bachelor": EducationLevel.BACHELOR,
    "bachelors": EducationLevel.BACHELOR,
    "undergraduate degree": EducationLevel.BACHELOR,
    "master": EducationLevel.MASTER,
    "masters": EducationLevel.MASTER,
    "mba": EducationLevel.MASTER,
    "phd": EducationLevel.PHD,
    "ph d": EducationLevel.PHD,
    "doctorate": EducationLevel.PHD,
}

LANGUAGE_ALIASES: dict[str, LanguageProficiency] = {
    "beginner": LanguageProficiency.BEGINNER,
    "basic": LanguageProficiency.BEGINNER,
    "intermediate": LanguageProficiency.INTERMEDIATE,
    "advanced": LanguageProficiency.ADVANCED,
    "fluent": LanguageProficiency.FLUENT,
    "native": LanguageProficiency.NATIVE,
    "mother tongue": LanguageProficiency.NATIVE,
}


@dataclass(slots=True)
class FieldIssue:
    """A field that could not be parsed and was replaced by a default."""

    field: str
    value: Any
    reason: str
    default: Any


@dataclass(slots=True)
class ParsedApplication:
    request: EvaluationRequest
    issues: list[FieldIssue] = field(default_factory=list)


class ApplicationParser:
    """Turn raw submissions into a strongly-typed ``EvaluationRequest``.

    Invalid fields never abort parsing: each one is replaced with its neutral
    default and reported as a ``FieldIssue``.
    """

    DEFAULT_EDUCATION = EducationLevel.HIGH_SCHOOL
    DEFAULT_LANGUAGE = LanguageProficiency.INTERMEDIATE

    def __init__(self, *, fuzzy_threshold: float = 85.0) -> None:
        self._fuzzy_threshold = fuzzy_threshold
        self._logger = structlog.get_logger(__name__)

    def parse(self, raw: Mapping[str, Any] | str | bytes) -> ParsedApplication:
        data = self._normalize_keys(self._load(raw))
        issues: list[FieldIssue] = []

        def recover(name: str, default: Any, coerce, *args: Any) -> Any:
            try:
                return coerce(name, data.get(name), *args)
            except InvalidProfileField as exc:
                issues.append(FieldIssue(name, exc.value, exc.reason, default))
                self._logger.warning(
                    "intake.invalid_field", field=name, reason=exc.reason, default=str(default)
                )
                return default

        documents = recover("documents", (), self._documents)
        profile = ApplicantProfile(
            education_level=recover(
                "education_level", self.DEFAULT_EDUCATION, self._choice, EDUCATION_ALIASES
            ),
            experience_years=recover("experience_years", 0, self._non_negative_int),
            current_salary=recover("current_salary", None, self._salary),
            language_proficiency=recover(
                "language_proficiency", self.DEFAULT_LANGUAGE, self._choice, LANGUAGE_ALIASES
            ),
            has_awards=recover("has_awards", False, self._boolean),
            awards=recover("awards", (), self._awards),
            has_recognized_employer=recover("has_recognized_employer", False, self._boolean),
            documents=documents,
            document_count=recover("document_count", len(documents), self._document_count, documents),
        )
        request = EvaluationRequest(
            profile=profile,
            country=str(data.get("country") or "").strip(),
            visa_category=str(data.get("visa_category") or "").strip(),
            partner_score_cap=recover("partner_score_cap", None, self._partner_cap),
            reference=str(data["reference"]) if data.get("reference") is not None else None,
        )
        return ParsedApplication(request=request, issues=issues)

    @staticmethod
    def _load(raw: Mapping[str, Any] | str | bytes) -> dict[str, Any]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ValueError("Invalid application payload") from exc
        if not isinstance(raw, Mapping):
            raise ValueError("Application payload must be a JSON object")
        return dict(raw)

    @staticmethod
    def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
        payload = data.get("payload", data)
        if not isinstance(payload, Mapping):
            raise ValueError("Application payload must be a JSON object")
        return {FIELD_ALIASES.get(key, key): value for key, value in payload.items()}

    def _choice(self, name: str, value: Any, aliases: Mapping[str, E]) -> E:
        if isinstance(value, Enum) and value in aliases.values():
            return value  # type: ignore[return-value]
        if not isinstance(value, str) or not value.strip():
            raise InvalidProfileField(name, value, "missing")
        key = utils.default_process(value)
        if key in aliases:
            return aliases[key]
        for member in aliases.values():
            if utils.default_process(member.value) == key:
                return member
        match = process.extractOne(
            key,
            list(aliases),
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            score_cutoff=self._fuzzy_threshold,
        )
        if match is None:
            raise InvalidProfileField(name, value, "unrecognized value")
        return aliases[match[0]]

    @staticmethod
    def _number(name: str, value: Any) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidProfileField(name, value, "missing")
        if isinstance(value, bool):
            raise InvalidProfileField(name, value, "not a number")
        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError as exc:
                raise InvalidProfileField(name, value, "not a finite number") from exc
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                try:
                    number = float(_NUMBER_NOISE.sub("", value))
                except ValueError as exc:
                    raise InvalidProfileField(name, value, "not a number") from exc
        else:
            raise InvalidProfileField(name, value, "not a number")
        if number != number or number in (float("inf"), float("-inf")):
            raise InvalidProfileField(name, value, "not a finite number")
        return number

    def _non_negative_int(self, name: str, value: Any) -> int:
        number = self._number(name, value)
        if number < 0:
            raise InvalidProfileField(name, value, "negative")
        return int(number)

    def _salary(self, name: str, value: Any) -> float:
        number = self._number(name, value)
        if number < 0:
            raise InvalidProfileField(name, value, "negative")
        return number

    @staticmethod
    def _boolean(name: str, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
        raise InvalidProfileField(name, value, "not a boolean")

    @staticmethod
    def _json_list(name: str, value: Any) -> list[Any]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise InvalidProfileField(name, value, "invalid JSON") from exc
        if not isinstance(value, (list, tuple)):
            raise InvalidProfileField(name, value, "not a list")
        return list(value)

    def _awards(self, name: str, value: Any) -> tuple[Award, ...]:
        try:
            return self._award_entries(name, value)
        except ValidationError as exc:
            raise InvalidProfileField(name, value, "invalid award entry") from exc

    def _award_entries(self, name: str, value: Any) -> tuple[Award, ...]:
        awards: list[Award] = []
        for item in self._json_list(name, value):
            if isinstance(item, str):
                awards.append(Award(title=item))
            elif isinstance(item, Mapping):
                year = item.get("year")
                awards.append(
                    Award(
                        title=str(item.get("title") or item.get("name") or ""),
                        organization=item.get("organization") or None,
                        year=int(year) if isinstance(year, int) or str(year).isdigit() else None,
                    )
                )
            else:
                raise InvalidProfileField(name, value, "award entries must be objects or strings")
        return tuple(awards)

    def _documents(self, name: str, value: Any) -> tuple[DocumentMetadata, ...]:
        try:
            return self._document_entries(name, value)
        except ValidationError as exc:
            raise InvalidProfileField(name, value, "invalid document entry") from exc

    def _document_entries(self, name: str, value: Any) -> tuple[DocumentMetadata, ...]:
        documents: list[DocumentMetadata] = []
        for item in self._json_list(name, value):
            if isinstance(item, str):
                documents.append(DocumentMetadata(declared_type=item))
            elif isinstance(item, Mapping):
                documents.append(
                    DocumentMetadata(
                        declared_type=item.get("declared_type") or item.get("type"),
                        filename=item.get("filename") or item.get("originalName"),
                    )
                )
            else:
                raise InvalidProfileField(name, value, "document entries must be objects or strings")
        return tuple(documents)

    def _document_count(
        self, name: str, value: Any, documents: tuple[DocumentMetadata, ...]
    ) -> int:
        if value is None or value == "":
            return len(documents)
        return self._non_negative_int(name, value)

    def _partner_cap(self, name: str, value: Any) -> float | None:
        if value is None or value == "":
            return None
        number = self._number(name, value)
        return min(max(number, 0.0), 100.0)


__all__ = ["ApplicationParser", "FieldIssue", "ParsedApplication"]
