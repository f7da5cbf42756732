"""Batch evaluation pipeline assembly and execution."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import pendulum
import structlog

from . import __version__
from .core import EligibilityEngine, EvaluationResult, UnknownVisaCategory
from .intake import ApplicationParser, FieldIssue, ParsedApplication


@dataclass(slots=True)
class LoadedApplication:
    line: int
    parsed: ParsedApplication


class ApplicationLoadError(ValueError):
    """Raised when application loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[LoadedApplication]):
        super().__init__("Application loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Application loading failed: {self.errors}"


class ApplicationLoader:
    """Load application records from JSON lines."""

    def __init__(self, parser: ApplicationParser | None = None):
        self._parser = parser or ApplicationParser()

    def load(self, path: Path) -> list[LoadedApplication]:
        applications: list[LoadedApplication] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                try:
                    parsed = self._parser.parse(record)
                except ValueError as exc:
                    errors.append(f"line {idx}: {exc}")
                    continue
                applications.append(LoadedApplication(line=idx, parsed=parsed))
        if errors:
            raise ApplicationLoadError(errors, applications)
        return applications

    def load_one(self, path: Path) -> ParsedApplication:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid application JSON: {exc}") from exc
        return self._parser.parse(data)


class OutputWriter:
    """Persist evaluation outcomes."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def serialize_result(
    result: EvaluationResult,
    issues: list[FieldIssue] | None = None,
) -> dict[str, Any]:
    """Convert an evaluation result into a JSON-safe mapping."""
    payload = asdict(result)
    payload["input_issues"] = [asdict(issue) for issue in issues or []]
    return json.loads(json.dumps(payload, default=_json_default, ensure_ascii=False))


class EvaluationPipeline:
    """End-to-end batch evaluation orchestrator."""

    def __init__(
        self,
        *,
        engine: EligibilityEngine,
        loader: ApplicationLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._loader = loader or ApplicationLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def evaluate(self, parsed: ParsedApplication) -> dict[str, Any]:
        """Evaluate one parsed application; raises UnknownVisaCategory."""
        result = self._engine.evaluate(parsed.request)
        return serialize_result(result, parsed.issues)

    def run(
        self,
        *,
        applications_path: Path,
        output_path: Path,
        audit_logger: "AuditLogger | None" = None,
    ) -> list[dict]:
        load_errors: list[str] = []
        try:
            applications = self._loader.load(applications_path)
        except ApplicationLoadError as exc:
            applications = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("applications.partial_load", errors=exc.errors)

        serialized_results: list[dict] = []

        for application in applications:
            request = application.parsed.request
            try:
                serialized_entry = self.evaluate(application.parsed)
            except UnknownVisaCategory as exc:
                load_errors.append(f"line {application.line}: {exc}")
                self._logger.warning(
                    "evaluation.unknown_visa_category",
                    line=application.line,
                    country=exc.country,
                    visa_category=exc.visa_category,
                )
                continue
            serialized_entry["reference"] = request.reference
            serialized_entry["line"] = application.line
            serialized_results.append(serialized_entry)

            if audit_logger:
                audit_logger.append(
                    {
                        "timestamp": pendulum.now("UTC").to_iso8601_string(),
                        "reference": request.reference,
                        "country": serialized_entry["country"],
                        "visa_category": serialized_entry["visa_category"],
                        "source": serialized_entry["source"],
                        "fallback_reason": serialized_entry["fallback_reason"],
                        "scores": serialized_entry["scores"],
                        "ceilings": serialized_entry["ceilings"],
                        "total_score": serialized_entry["total_score"],
                        "final_score": serialized_entry["final_score"],
                        "likelihood": serialized_entry["likelihood"],
                        "input_issues": serialized_entry["input_issues"],
                    }
                )

        metadata = {
            "application_count": len(applications),
            "evaluated_count": len(serialized_results),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        payload_with_meta = {
            "metadata": metadata,
            "results": serialized_results,
        }

        self._writer.write(output_path, payload_with_meta)
        return serialized_results


def _json_default(value):  # type: ignore[override]
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")
