"""Typer CLI entrypoint for the eligibility engine."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import load_yaml
from .container import EligibilityContainer, create_container
from .core import UnknownVisaCategory
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas.config import load_config

app = typer.Typer(help="Visa eligibility scoring CLI.")

EXIT_UNKNOWN_VISA = 2


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    try:
        return load_config(load_yaml(config)).to_settings()
    except (ValueError, ValidationError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_hint="--config") from exc


def _build(
    config: Optional[Path],
    log_level: str,
    gemini_api_key: Optional[str],
) -> EligibilityContainer:
    configure_logging(log_level)
    return create_container(settings=_load_settings(config), gemini_api_key=gemini_api_key)


@app.command()
def run(
    applications: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applications JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
    gemini_api_key: Optional[str] = typer.Option(None, envvar="GEMINI_API_KEY", help="Gemini API key."),
) -> None:
    """Evaluate a batch of applications."""
    container = _build(config, log_level, gemini_api_key)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run(
        applications_path=applications,
        output_path=output,
        audit_logger=audit_logger,
    )
    typer.echo(f"Evaluated {len(results)} applications. Results saved to {output}.")


@app.command()
def evaluate(
    application: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Application JSON path."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Write the result here instead of stdout."),
    partner_cap: Optional[float] = typer.Option(None, min=0, max=100, help="Partner score cap (0-100)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
    gemini_api_key: Optional[str] = typer.Option(None, envvar="GEMINI_API_KEY", help="Gemini API key."),
) -> None:
    """Evaluate a single application."""
    container = _build(config, log_level, gemini_api_key)
    try:
        parsed = container.application_loader().load_one(application)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--application") from exc
    if partner_cap is not None:
        parsed.request = parsed.request.model_copy(update={"partner_score_cap": partner_cap})

    try:
        result = container.pipeline().evaluate(parsed)
    except UnknownVisaCategory as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_UNKNOWN_VISA) from exc

    rendered = json.dumps(result, ensure_ascii=False, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Result saved to {output}.")
    else:
        typer.echo(rendered)


@app.command()
def catalog(
    country: Optional[str] = typer.Option(None, help="Show only this country."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """List supported countries, visa categories and required documents."""
    container = _build(config, "WARNING", None)
    requirements_catalog = container.catalog()
    countries = [country] if country else requirements_catalog.countries()
    for name in countries:
        visas = requirements_catalog.visas(name)
        if not visas:
            typer.echo(f"No visa data available for {name}.", err=True)
            raise typer.Exit(code=EXIT_UNKNOWN_VISA)
        typer.echo(name)
        for visa in visas:
            requirements = requirements_catalog.lookup(name, visa)
            typer.echo(
                f"  {visa}: min salary {requirements.min_salary:,.0f}, "
                f"min experience {requirements.min_experience_years}y, "
                f"documents: {', '.join(requirements.required_documents)}"
            )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
