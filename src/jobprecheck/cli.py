"""Typer CLI entrypoint for the eligibility pre-check."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from dependency_injector import providers
from pydantic import ValidationError

from .container import PrecheckContainer, create_container
from .logging import configure_logging
from .packs import PackLoadError
from .schemas.config import load_config
from .service import (
    AuditLogger,
    JDLoader,
    OutputWriter,
    ProfileFileLoader,
    build_report,
)

app = typer.Typer(help="Job description eligibility pre-check CLI.")

SOURCES = ("job_card", "jd_snapshot")


def _load_settings(config: Optional[Path]) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config file: {exc}", param_name="config") from exc


def _build_container(settings: dict[str, Any]) -> PrecheckContainer:
    container = create_container(settings=settings)
    try:
        container.registry()
    except (PackLoadError, KeyError) as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Packs file not found: {exc.filename}", param_name="config") from exc
    return container


@app.command()
def check(
    jd: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job description text path."),
    profile: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Profile JSON path."
    ),
    region: Optional[str] = typer.Option(None, help="Region code of the rule pack, e.g. CA."),
    track: Optional[str] = typer.Option(None, help="Track code of the rule pack, e.g. COOP."),
    source: str = typer.Option("job_card", help="Entry path: job_card or jd_snapshot."),
    output: Optional[Path] = typer.Option(
        None,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path. Printed to stdout when omitted.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Run the eligibility pre-check for a job description."""
    if source not in SOURCES:
        raise typer.BadParameter(f"Source must be one of {', '.join(SOURCES)}", param_name="source")

    settings = _load_settings(config)
    configure_logging(log_level)

    container = _build_container(settings)
    if audit_log:
        container.audit_logger.override(providers.Object(AuditLogger(audit_log)))
    service = container.service()

    profile_record = None
    if profile:
        try:
            profile_record = ProfileFileLoader().load(profile)
        except (ValueError, ValidationError) as exc:
            raise typer.BadParameter(str(exc), param_name="profile") from exc

    jd_text = JDLoader().load(jd)
    run = service.run(
        jd_text,
        source=source,  # type: ignore[arg-type]
        profile=profile_record,
        region_code=region,
        track_code=track,
    )
    if run is None:
        typer.echo("No JD text to check.")
        return

    result = run.result
    report = build_report(result, pack_key=run.pack_key, source=run.source)

    if output:
        OutputWriter().write(output, report)
        typer.echo(f"Pre-check status: {result.status}. Report saved to {output}.")
    else:
        typer.echo(json.dumps(report, ensure_ascii=False, indent=2))


@app.command()
def packs(
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """List the available region packs."""
    settings = _load_settings(config)
    container = _build_container(settings)
    registry = container.registry()
    for entry in registry.available():
        marker = " (default)" if entry["key"] == registry.default_key else ""
        typer.echo(f"{entry['key']}\t{entry['label']}{marker}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
