"""Typer CLI entrypoint for the ranking pipeline."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import typer

from .config import load_settings
from .container import create_container
from .core import (
    CandidateFilter,
    SortDirection,
    SortKey,
    impact_summary,
    summarize_regions,
)
from .export import COLUMN_SETS
from .logging import configure_logging

app = typer.Typer(help="Civic-engagement candidate ranking CLI.")


def _build_pipeline(config: Optional[Path], log_level: str):
    configure_logging(log_level)
    try:
        settings: dict[str, Any] = load_settings(config) if config else {}
        return create_container(settings=settings).pipeline()
    except ValueError as exc:
        _fail(f"Invalid config: {exc}")


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.command()
def rank(
    dataset: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Dataset JSON/YAML path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON report path."),
    export: Optional[Path] = typer.Option(None, dir_okay=False, help="Optional CSV export path."),
    columns: str = typer.Option("candidate", help="Export column set: candidate or proximity."),
    search: str = typer.Option("", help="Case-insensitive match on name, zip code or address."),
    engagement: str = typer.Option("all", help="High, Medium, Low or all."),
    zip_code: str = typer.Option("all", help="Restrict to one zip code."),
    selected_zip_code: Optional[str] = typer.Option(None, help="Zip code also accepted alongside --zip-code."),
    distance: str = typer.Option("all", help="near, medium, far or all."),
    improvement: str = typer.Option("all", help="high, medium, low or all."),
    bucket: str = typer.Option("all", help="Proximity bucket: high, medium, low or all."),
    sort: SortKey = typer.Option(SortKey.ENHANCED_SCORE, help="Sort key."),
    direction: SortDirection = typer.Option(SortDirection.DESC, help="Sort direction."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Rank candidates and write the report (and optional CSV export)."""
    if columns not in COLUMN_SETS:
        raise typer.BadParameter(f"Unknown column set {columns!r}", param_name="columns")
    try:
        predicates = CandidateFilter(
            search=search,
            engagement=engagement,
            zip_code=zip_code,
            selected_zip_code=selected_zip_code,
            distance=distance,
            improvement=improvement,
            bucket=bucket,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    pipeline = _build_pipeline(config, log_level)
    try:
        results = pipeline.run(
            dataset_path=dataset,
            output_path=output,
            predicates=predicates,
            sort_key=sort,
            sort_direction=direction,
            columns=COLUMN_SETS[columns],
            export_path=export,
        )
    except ValueError as exc:
        _fail(f"Error: {exc}")
    typer.echo(f"Ranked {len(results)} candidates. Results saved to {output}.")


@app.command()
def region(
    dataset: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Dataset JSON/YAML path."),
    zip_code: str = typer.Option(..., help="Zip code to summarize."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print engagement statistics for one region as JSON."""
    pipeline = _build_pipeline(config, log_level)
    try:
        stats = pipeline.region_report(dataset, zip_code)
    except ValueError as exc:
        _fail(f"Error: {exc}")
    typer.echo(json.dumps(asdict(stats), ensure_ascii=False, indent=2))


@app.command()
def overview(
    dataset: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Dataset JSON/YAML path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print region totals and the enhancement impact as JSON."""
    pipeline = _build_pipeline(config, log_level)
    try:
        loaded, enhanced = pipeline.load(dataset)
    except ValueError as exc:
        _fail(f"Error: {exc}")
    payload = {
        "regions": asdict(summarize_regions(loaded.regions)),
        "impact": asdict(impact_summary(enhanced)),
    }
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
