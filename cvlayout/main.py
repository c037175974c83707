from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .layout.planner import layout_document
from .pipeline.ingest import discover_documents, load_document
from .pipeline.qa import check_layout
from .pipeline.run import run_pipeline

app = typer.Typer(help="Single-page resume layout engine")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def plan(
    resume: Path = typer.Argument(..., help="Resume JSON file"),
    template: Optional[str] = typer.Option(None, "--template", help="Template id"),
    budget: Optional[float] = typer.Option(None, "--budget", help="Page budget in mm (overrides template)"),
    as_json: bool = typer.Option(False, "--json", help="Print the layout report as JSON"),
) -> None:
    try:
        document = load_document(resume)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    page_budget = budget if budget is not None else config.page_budget_for(config.get_template(template))
    report = layout_document(document, page_budget)
    warnings = check_layout(report)

    if as_json:
        typer.echo(json.dumps({**report.to_dict(), "warnings": warnings}, indent=2))
        return
    for estimate in report.estimates:
        label = estimate.key or estimate.kind.value
        typer.echo(f"{label:<24}{estimate.height_mm:>7.1f}mm")
    typer.echo(f"Total: {report.total_content_mm:.1f}mm of {report.page_budget_mm:.1f}mm (slack {report.slack_mm:.1f}mm)")
    typer.echo(f"Spacing: {report.plan.inter_section_spacing_mm}mm")
    typer.echo(f"Distribute slack: {'yes' if report.plan.distribute_slack else 'no'}")
    for warning in warnings:
        typer.echo(f"WARNING: {warning}")


@app.command()
def build(
    path: Path = typer.Argument(..., help="Resume JSON file or directory of them"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    template: Optional[str] = typer.Option(None, "--template", help="Template id"),
) -> None:
    if out:
        config.set_out_dir(out)
    try:
        paths = discover_documents(path)
    except FileNotFoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    if not paths:
        typer.echo("No resumes to render")
        return
    results = run_pipeline(paths, template_id=template)
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"TIGHT: {len(results['TIGHT'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["TIGHT"]:
        typer.echo(f"TIGHT: {slug}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")


@app.command()
def templates() -> None:
    for preset in config.load_template_presets():
        typer.echo(f"{preset['id']:<12}{preset['name']:<22}budget {config.page_budget_for(preset):g}mm")


if __name__ == "__main__":
    app()
