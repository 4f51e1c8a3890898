"""CLI entry point for the governance metrics aggregator.

Commands:
- report: Generate a governance report from a measurements file
- catalog: List the registered governance metrics

Reports are written to the output directory as Markdown and JSON and the
Markdown document is printed to stdout.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from govmetrics.config import load_config
from govmetrics.definitions import MetricCategory, ReportingPeriod
from govmetrics.errors import GovernanceReportError
from govmetrics.metrics import MetricsAggregator
from govmetrics.providers import build_static_providers, load_measurements
from govmetrics.reporting import FileReportSink, LogReportSink, ReportRunner

# Initialize Typer application with descriptive help text
app = typer.Typer(help="Governance metrics aggregator - periodic documentation governance reports")


@app.command()
def report(
    period: ReportingPeriod = typer.Argument(..., help="Reporting period to generate"),
    measurements: Path = typer.Option(..., "--measurements", "-m", help="Measurements file (YAML, JSON or TOML)"),
    anchor: Optional[datetime] = typer.Option(
        None, "--anchor", formats=["%Y-%m-%d"], help="Any date inside the reporting window"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for report files"),
    sequential: bool = typer.Option(False, "--sequential", help="Request samples one at a time"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds allowed per provider call"),
):
    """Generate a governance report.

    Every registered metric must have a measurement for the period window
    containing ANCHOR (by default the window of the most recent measurement).
    A missing or inconsistent measurement aborts the report without writing
    anything.
    """
    report_anchor = anchor.date() if anchor else None
    try:
        cfg = load_config(config)
        if sequential:
            cfg['collection']['parallel'] = False

        aggregator = MetricsAggregator(config=cfg)
        providers = build_static_providers(
            load_measurements(measurements), aggregator.registry, anchor=report_anchor
        )
        runner = ReportRunner(
            aggregator,
            sinks=[FileReportSink(output_dir or cfg['output']['directory']), LogReportSink()],
        )
        _, document = asyncio.run(runner.run(
            period,
            providers,
            anchor=report_anchor,
            timeout=timeout,
        ))
    except GovernanceReportError as e:
        typer.echo(f"Report generation failed: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(document)


@app.command()
def catalog(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
):
    """List the registered governance metrics per category."""
    try:
        registry = MetricsAggregator(config=load_config(config)).registry
    except GovernanceReportError as e:
        typer.echo(f"Cannot load metric catalogue: {e}", err=True)
        raise typer.Exit(code=1)

    for category in MetricCategory:
        typer.echo(f"{category.title}:")
        for definition in registry.metrics(category).values():
            orientation = "higher is better" if definition.higher_is_better else "lower is better"
            typer.echo(
                f"  {definition.name}: target {definition.target:g} {definition.unit.value}, "
                f"{definition.frequency.value}, {orientation}"
            )


if __name__ == "__main__":
    app()
