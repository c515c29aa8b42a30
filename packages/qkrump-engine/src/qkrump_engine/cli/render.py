# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Report rendering CLI commands.

Commands that write SVG reports for job results and circuit source
files. Branding assets are resolved before rendering; a failed fetch
aborts the command without writing anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import click
from qkrump_engine.cli._utils import echo, load_job_payload
from qkrump_engine.render.reports import REPORT_KINDS, ReportDocument
from qkrump_engine.render.themes import THEMES


def register(cli: click.Group) -> None:
    """Register rendering commands with CLI."""
    cli.add_command(render_command)
    cli.add_command(portrait_command)


def _resolve_assets(no_assets: bool) -> Mapping[str, str] | None:
    if no_assets:
        return None

    from qkrump_engine.assets import AssetResolver
    from qkrump_engine.errors import AssetFetchError

    try:
        with AssetResolver() as resolver:
            return resolver.resolve()
    except AssetFetchError as e:
        raise click.ClickException(str(e)) from e


def _write(report: ReportDocument, output: Path | None) -> None:
    path = output or Path(report.filename)
    path.write_bytes(report.to_bytes())
    echo(f"Wrote {path} ({report.width:g}x{report.height:g})")


@click.command("render")
@click.argument(
    "result_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--kind",
    type=click.Choice(list(REPORT_KINDS)),
    default="auto",
    show_default=True,
    help="Report kind; auto picks the move report for krump circuits.",
)
@click.option(
    "--metadata",
    "metadata_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with circuit, shots, created_at, backend_type.",
)
@click.option("--theme", type=click.Choice(sorted(THEMES)), default=None)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output path (default: suggested filename in cwd).",
)
@click.option("--job-id", default=None, help="Job id used in the filename.")
@click.option("--no-assets", is_flag=True, help="Skip branding images.")
def render_command(
    result_file: Path,
    kind: str,
    metadata_file: Path | None,
    theme: str | None,
    output: Path | None,
    job_id: str | None,
    no_assets: bool,
) -> None:
    """
    Render an SVG report for a job result.

    \b
    Examples:
        qkrump render result.json
        qkrump render result.json --kind krump -o moves.svg
        qkrump render job.json --metadata meta.json --no-assets
    """
    from qkrump_engine.errors import KrumpError
    from qkrump_engine.render.reports import render_report

    result, metadata = load_job_payload(result_file, metadata_file)
    assets = _resolve_assets(no_assets)
    try:
        report = render_report(
            result,
            metadata,
            kind=kind,
            theme=theme,
            assets=assets,
            job_id=job_id,
        )
    except KrumpError as e:
        raise click.ClickException(str(e)) from e
    _write(report, output)


@click.command("portrait")
@click.argument(
    "code_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--name", default=None, help="Circuit name (default: file stem).")
@click.option("--domain", default=None, help="Domain badge text.")
@click.option("--prompt", default=None, help="Prompt the circuit was built from.")
@click.option("--category", default=None, help="Category pill text.")
@click.option("--backend", default=None)
@click.option("--shots", type=int, default=None)
@click.option("--no-highlight", is_flag=True, help="Disable syntax colouring.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
)
@click.option("--no-assets", is_flag=True, help="Skip branding images.")
def portrait_command(
    code_file: Path,
    name: str | None,
    domain: str | None,
    prompt: str | None,
    category: str | None,
    backend: str | None,
    shots: int | None,
    no_highlight: bool,
    output: Path | None,
    no_assets: bool,
) -> None:
    """Render a circuit source file as an SVG portrait."""
    from qkrump_engine.render.reports import PortraitMetadata, render_circuit_portrait

    try:
        code = code_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {code_file}: {e}") from e

    metadata = PortraitMetadata(
        circuit_name=name or code_file.stem,
        domain=domain,
        backend=backend,
        shots=shots,
        prompt=prompt,
        category=category,
    )
    report = render_circuit_portrait(
        code,
        metadata,
        assets=_resolve_assets(no_assets),
        highlight=not no_highlight,
    )
    _write(report, output)
