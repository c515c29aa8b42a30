# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Shared CLI utilities.

Output helpers used across commands, plus loaders that turn JSON files
into engine types and report failures as :class:`click.ClickException`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import click
from qkrump_engine.errors import ResultFormatError
from qkrump_engine.results import JobMetadata, JobResult


def echo(msg: str, *, err: bool = False) -> None:
    """
    Print message to stdout or stderr.

    Parameters
    ----------
    msg : str
        Message to print.
    err : bool, default=False
        If True, print to stderr instead of stdout.
    """
    click.echo(msg, err=err)


def print_json(obj: Any) -> None:
    """Print object as indented JSON; unknown types are stringified."""
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    title: str = "",
) -> None:
    """
    Print formatted ASCII table.

    Parameters
    ----------
    headers : sequence of str
        Column headers.
    rows : sequence of sequence
        Table rows, same length as ``headers``.
    title : str, optional
        Underlined title printed above the table.
    """
    if title:
        echo(f"\n{title}\n{'=' * len(title)}")

    if not rows:
        echo("(empty)")
        return

    widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(str(cell)))

    fmt = "  ".join(f"{{:<{w}}}" for w in widths)
    echo(fmt.format(*headers))
    echo(fmt.format(*["-" * w for w in widths]))
    for row in rows:
        echo(fmt.format(*[str(c) for c in row]))


def load_json_file(path: Path) -> Any:
    """Read a JSON file, failing with a CLI error on bad input."""
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e


def load_job_payload(
    path: Path,
    metadata_path: Path | None = None,
) -> tuple[JobResult, JobMetadata | None]:
    """
    Load a job result and optional metadata.

    ``path`` may hold either a bare result object or an envelope of the
    form ``{"results": {...}, "metadata": {...}}``. A separate metadata
    file takes precedence over envelope metadata.
    """
    data = load_json_file(path)
    meta_data = None
    if isinstance(data, dict) and isinstance(data.get("results"), dict):
        meta_data = data.get("metadata")
        data = data["results"]
    if metadata_path is not None:
        meta_data = load_json_file(metadata_path)

    try:
        result = JobResult.from_dict(data)
        metadata = JobMetadata.from_dict(meta_data) if meta_data is not None else None
    except ResultFormatError as e:
        raise click.ClickException(f"Invalid job result in {path}: {e}") from e
    return result, metadata
