# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Move decoding CLI command."""

from __future__ import annotations

from pathlib import Path

import click
from qkrump_engine.cli._utils import echo, load_job_payload, print_json, print_table


def register(cli: click.Group) -> None:
    """Register decoding commands with CLI."""
    cli.add_command(decode_command)


@click.command("decode")
@click.argument(
    "result_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--top",
    "-n",
    type=int,
    default=None,
    help="Suggested routine length (default from config).",
)
@click.option("--format", "fmt", type=click.Choice(["pretty", "json"]), default="pretty")
def decode_command(result_file: Path, top: int | None, fmt: str) -> None:
    """
    Decode measurement outcomes into krump moves.

    \b
    Examples:
        qkrump decode result.json
        qkrump decode result.json --top 3 --format json
    """
    from qkrump_engine.config import get_config
    from qkrump_engine.decoder import (
        average_energy,
        decode_result,
        energy_distribution,
        energy_label,
        top_n,
    )
    from qkrump_engine.errors import UnknownOutcomeError

    result, metadata = load_job_payload(result_file)
    try:
        decoded = decode_result(result)
    except UnknownOutcomeError as e:
        raise click.ClickException(str(e)) from e

    size = top if top is not None else get_config().routine_size
    routine = top_n(decoded, size)
    avg = average_energy(decoded)

    if fmt == "json":
        print_json(
            {
                "moves": [d.to_dict() for d in decoded],
                "suggested_routine": [d.to_dict() for d in routine],
                "total_shots": result.total_shots(metadata),
                "average_energy": avg,
                "energy_distribution": {
                    str(k): v for k, v in energy_distribution(decoded).items()
                },
            }
        )
        return

    print_table(
        ["Outcome", "Move", "Energy", "Count", "Probability"],
        [
            [
                d.bitstring,
                f"{d.emoji} {d.name}",
                d.energy,
                d.count,
                f"{d.probability * 100:.1f}%",
            ]
            for d in decoded
        ],
        title="Decoded Moves",
    )
    echo(f"\nTotal shots: {result.total_shots(metadata)}")
    echo(f"Average energy: {avg:.2f} {energy_label(int(avg + 0.5))}")
    if routine:
        echo("\nSuggested routine:")
        for i, d in enumerate(routine, start=1):
            echo(f"  {i}. {d.emoji} {d.name} ({d.probability * 100:.1f}%)")
