# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
qkrump command-line interface.

Commands
--------
decode
    Decode measurement outcomes into krump moves.
render
    Render an SVG report for a job result.
portrait
    Render a circuit source file as an SVG portrait.
config
    Show the active configuration.
serve
    Launch the report web service.
"""

from __future__ import annotations

import logging

import click
from qkrump_engine.cli import admin, decode, render


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Quantum krump: decode measurement results and render reports."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


decode.register(cli)
render.register(cli)
admin.register(cli)


def main() -> None:
    """Console script entry point."""
    cli()


__all__ = ["cli", "main"]
