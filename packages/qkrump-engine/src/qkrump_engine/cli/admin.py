# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Configuration and service CLI commands."""

from __future__ import annotations

import click
from qkrump_engine.cli._utils import echo, print_json


def register(cli: click.Group) -> None:
    """Register admin commands with CLI."""
    cli.add_command(config_cmd)
    cli.add_command(serve_command)


@click.command("config")
@click.option("--format", "fmt", type=click.Choice(["pretty", "json"]), default="pretty")
def config_cmd(fmt: str) -> None:
    """Show the active configuration."""
    from dataclasses import asdict

    from qkrump_engine.config import get_config

    config = get_config()
    if fmt == "json":
        print_json(asdict(config))
        return

    echo(f"Asset timeout:      {config.asset_timeout}s")
    echo(f"Asset retries:      {config.asset_retry_attempts}")
    echo(f"Embed assets:       {config.embed_assets}")
    for slot, source in sorted(config.brand_assets.items()):
        echo(f"  {slot:<16} {source}")
    echo(f"Raw data max lines: {config.raw_data_max_lines}")
    echo(f"Routine size:       {config.routine_size}")
    echo(f"Quantum service:    {config.quantum_service_url or '(mock results)'}")


# Modules installed by the ``ui`` extra.
UI_REQUIREMENTS = ("fastapi", "pydantic", "uvicorn")


def _is_ui_available() -> bool:
    """Check whether the web service and its ``ui`` extra can be imported."""
    from importlib.util import find_spec

    return all(find_spec(name) is not None for name in ("qkrump_ui", *UI_REQUIREMENTS))


@click.command("serve")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--port", "-p", default=8080, type=int, help="Port to listen on.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def serve_command(host: str, port: int, debug: bool) -> None:
    """
    Launch the report web service.

    Requires the qkrump ``ui`` extra.

    Examples:
        qkrump serve
        qkrump serve --port 9000
    """
    if not _is_ui_available():
        echo("Error: the web service requires the qkrump ui extra.", err=True)
        echo("", err=True)
        echo('Install it with:  pip install "qkrump[ui]"', err=True)
        raise SystemExit(1)

    from qkrump_ui.app import run_server

    echo(f"Starting qkrump service at http://{host}:{port}")
    run_server(host=host, port=port, debug=debug)
