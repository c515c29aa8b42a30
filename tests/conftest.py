# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Shared fixtures for top-level qkrump tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest
from click.testing import CliRunner
from qkrump_engine.config import Config, reset_config, set_config


@pytest.fixture(autouse=True)
def isolated_config() -> Config:
    """Network-free configuration for every test."""
    config = Config(embed_assets=False)
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: datetime(2025, 11, 2, 13, 53, 31, tzinfo=timezone.utc)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def krump_file(tmp_path: Path) -> Path:
    """Krump job envelope written to disk."""
    path = tmp_path / "job.json"
    path.write_text(
        json.dumps(
            {
                "results": {
                    "measurements": {"110": 420, "011": 380, "100": 224},
                    "probabilities": {"110": 0.41, "011": 0.371, "100": 0.219},
                },
                "metadata": {
                    "circuit": "krump_choreography",
                    "shots": 1024,
                    "created_at": "2025-11-02T13:53:31Z",
                    "backend_type": "simulator",
                },
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def invoke(cli_runner: CliRunner, tmp_path: Path, monkeypatch) -> Callable[..., Any]:
    """
    Invoke the console entry point's CLI inside tmp_path.

    Usage:
        result = invoke("decode", "job.json")
    """
    from qkrump_engine.cli import cli

    monkeypatch.chdir(tmp_path)

    def _invoke(*args: str):
        return cli_runner.invoke(cli, list(args))

    return _invoke
