# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Pytest fixtures for qkrump service tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Generator

import pytest
from fastapi.testclient import TestClient
from qkrump_engine.config import Config, reset_config, set_config


FIXED_NOW = datetime(2025, 11, 2, 13, 53, 31, tzinfo=timezone.utc)

KRUMP_RESULTS = {
    "measurements": {"111": 500, "101": 300, "000": 200},
    "probabilities": {"111": 0.5, "101": 0.3, "000": 0.2},
    "circuit": "krump_choreography",
    "shots": 1000,
}

BELL_RESULTS = {
    "measurements": {"00": 512, "11": 512},
    "probabilities": {"00": 0.5, "11": 0.5},
    "statevector": None,
}


@pytest.fixture(autouse=True)
def isolated_config() -> Generator[Config, None, None]:
    """Network-free configuration for every test."""
    config = Config(embed_assets=False)
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_client(
    isolated_config: Config, fixed_clock: Callable[[], datetime]
) -> Callable[..., TestClient]:
    """Factory for test clients; keyword arguments go to ``create_app``."""
    from qkrump_ui.app import create_app

    def _make(**kwargs: Any) -> TestClient:
        kwargs.setdefault("config", isolated_config)
        kwargs.setdefault("clock", fixed_clock)
        return TestClient(create_app(**kwargs))

    return _make


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> Generator[TestClient, None, None]:
    """Test client with mock execution and no branding assets."""
    with make_client() as c:
        yield c


@pytest.fixture
def krump_results() -> dict[str, Any]:
    return dict(KRUMP_RESULTS)


@pytest.fixture
def bell_results() -> dict[str, Any]:
    return dict(BELL_RESULTS)
