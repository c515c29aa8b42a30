# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Shared test fixtures for qkrump_engine tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from qkrump_engine.config import Config, reset_config, set_config
from qkrump_engine.decoder.moves import MoveTable, make_move
from qkrump_engine.results import JobMetadata, JobResult


FIXED_NOW = datetime(2025, 11, 2, 13, 53, 31, tzinfo=timezone.utc)


# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config() -> Config:
    """Install a network-free configuration for every test."""
    config = Config(embed_assets=False)
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at 2025-11-02 13:53:31 UTC."""
    return lambda: FIXED_NOW


# =============================================================================
# Result fixtures
# =============================================================================


@pytest.fixture
def make_result() -> Callable[..., JobResult]:
    """Factory for job results from counts (probabilities derived if omitted)."""

    def _make(
        measurements: dict[str, int],
        probabilities: dict[str, float] | None = None,
        **fields: Any,
    ) -> JobResult:
        if probabilities is None:
            total = sum(measurements.values())
            probabilities = {k: v / total for k, v in measurements.items()} if total else {}
        return JobResult(
            measurements=dict(measurements),
            probabilities=dict(probabilities),
            **fields,
        )

    return _make


@pytest.fixture
def krump_result(make_result: Callable[..., JobResult]) -> JobResult:
    """All eight moves with distinct counts over 1000 shots."""
    return make_result(
        {
            "000": 40,
            "001": 60,
            "010": 80,
            "011": 100,
            "100": 120,
            "101": 150,
            "110": 200,
            "111": 250,
        },
        shots=1000,
        circuit="krump_choreography",
    )


@pytest.fixture
def bell_result() -> JobResult:
    """Mock Bell-state result as produced without an execution service."""
    return JobResult.from_dict(
        {
            "measurements": {"00": 512, "11": 512},
            "probabilities": {"00": 0.5, "11": 0.5},
            "statevector": None,
        }
    )


@pytest.fixture
def bell_metadata() -> JobMetadata:
    return JobMetadata(
        circuit="bell_state",
        shots=1024,
        created_at="2025-11-02T13:53:31Z",
        backend_type="simulator",
    )


@pytest.fixture
def two_bit_table() -> MoveTable:
    """2-bit table for decoding Bell-state outcomes."""
    return MoveTable(
        2,
        [
            make_move("00", "Hold", "Both dancers still", "🕴️"),
            make_move("01", "Echo", "Second dancer answers", "💢"),
            make_move("10", "Call", "First dancer leads", "🙌"),
            make_move("11", "Unison", "Both dancers hit together", "🔥"),
        ],
    )
