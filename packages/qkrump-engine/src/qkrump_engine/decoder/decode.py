# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Measurement decoding.

Turns ``{bitstring: count}`` / ``{bitstring: probability}`` maps into a
ranked list of :class:`DecodedMove` records and derives summary values
(suggested routine, average energy, energy distribution).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from qkrump_engine.decoder.moves import (
    KRUMP_TABLE,
    KrumpMove,
    MoveComponents,
    MoveTable,
)
from qkrump_engine.results import JobResult
from qkrump_engine.utils.distributions import clamp_probability, weighted_mean


logger = logging.getLogger(__name__)

ENERGY_LEVELS = (0, 1, 2, 3)

_ENERGY_LABELS = {
    0: "⚡",
    1: "⚡⚡",
    2: "⚡⚡⚡",
    3: "⚡⚡⚡⚡",
}

ENERGY_NAMES = {0: "Rest", 1: "Low", 2: "Medium", 3: "High"}


@dataclass(frozen=True)
class DecodedMove:
    """
    A move together with its measured statistics.

    Attributes
    ----------
    move : KrumpMove
        Table entry for the outcome.
    count : int
        Shots that produced the outcome.
    probability : float
        Outcome probability (0 when not supplied).
    """

    move: KrumpMove
    count: int
    probability: float

    @property
    def bitstring(self) -> str:
        return self.move.bitstring

    @property
    def name(self) -> str:
        return self.move.name

    @property
    def description(self) -> str:
        return self.move.description

    @property
    def energy(self) -> int:
        return self.move.energy

    @property
    def emoji(self) -> str:
        return self.move.emoji

    @property
    def components(self) -> MoveComponents:
        return self.move.components

    def to_dict(self) -> dict[str, Any]:
        """Flatten move fields and statistics into one dictionary."""
        d = self.move.to_dict()
        d["count"] = self.count
        d["probability"] = self.probability
        return d


def decode(
    measurements: Mapping[str, int],
    probabilities: Mapping[str, float] | None = None,
    *,
    table: MoveTable = KRUMP_TABLE,
) -> list[DecodedMove]:
    """
    Decode measurement counts into ranked moves.

    Parameters
    ----------
    measurements : mapping
        Bitstring to count. One record is produced per key.
    probabilities : mapping, optional
        Bitstring to probability. Absent keys count as 0; values are
        clamped into [0, 1] with ``NaN`` mapped to 0.
    table : MoveTable, optional
        Move table to decode against. Defaults to the 3-bit krump table.

    Returns
    -------
    list of DecodedMove
        Sorted by probability, descending. Ties keep the iteration
        order of ``measurements``.

    Raises
    ------
    UnknownOutcomeError
        If any bitstring has no move-table entry. Nothing is returned
        in that case.
    """
    probabilities = probabilities or {}
    decoded = [
        DecodedMove(
            move=table.lookup(bitstring),
            count=int(count),
            probability=clamp_probability(float(probabilities.get(bitstring, 0.0))),
        )
        for bitstring, count in measurements.items()
    ]
    decoded.sort(key=lambda d: d.probability, reverse=True)
    logger.debug("Decoded %d outcomes", len(decoded))
    return decoded


def decode_result(
    result: JobResult,
    *,
    table: MoveTable = KRUMP_TABLE,
) -> list[DecodedMove]:
    """Decode a parsed :class:`JobResult`."""
    return decode(result.measurements, result.probabilities, table=table)


def top_n(decoded: Sequence[DecodedMove], n: int = 5) -> list[DecodedMove]:
    """
    Return the first ``n`` moves of an already ranked sequence.

    Fewer are returned when the input is shorter; ``n <= 0`` yields an
    empty list.
    """
    if n <= 0:
        return []
    return list(decoded[:n])


def average_energy(decoded: Sequence[DecodedMove]) -> float:
    """
    Probability-weighted mean energy.

    Computes ``sum(energy * probability)`` with probabilities clamped to
    [0, 1]. Defined as 0 when the probability mass is zero.
    """
    return weighted_mean(
        [d.energy for d in decoded],
        [d.probability for d in decoded],
    )


def energy_label(energy: int) -> str:
    """Symbolic label for an energy level; out-of-range levels use level 0."""
    return _ENERGY_LABELS.get(energy, _ENERGY_LABELS[0])


def energy_distribution(decoded: Sequence[DecodedMove]) -> dict[int, float]:
    """
    Probability mass per energy level.

    Returns
    -------
    dict
        Keys 0..3, always all present.
    """
    dist = {level: 0.0 for level in ENERGY_LEVELS}
    for d in decoded:
        dist[d.energy] += clamp_probability(d.probability)
    return dist
