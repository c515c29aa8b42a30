# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Probability distribution utilities for measurement results.

This module provides small vectorized helpers for turning raw shot
counts into probabilities, sanitizing supplied probabilities before
they feed numeric formulas, and computing weighted means.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

import numpy as np
from numpy.typing import NDArray


logger = logging.getLogger(__name__)

# Tolerance for "probabilities sum to one" checks.
PROBABILITY_TOLERANCE = 1e-6


def normalize_counts(counts: Mapping[str, int]) -> dict[str, float]:
    """
    Normalize raw shot counts into probabilities.

    Parameters
    ----------
    counts : mapping
        Raw counts mapping outcome bitstrings to shot counts.

    Returns
    -------
    dict
        Probabilities in [0, 1]. Empty dict if total is zero.
    """
    total = sum(counts.values())
    if total <= 0:
        return {}
    return {k: v / total for k, v in counts.items()}


def clamp_probability(value: float) -> float:
    """
    Clamp a single probability into [0, 1].

    ``NaN`` maps to 0 so that degenerate divisions upstream never leak
    into formulas or rendered text.
    """
    if value is None or math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, float(value)))


def clamp_probabilities(values: Sequence[float]) -> NDArray[np.float64]:
    """
    Clamp an array of probabilities into [0, 1], mapping ``NaN`` to 0.

    Parameters
    ----------
    values : sequence of float
        Raw probabilities.

    Returns
    -------
    ndarray
        Sanitized probabilities with the same length as ``values``.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr
    return np.clip(np.nan_to_num(arr, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0)


def weighted_mean(
    values: Sequence[float],
    weights: Sequence[float],
) -> float:
    """
    Compute ``sum(values * weights)`` guarded against an empty weight mass.

    Weights are clamped into [0, 1] first. When the clamped weights sum
    to zero the result is defined as 0; when they sum to more than one
    they are renormalized, so the result stays within the range of
    ``values``.

    Parameters
    ----------
    values : sequence of float
        Quantities to weight.
    weights : sequence of float
        Probability weights, same length as ``values``.

    Returns
    -------
    float
        Probability-weighted sum, renormalized when the weight mass
        exceeds one.

    Raises
    ------
    ValueError
        If the sequences differ in length.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have the same length")
    w = clamp_probabilities(weights)
    mass = float(np.sum(w)) if w.size else 0.0
    if mass <= 0.0:
        return 0.0
    v = np.asarray(values, dtype=np.float64)
    total = float(np.dot(v, w))
    if mass > 1.0:
        return total / mass
    return total


def probability_mass(probabilities: Mapping[str, float]) -> float:
    """Sum of clamped probabilities."""
    return float(np.sum(clamp_probabilities(list(probabilities.values()))))


def is_normalized(
    probabilities: Mapping[str, float],
    tol: float = PROBABILITY_TOLERANCE,
) -> bool:
    """Whether probabilities sum to one within ``tol``."""
    if not probabilities:
        return False
    return abs(probability_mass(probabilities) - 1.0) <= tol
