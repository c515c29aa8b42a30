# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Job result model.

This module defines the shapes consumed by the decoder and the report
renderer: :class:`JobResult` (measurement counts and probabilities as
returned by the execution service), :class:`JobMetadata` (descriptive
job context) and :class:`MeasurementOutcome` (a single observed
bitstring).

Parsing is tolerant: absent maps become empty, absent scalars stay
``None`` and display fallbacks are applied later by
:func:`resolve_context`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from qkrump_engine.errors import ResultFormatError
from qkrump_engine.utils.common import Clock, format_timestamp
from qkrump_engine.utils.distributions import (
    PROBABILITY_TOLERANCE,
    clamp_probability,
    is_normalized,
    normalize_counts,
    probability_mass,
)


logger = logging.getLogger(__name__)

DEFAULT_CIRCUIT = "Unknown Circuit"
DEFAULT_BACKEND = "simulator"
KRUMP_CIRCUIT = "krump_choreography"


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class MeasurementOutcome:
    """
    A single bit pattern observed when sampling a circuit.

    Attributes
    ----------
    bitstring : str
        Fixed-width outcome, e.g. ``"011"``.
    count : int
        Occurrences across all shots.
    probability : float
        Fraction in [0, 1].
    """

    bitstring: str
    count: int
    probability: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "bitstring": self.bitstring,
            "count": self.count,
            "probability": self.probability,
        }


# =============================================================================
# Metadata
# =============================================================================


@dataclass
class JobMetadata:
    """
    Descriptive context attached to a report.

    Attributes
    ----------
    circuit : str, optional
        Circuit name.
    shots : int, optional
        Requested shot count.
    created_at : str, optional
        ISO 8601 creation timestamp.
    backend_type : str, optional
        Backend identifier.
    """

    circuit: str | None = None
    shots: int | None = None
    created_at: str | None = None
    backend_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset fields."""
        d: dict[str, Any] = {}
        if self.circuit is not None:
            d["circuit"] = self.circuit
        if self.shots is not None:
            d["shots"] = self.shots
        if self.created_at is not None:
            d["created_at"] = self.created_at
        if self.backend_type is not None:
            d["backend_type"] = self.backend_type
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> JobMetadata:
        """Create from dictionary; ``None`` yields empty metadata."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ResultFormatError("metadata must be a mapping")
        return cls(
            circuit=_opt_str(data.get("circuit")),
            shots=_opt_int(data.get("shots"), "shots"),
            created_at=_opt_str(data.get("created_at")),
            backend_type=_opt_str(data.get("backend_type")),
        )


# =============================================================================
# Job result
# =============================================================================


@dataclass
class JobResult:
    """
    Raw result payload of a quantum job.

    Attributes
    ----------
    measurements : dict
        Bitstring to shot count.
    probabilities : dict
        Bitstring to fraction in [0, 1]. Keys need not match
        ``measurements`` exactly.
    shots : int, optional
        Total shots.
    circuit : str, optional
        Circuit name.
    n_qubits : int, optional
        Qubit count.
    backend : str, optional
        Backend identifier.
    statevector : list, optional
        Carried through untouched.
    """

    measurements: dict[str, int] = field(default_factory=dict)
    probabilities: dict[str, float] = field(default_factory=dict)
    shots: int | None = None
    circuit: str | None = None
    n_qubits: int | None = None
    backend: str | None = None
    statevector: list[Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JobResult:
        """
        Parse a job result payload.

        Parameters
        ----------
        data : mapping
            Payload as produced by the execution service.

        Returns
        -------
        JobResult
            Parsed result.

        Raises
        ------
        ResultFormatError
            If the payload or one of its maps is not a mapping, or a
            count/probability is not numeric.
        """
        if not isinstance(data, Mapping):
            raise ResultFormatError(
                f"job result must be a mapping, got {type(data).__name__}"
            )

        measurements = _as_mapping(data.get("measurements"), "measurements")
        probabilities = _as_mapping(data.get("probabilities"), "probabilities")

        try:
            counts = {str(k): int(v) for k, v in measurements.items()}
            probs = {str(k): float(v) for k, v in probabilities.items()}
        except (TypeError, ValueError) as exc:
            raise ResultFormatError(f"non-numeric measurement value: {exc}") from exc

        negative = [k for k, v in counts.items() if v < 0]
        if negative:
            raise ResultFormatError(f"negative counts for outcomes: {negative}")

        if probs and not is_normalized(probs):
            logger.warning(
                "Job result probabilities sum to %.6f, not 1", probability_mass(probs)
            )

        statevector = data.get("statevector")
        return cls(
            measurements=counts,
            probabilities=probs,
            shots=_opt_int(data.get("shots"), "shots"),
            circuit=_opt_str(data.get("circuit")),
            n_qubits=_opt_int(data.get("n_qubits"), "n_qubits"),
            backend=_opt_str(data.get("backend")),
            statevector=list(statevector) if statevector is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        d: dict[str, Any] = {
            "measurements": dict(self.measurements),
            "probabilities": dict(self.probabilities),
        }
        if self.shots is not None:
            d["shots"] = self.shots
        if self.circuit is not None:
            d["circuit"] = self.circuit
        if self.n_qubits is not None:
            d["n_qubits"] = self.n_qubits
        if self.backend is not None:
            d["backend"] = self.backend
        d["statevector"] = (
            list(self.statevector) if self.statevector is not None else None
        )
        return d

    @property
    def num_qubits(self) -> int:
        """Qubit count, inferred from the first bitstring when unset."""
        if self.n_qubits is not None:
            return self.n_qubits
        for key in self.measurements:
            return len(key)
        return 0

    def total_shots(self, metadata: JobMetadata | None = None) -> int:
        """
        Total shot count with fallbacks.

        Uses ``shots`` when set, then ``metadata.shots``, then the sum
        of the measurement counts.
        """
        if self.shots:
            return self.shots
        if metadata is not None and metadata.shots:
            return metadata.shots
        return sum(self.measurements.values())

    def outcomes(self) -> list[MeasurementOutcome]:
        """
        Measurement outcomes sorted by count (descending, stable).

        Probabilities come from ``probabilities`` when present, else
        from the normalized counts, and are clamped into [0, 1].
        """
        derived = normalize_counts(self.measurements)
        rows = [
            MeasurementOutcome(
                bitstring=bitstring,
                count=count,
                probability=clamp_probability(
                    self.probabilities.get(bitstring, derived.get(bitstring, 0.0))
                ),
            )
            for bitstring, count in self.measurements.items()
        ]
        rows.sort(key=lambda o: o.count, reverse=True)
        return rows

    def is_complete(self, tol: float = PROBABILITY_TOLERANCE) -> bool:
        """Whether counts sum to ``shots`` and probabilities sum to one."""
        if self.shots is None or sum(self.measurements.values()) != self.shots:
            return False
        return is_normalized(self.probabilities, tol)


# =============================================================================
# Display context
# =============================================================================


@dataclass(frozen=True)
class ReportContext:
    """Display values for a report header and footer."""

    circuit: str
    shots: int
    backend: str
    timestamp: str


def resolve_context(
    result: JobResult,
    metadata: JobMetadata | None = None,
    *,
    clock: Clock | None = None,
    default_circuit: str = DEFAULT_CIRCUIT,
) -> ReportContext:
    """
    Resolve header values with fallbacks.

    Parameters
    ----------
    result : JobResult
        Job result.
    metadata : JobMetadata, optional
        Job metadata.
    clock : callable, optional
        Time source used when ``metadata.created_at`` is absent.
    default_circuit : str
        Circuit name used when neither result nor metadata name one.

    Returns
    -------
    ReportContext
        Resolved display values.
    """
    meta = metadata or JobMetadata()
    return ReportContext(
        circuit=result.circuit or meta.circuit or default_circuit,
        shots=result.shots or meta.shots or 0,
        backend=meta.backend_type or result.backend or DEFAULT_BACKEND,
        timestamp=format_timestamp(meta.created_at, clock),
    )


# =============================================================================
# Helpers
# =============================================================================


def _as_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ResultFormatError(f"{name} must be a mapping")
    return value


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _opt_int(value: Any, name: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ResultFormatError(f"{name} must be an integer, got {value!r}") from exc
