# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Health and decoding endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from qkrump_engine.decoder import (
    average_energy,
    decode_result,
    energy_distribution,
    energy_label,
    top_n,
)
from qkrump_engine.errors import ResultFormatError, UnknownOutcomeError
from qkrump_engine.results import JobResult
from qkrump_ui.dependencies import ConfigDep


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health(config: ConfigDep) -> dict[str, Any]:
    """Liveness probe with the execution mode."""
    from qkrump_ui import __version__

    return {
        "status": "ok",
        "version": __version__,
        "execution": "remote" if config.quantum_service_url else "mock",
    }


@router.post("/decode")
async def decode_payload(
    config: ConfigDep,
    payload: dict[str, Any] = Body(...),
    top: Optional[int] = Query(None, ge=0, description="Routine length"),
) -> dict[str, Any]:
    """
    Decode a job result into ranked moves.

    Returns 422 if the payload is malformed or contains an outcome with
    no move.
    """
    try:
        result = JobResult.from_dict(payload)
        decoded = decode_result(result)
    except (ResultFormatError, UnknownOutcomeError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    routine = top_n(decoded, config.routine_size if top is None else top)
    avg = average_energy(decoded)
    logger.debug("Decoded %d outcomes via API", len(decoded))
    return {
        "moves": [d.to_dict() for d in decoded],
        "total_shots": result.total_shots(),
        "suggested_routine": [d.to_dict() for d in routine],
        "average_energy": avg,
        "average_energy_label": energy_label(int(avg + 0.5)),
        "energy_distribution": {
            str(k): v for k, v in energy_distribution(decoded).items()
        },
    }
