# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Job relay endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from qkrump_engine.errors import ResultFormatError
from qkrump_engine.results import JobResult
from qkrump_ui.dependencies import ClockDep, ConfigDep, JobServiceDep, ResolverDep
from qkrump_ui.models import JobRequest
from qkrump_ui.routers.reports import build_report
from qkrump_ui.services import Job, JobNotFoundError, JobService


logger = logging.getLogger(__name__)
router = APIRouter()


def _get_job(jobs: JobService, job_id: str) -> Job:
    try:
        return jobs.get(job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")


@router.post("/jobs", status_code=201)
def create_job(body: JobRequest, jobs: JobServiceDep) -> dict[str, Any]:
    """
    Submit a circuit for execution.

    Runs synchronously; the returned job is already ``completed`` or
    ``failed``.
    """
    job = jobs.submit(
        body.code,
        backend_type=body.backend_type,
        shots=body.shots,
        parameters=body.parameters,
        circuit=body.circuit,
    )
    return job.to_dict()


@router.get("/jobs")
def list_jobs(
    jobs: JobServiceDep,
    status: Optional[str] = Query(None, description="Filter by status"),
) -> dict[str, Any]:
    """List jobs, newest first."""
    items = [j.to_dict() for j in jobs.list_jobs(status=status)]
    return {"jobs": items, "count": len(items)}


@router.get("/jobs/{job_id}")
def get_job(job_id: str, jobs: JobServiceDep) -> dict[str, Any]:
    """Job detail."""
    return _get_job(jobs, job_id).to_dict()


@router.get("/jobs/{job_id}/report")
async def get_job_report(
    job_id: str,
    jobs: JobServiceDep,
    config: ConfigDep,
    resolver: ResolverDep,
    clock: ClockDep,
    kind: str = Query("auto"),
    theme: Optional[str] = Query(None),
) -> Response:
    """Render the report for a finished job; 409 if it has no results."""
    job = _get_job(jobs, job_id)
    if job.results is None:
        raise HTTPException(
            status_code=409,
            detail=f"Job {job_id} has no results (status: {job.status})",
        )
    try:
        result = JobResult.from_dict(job.results)
    except ResultFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return await build_report(
        result,
        job.metadata(),
        kind=kind,
        theme=theme,
        job_id=job.id,
        config=config,
        resolver=resolver,
        clock=clock,
    )
