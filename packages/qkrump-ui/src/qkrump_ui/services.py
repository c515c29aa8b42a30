# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Service layer for the qkrump web service.

Keeps route handlers focused on HTTP concerns. :class:`JobService`
relays circuit executions to the external quantum service (or produces
mock Bell-state results when none is configured) and keeps the
resulting jobs in memory.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from qkrump_engine.config import Config, get_config
from qkrump_engine.errors import ResultFormatError
from qkrump_engine.results import JobMetadata, JobResult
from qkrump_engine.utils.common import generate_ulid, utc_now_iso


logger = logging.getLogger(__name__)

STATUS_RUNNING = "running"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

# Finished jobs beyond this many are evicted, oldest first.
MAX_JOBS = 1000

MOCK_RESULTS: dict[str, Any] = {
    "measurements": {"00": 512, "11": 512},
    "probabilities": {"00": 0.5, "11": 0.5},
    "statevector": None,
}
"""Bell-state result returned when no quantum service is configured."""


class JobNotFoundError(KeyError):
    """Raised when a job id is unknown."""


class ExecutionError(RuntimeError):
    """Raised when the quantum service rejects or fails a job."""


@dataclass
class Job:
    """
    A circuit execution request and its outcome.

    Attributes
    ----------
    id : str
        ULID job identifier.
    code : str
        Circuit source submitted for execution.
    backend_type : str
        Requested backend.
    shots : int
        Requested shots.
    parameters : dict
        Extra execution parameters forwarded verbatim.
    circuit : str, optional
        Circuit name; ``krump_choreography`` selects the move report.
    status : str
        ``running``, ``completed`` or ``failed``.
    """

    id: str
    code: str
    backend_type: str
    shots: int
    parameters: dict[str, Any] = field(default_factory=dict)
    circuit: str | None = None
    status: str = STATUS_RUNNING
    created_at: str = ""
    completed_at: str | None = None
    execution_time_ms: int | None = None
    results: dict[str, Any] | None = None
    error_message: str | None = None

    def metadata(self) -> JobMetadata:
        """Report metadata derived from the job."""
        return JobMetadata(
            circuit=self.circuit,
            shots=self.shots,
            created_at=self.created_at or None,
            backend_type=self.backend_type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "circuit": self.circuit,
            "backend_type": self.backend_type,
            "shots": self.shots,
            "parameters": self.parameters,
            "status": self.status,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
            "execution_time_ms": self.execution_time_ms,
            "results": self.results,
            "error_message": self.error_message,
        }


class JobService:
    """
    In-memory job relay.

    Parameters
    ----------
    config : Config, optional
        Supplies ``quantum_service_url`` and ``service_timeout``.
    session : requests.Session, optional
        HTTP session for the quantum service.
    max_jobs : int
        Number of jobs kept in memory.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: requests.Session | None = None,
        max_jobs: int = MAX_JOBS,
    ) -> None:
        if max_jobs < 1:
            raise ValueError("max_jobs must be positive")
        self._config = config or get_config()
        self._session = session or requests.Session()
        self._max_jobs = max_jobs
        self._jobs: dict[str, Job] = {}
        self._lock = threading.Lock()

    # -- queries -----------------------------------------------------------

    def get(self, job_id: str) -> Job:
        """Load a job by id; raises :class:`JobNotFoundError`."""
        with self._lock:
            try:
                return self._jobs[job_id]
            except KeyError:
                raise JobNotFoundError(job_id) from None

    def list_jobs(self, status: str | None = None) -> list[Job]:
        """Jobs, newest first."""
        with self._lock:
            jobs = [j for j in self._jobs.values() if not status or j.status == status]
        return sorted(jobs, key=lambda j: j.id, reverse=True)

    # -- mutations ---------------------------------------------------------

    def submit(
        self,
        code: str,
        *,
        backend_type: str = "simulator",
        shots: int = 1024,
        parameters: dict[str, Any] | None = None,
        circuit: str | None = None,
    ) -> Job:
        """
        Create a job and execute it synchronously.

        The job is stored as ``running`` before execution starts and
        ends up ``completed`` (with results) or ``failed`` (with an
        error message). Execution failures never raise.
        """
        job = Job(
            id=generate_ulid(),
            code=code,
            backend_type=backend_type,
            shots=shots,
            parameters=dict(parameters or {}),
            circuit=circuit,
            created_at=utc_now_iso(),
        )
        with self._lock:
            self._jobs[job.id] = job
            self._evict()
        logger.info("Job %s submitted (backend=%s, shots=%d)", job.id, backend_type, shots)

        start = time.perf_counter()
        results: dict[str, Any] | None = None
        error: str | None = None
        try:
            results = self._execute(job)
        except ExecutionError as e:
            error = str(e)
            logger.warning("Job %s failed: %s", job.id, e)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        with self._lock:
            job.results = results
            job.error_message = error
            job.status = STATUS_FAILED if error is not None else STATUS_COMPLETED
            job.execution_time_ms = elapsed_ms
            job.completed_at = utc_now_iso()
        logger.info("Job %s %s in %d ms", job.id, job.status, job.execution_time_ms)
        return job

    def _evict(self) -> None:
        # Caller holds _lock.
        excess = len(self._jobs) - self._max_jobs
        if excess <= 0:
            return
        finished = [jid for jid, j in self._jobs.items() if j.status != STATUS_RUNNING]
        for jid in finished[:excess]:
            del self._jobs[jid]
        logger.debug("Evicted %d finished jobs", min(excess, len(finished)))

    def _execute(self, job: Job) -> dict[str, Any]:
        url = self._config.quantum_service_url
        if not url:
            logger.debug("No quantum service configured, returning mock results")
            return copy.deepcopy(MOCK_RESULTS)

        payload = {
            "guppy_code": job.code,
            "backend_type": job.backend_type,
            "shots": job.shots,
            "parameters": job.parameters,
        }
        endpoint = f"{url.rstrip('/')}/execute"
        try:
            response = self._session.post(
                endpoint, json=payload, timeout=self._config.service_timeout
            )
        except requests.exceptions.Timeout as e:
            raise ExecutionError(
                f"Quantum service timeout after {self._config.service_timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise ExecutionError(f"Quantum service unreachable: {e}") from e

        logger.debug("Quantum service POST %s -> %d", endpoint, response.status_code)
        if not response.ok:
            raise ExecutionError(f"Quantum service error: {response.status_code}")

        try:
            data = response.json()
            JobResult.from_dict(data)
        except ValueError as e:
            raise ExecutionError(f"Quantum service returned invalid JSON: {e}") from e
        except ResultFormatError as e:
            raise ExecutionError(f"Quantum service returned invalid results: {e}") from e
        return data

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()
