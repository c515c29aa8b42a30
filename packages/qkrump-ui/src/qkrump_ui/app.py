# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
qkrump service application factory.

Creates the FastAPI application and wires shared objects (config, job
service, asset resolver, clock) into ``app.state`` for the routers.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from qkrump_engine.assets import AssetResolver
from qkrump_engine.config import Config, get_config
from qkrump_engine.utils.common import Clock
from qkrump_ui.routers import api, jobs, reports
from qkrump_ui.services import JobService


logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    job_service: JobService | None = None,
    resolver: AssetResolver | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    config : Config, optional
        Runtime configuration. Defaults to the environment.
    job_service : JobService, optional
        Job relay. A fresh in-memory service is created otherwise.
    resolver : AssetResolver, optional
        Branding asset resolver. When omitted, one is created only if
        embedding is enabled and asset sources are configured.
    clock : callable, optional
        Time source for report timestamps and filenames.

    Returns
    -------
    FastAPI
        Configured application instance.
    """
    from qkrump_ui import __version__

    config = config or get_config()

    app = FastAPI(
        title="qkrump",
        description="Quantum krump result decoding and report export",
        version=__version__,
    )

    # CORS for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if resolver is None and config.embed_assets and config.brand_assets:
        resolver = AssetResolver(config)

    app.state.config = config
    app.state.job_service = job_service or JobService(config)
    app.state.resolver = resolver
    app.state.clock = clock

    app.include_router(api.router, prefix="/api", tags=["api"])
    app.include_router(reports.router, prefix="/api", tags=["reports"])
    app.include_router(jobs.router, prefix="/api", tags=["jobs"])

    logger.debug(
        "App created (execution=%s, assets=%d)",
        "remote" if config.quantum_service_url else "mock",
        len(config.brand_assets) if resolver else 0,
    )
    return app


def run_server(
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
) -> None:
    """
    Serve the application with uvicorn.

    Requires the ``ui`` extra.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(),
        host=host,
        port=port,
        log_level="debug" if debug else "info",
    )
