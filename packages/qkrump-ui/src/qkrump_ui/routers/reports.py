# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Report export endpoints.

Branding assets are resolved before anything is rendered. If any asset
fails the request ends with 502 and no document is produced.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from qkrump_engine.assets import AssetBundle, AssetResolver
from qkrump_engine.config import Config
from qkrump_engine.errors import (
    AssetFetchError,
    RenderError,
    ResultFormatError,
    UnknownOutcomeError,
)
from qkrump_engine.render.reports import (
    PortraitMetadata,
    ReportDocument,
    render_circuit_portrait,
    render_report,
    resolve_kind,
)
from qkrump_engine.render.themes import get_theme
from qkrump_engine.results import JobMetadata, JobResult
from qkrump_engine.utils.common import Clock
from qkrump_ui.dependencies import ClockDep, ConfigDep, ResolverDep
from qkrump_ui.models import PortraitRequest, ReportRequest


logger = logging.getLogger(__name__)
router = APIRouter()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
"""Replace any character outside the allowlist to prevent header injection."""


def svg_response(report: ReportDocument) -> Response:
    """Wrap a report as a downloadable SVG response."""
    filename = _UNSAFE_FILENAME_CHARS.sub("_", report.filename)
    return Response(
        content=report.to_bytes(),
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def resolve_assets(resolver: AssetResolver | None) -> AssetBundle | None:
    """Fetch branding assets, mapping failures to 502."""
    if resolver is None:
        return None
    try:
        return await resolver.aresolve()
    except AssetFetchError as e:
        logger.warning("Report aborted, asset fetch failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))


async def build_report(
    result: JobResult,
    metadata: JobMetadata | None,
    *,
    kind: str,
    theme: str | None,
    job_id: str | None,
    config: Config,
    resolver: AssetResolver | None,
    clock: Clock | None,
) -> Response:
    """
    Validate, resolve assets, render and wrap a job report.

    Status codes: 400 for an unknown kind or theme, 422 for an outcome
    with no move, 502 for asset failures.
    """
    try:
        resolved = resolve_kind(kind, result, metadata)
        if theme is not None:
            get_theme(theme)
    except RenderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    assets = await resolve_assets(resolver)
    try:
        report = render_report(
            result,
            metadata,
            kind=resolved,
            theme=theme,
            assets=assets,
            clock=clock,
            job_id=job_id,
            config=config,
        )
    except UnknownOutcomeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return svg_response(report)


@router.post("/reports")
async def create_report(
    body: ReportRequest,
    config: ConfigDep,
    resolver: ResolverDep,
    clock: ClockDep,
    kind: str = Query("auto", description="auto, results or krump"),
    theme: Optional[str] = Query(None, description="Theme override"),
) -> Response:
    """Render a job result as an SVG attachment."""
    try:
        result = JobResult.from_dict(body.results)
        metadata = JobMetadata.from_dict(body.metadata)
    except ResultFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return await build_report(
        result,
        metadata,
        kind=kind,
        theme=theme,
        job_id=body.job_id,
        config=config,
        resolver=resolver,
        clock=clock,
    )


@router.post("/portraits")
async def create_portrait(
    body: PortraitRequest,
    resolver: ResolverDep,
    clock: ClockDep,
    theme: str = Query("midnight"),
) -> Response:
    """Render circuit source as an SVG portrait attachment."""
    try:
        metadata = PortraitMetadata.from_dict(body.metadata)
        t = get_theme(theme)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RenderError as e:
        raise HTTPException(status_code=400, detail=str(e))

    assets = await resolve_assets(resolver)
    report = render_circuit_portrait(
        body.code,
        metadata,
        assets=assets,
        highlight=body.highlight,
        theme=t,
        clock=clock,
        job_id=body.job_id,
    )
    return svg_response(report)
