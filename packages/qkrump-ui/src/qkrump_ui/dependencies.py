# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""FastAPI dependencies reading shared objects from application state."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Request
from qkrump_engine.assets import AssetResolver
from qkrump_engine.config import Config
from qkrump_engine.utils.common import Clock
from qkrump_ui.services import JobService


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_job_service(request: Request) -> JobService:
    return request.app.state.job_service


def get_resolver(request: Request) -> AssetResolver | None:
    return request.app.state.resolver


def get_clock(request: Request) -> Clock | None:
    return request.app.state.clock


ConfigDep = Annotated[Config, Depends(get_config)]
JobServiceDep = Annotated[JobService, Depends(get_job_service)]
ResolverDep = Annotated[Optional[AssetResolver], Depends(get_resolver)]
ClockDep = Annotated[Optional[Clock], Depends(get_clock)]
