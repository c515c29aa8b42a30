# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Request bodies for the qkrump web service."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ReportRequest(BaseModel):
    """Job result (and optional metadata) to render."""

    results: dict[str, Any]
    metadata: Optional[dict[str, Any]] = None
    job_id: Optional[str] = None


class PortraitRequest(BaseModel):
    """Circuit source to render as a portrait."""

    code: str
    metadata: Optional[dict[str, Any]] = None
    highlight: bool = True
    job_id: Optional[str] = None


class JobRequest(BaseModel):
    """Circuit execution request."""

    code: str = Field(min_length=1)
    backend_type: str = "simulator"
    shots: int = Field(default=1024, ge=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    circuit: Optional[str] = None
