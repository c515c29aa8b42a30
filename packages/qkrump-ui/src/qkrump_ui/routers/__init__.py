# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
FastAPI routers for the qkrump service.

- ``api``: health and decoding
- ``reports``: report and portrait export
- ``jobs``: in-memory job relay
"""

from qkrump_ui.routers.api import router as api_router
from qkrump_ui.routers.jobs import router as jobs_router
from qkrump_ui.routers.reports import router as reports_router


__all__ = ["api_router", "jobs_router", "reports_router"]
