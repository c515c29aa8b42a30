# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""SVG report rendering."""

from __future__ import annotations

from qkrump_engine.render.escape import escape_xml, truncate
from qkrump_engine.render.layout import Block, VerticalFlow
from qkrump_engine.render.reports import (
    MEDIA_TYPE,
    REPORT_KINDS,
    PortraitMetadata,
    ReportDocument,
    render_circuit_portrait,
    render_krump_report,
    render_report,
    render_results_report,
    resolve_kind,
    suggest_filename,
)
from qkrump_engine.render.svg import SvgDocument
from qkrump_engine.render.themes import THEMES, Theme, get_theme


__all__ = [
    "MEDIA_TYPE",
    "REPORT_KINDS",
    "THEMES",
    "Block",
    "PortraitMetadata",
    "ReportDocument",
    "SvgDocument",
    "Theme",
    "VerticalFlow",
    "escape_xml",
    "get_theme",
    "render_circuit_portrait",
    "render_krump_report",
    "render_report",
    "render_results_report",
    "resolve_kind",
    "suggest_filename",
    "truncate",
]
