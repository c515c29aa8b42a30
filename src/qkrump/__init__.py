"""
qkrump: quantum measurement decoding and report rendering.

Quick Start
-----------
>>> from qkrump import JobResult, decode_result, average_energy
>>> result = JobResult.from_dict({
...     "measurements": {"111": 600, "000": 400},
...     "probabilities": {"111": 0.6, "000": 0.4},
... })
>>> moves = decode_result(result)
>>> moves[0].name
'Full Krump'
>>> round(average_energy(moves), 2)
1.8

Reports
-------
>>> from qkrump import render_report
>>> report = render_report(result, kind="krump")
>>> report.media_type
'image/svg+xml'

Submodules
----------
- qkrump.config: Configuration management
- qkrump.errors: Public exception types
- qkrump.ui: Web service (optional, requires qkrump[ui])
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any


__all__ = [
    # Version
    "__version__",
    # Results
    "JobResult",
    "JobMetadata",
    "MeasurementOutcome",
    # Decoding
    "decode",
    "decode_result",
    "top_n",
    "average_energy",
    "energy_label",
    "energy_distribution",
    "lookup_move",
    "MOVES",
    # Rendering
    "render_report",
    "render_results_report",
    "render_krump_report",
    "render_circuit_portrait",
    "PortraitMetadata",
    "ReportDocument",
    # Assets
    "AssetResolver",
    # Config
    "Config",
    "get_config",
    "set_config",
]


try:
    __version__ = version("qkrump")
except PackageNotFoundError:
    __version__ = "0.0.0"


if TYPE_CHECKING:
    from qkrump_engine.assets import AssetResolver
    from qkrump_engine.config import Config, get_config, set_config
    from qkrump_engine.decoder import (
        MOVES,
        average_energy,
        decode,
        decode_result,
        energy_distribution,
        energy_label,
        lookup_move,
        top_n,
    )
    from qkrump_engine.render.reports import (
        PortraitMetadata,
        ReportDocument,
        render_circuit_portrait,
        render_krump_report,
        render_report,
        render_results_report,
    )
    from qkrump_engine.results import JobMetadata, JobResult, MeasurementOutcome


_LAZY_IMPORTS = {
    # Results
    "JobResult": ("qkrump_engine.results", "JobResult"),
    "JobMetadata": ("qkrump_engine.results", "JobMetadata"),
    "MeasurementOutcome": ("qkrump_engine.results", "MeasurementOutcome"),
    # Decoding
    "decode": ("qkrump_engine.decoder", "decode"),
    "decode_result": ("qkrump_engine.decoder", "decode_result"),
    "top_n": ("qkrump_engine.decoder", "top_n"),
    "average_energy": ("qkrump_engine.decoder", "average_energy"),
    "energy_label": ("qkrump_engine.decoder", "energy_label"),
    "energy_distribution": ("qkrump_engine.decoder", "energy_distribution"),
    "lookup_move": ("qkrump_engine.decoder", "lookup_move"),
    "MOVES": ("qkrump_engine.decoder", "MOVES"),
    # Rendering
    "render_report": ("qkrump_engine.render.reports", "render_report"),
    "render_results_report": ("qkrump_engine.render.reports", "render_results_report"),
    "render_krump_report": ("qkrump_engine.render.reports", "render_krump_report"),
    "render_circuit_portrait": (
        "qkrump_engine.render.reports",
        "render_circuit_portrait",
    ),
    "PortraitMetadata": ("qkrump_engine.render.reports", "PortraitMetadata"),
    "ReportDocument": ("qkrump_engine.render.reports", "ReportDocument"),
    # Assets
    "AssetResolver": ("qkrump_engine.assets", "AssetResolver"),
    # Config
    "Config": ("qkrump_engine.config", "Config"),
    "get_config": ("qkrump_engine.config", "get_config"),
    "set_config": ("qkrump_engine.config", "set_config"),
}


def __getattr__(name: str) -> Any:
    """Lazy import handler for module-level attributes."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes for autocomplete."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
