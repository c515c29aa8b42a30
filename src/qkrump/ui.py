# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Web service for report export and job relay.

Requires the optional ``qkrump[ui]`` extra::

    pip install "qkrump[ui]"

Starting the Server
-------------------
>>> from qkrump.ui import run_server
>>> run_server(port=8080)

Or from the command line::

    qkrump serve --port 8080
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


__all__ = [
    "create_app",
    "run_server",
]


if TYPE_CHECKING:
    from qkrump_ui.app import create_app, run_server


_LAZY_IMPORTS = {
    "create_app": ("qkrump_ui.app", "create_app"),
    "run_server": ("qkrump_ui.app", "run_server"),
}


def __getattr__(name: str) -> Any:
    """Lazy-import handler with a helpful error for missing UI dependencies."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        try:
            module = __import__(module_path, fromlist=[attr_name])
        except ImportError as exc:
            raise ImportError(
                "The qkrump web service requires additional dependencies.\n"
                "Install with: pip install 'qkrump[ui]'\n"
                f"Original error: {exc}"
            ) from exc
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available public attributes."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
