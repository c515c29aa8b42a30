# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Configuration management.

``Config``, ``get_config`` and ``set_config`` are also re-exported
from the top-level :mod:`qkrump` package. This submodule adds explicit
lifecycle control.

Custom Configuration
--------------------
>>> from qkrump import Config, set_config
>>> set_config(Config(brand_assets={"logo_left": "/srv/brand/logo.png"}))

Resetting
---------
>>> from qkrump.config import reset_config
>>> reset_config()  # next get_config() reloads from environment
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


__all__ = [
    "ASSET_SLOTS",
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
]


if TYPE_CHECKING:
    from qkrump_engine.config import (
        ASSET_SLOTS,
        Config,
        get_config,
        load_config,
        reset_config,
        set_config,
    )


_LAZY_IMPORTS = {name: ("qkrump_engine.config", name) for name in __all__}


def __getattr__(name: str) -> Any:
    """Lazy-import handler."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available public attributes."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
