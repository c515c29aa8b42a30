# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Public exception hierarchy.

All exceptions raised by qkrump inherit from :class:`KrumpError`,
allowing a single catch-all handler for library errors.

Hierarchy
---------
::

    KrumpError
    ├── ResultFormatError
    ├── DecodeError
    │   └── UnknownOutcomeError
    ├── RenderError
    └── AssetError
        └── AssetFetchError

Examples
--------
>>> from qkrump.errors import KrumpError, AssetFetchError
>>> try:
...     bundle = resolver.resolve()
... except AssetFetchError as exc:
...     print(f"Missing logo {exc.name}: {exc.reason}")
... except KrumpError:
...     print("Other qkrump error")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


__all__ = [
    "KrumpError",
    "ResultFormatError",
    "DecodeError",
    "UnknownOutcomeError",
    "RenderError",
    "AssetError",
    "AssetFetchError",
]


if TYPE_CHECKING:
    from qkrump_engine.errors import (
        AssetError,
        AssetFetchError,
        DecodeError,
        KrumpError,
        RenderError,
        ResultFormatError,
        UnknownOutcomeError,
    )


_LAZY_IMPORTS = {name: ("qkrump_engine.errors", name) for name in __all__}


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
