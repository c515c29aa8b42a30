# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Exception hierarchy for qkrump-engine.

All public exceptions raised by qkrump-engine inherit from
:class:`KrumpError`, enabling catch-all error handling at the
package boundary.

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
>>> from qkrump_engine.errors import KrumpError, UnknownOutcomeError
>>> try:
...     moves = decode({"0101": 10}, {})
... except UnknownOutcomeError as exc:
...     print(f"no move for {exc.bitstring}")
... except KrumpError:
...     print("other engine error")
"""

from __future__ import annotations


class KrumpError(Exception):
    """
    Base exception for all qkrump-engine operations.

    Every public exception in qkrump-engine is a subclass of this
    type, so ``except KrumpError`` is guaranteed to intercept any
    error originating from the engine.
    """


class ResultFormatError(KrumpError):
    """Raised when a job-result payload has the wrong shape."""


class DecodeError(KrumpError):
    """Base exception for measurement decoding."""


class UnknownOutcomeError(DecodeError):
    """
    Raised when a bitstring has no entry in the move table.

    Parameters
    ----------
    bitstring : str
        The measured outcome that could not be decoded.
    """

    def __init__(self, bitstring: str) -> None:
        self.bitstring = bitstring
        super().__init__(f"No move defined for outcome: {bitstring!r}")


class RenderError(KrumpError):
    """Raised for invalid render requests (unknown theme or report kind)."""


class AssetError(KrumpError):
    """Base exception for branding asset handling."""


class AssetFetchError(AssetError):
    """
    Raised when a branding asset cannot be fetched or read.

    Parameters
    ----------
    name : str
        Asset slot name (e.g. ``"logo_left"``).
    source : str
        URL or path the asset was requested from.
    reason : str, optional
        Underlying failure description.
    """

    def __init__(self, name: str, source: str, reason: str = "") -> None:
        self.name = name
        self.source = source
        self.reason = reason
        msg = f"Failed to fetch asset {name!r} from {source}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
