# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Common utilities.

This module provides small, shared utility functions:
- Time utilities (UTC timestamps, injectable clocks, display formatting)
- ULID generation for job identifiers
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], datetime]
"""Zero-argument callable returning the current time (timezone-aware)."""

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    Return current UTC time as an ISO 8601 string.

    Returns
    -------
    str
        ISO 8601 formatted UTC timestamp (e.g., "2024-01-15T10:30:00Z").
    """
    return utc_now().replace(microsecond=0).isoformat().replace("+00:00", "Z")


def generate_ulid() -> str:
    """
    Generate a ULID string, compatible with multiple ``ulid`` packages.

    Supports both ``python-ulid`` (``ULID()`` returns object with
    ``__str__``) and ``py-ulid`` (``ULID()`` has a ``.generate()``
    method that returns a string).

    Returns
    -------
    str
        A new ULID as a 26-character Crockford Base32 string.
    """
    from ulid import ULID

    obj = ULID()
    return obj.generate() if hasattr(obj, "generate") else str(obj)


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted. Naive timestamps are assumed to be UTC.
    Returns ``None`` for empty or unparsable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: str | None, clock: Clock | None = None) -> str:
    """
    Format a job timestamp for display.

    Parameters
    ----------
    value : str, optional
        ISO 8601 timestamp. Unparsable strings are returned verbatim.
    clock : callable, optional
        Source of "now" when ``value`` is missing. Defaults to
        :func:`utc_now`.

    Returns
    -------
    str
        Timestamp like ``"2025-11-02 13:53:31 UTC"``.
    """
    if value:
        parsed = parse_timestamp(value)
        if parsed is None:
            return value
        return parsed.strftime(DISPLAY_FORMAT)
    now = (clock or utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).strftime(DISPLAY_FORMAT)


def epoch_millis(clock: Clock | None = None) -> int:
    """Milliseconds since the Unix epoch according to ``clock``."""
    now = (clock or utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int(now.timestamp() * 1000)
