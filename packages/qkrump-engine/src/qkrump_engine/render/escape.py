# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""XML escaping and text helpers for SVG emission."""

from __future__ import annotations

from typing import Any


_XML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&apos;",
    }
)


def escape_xml(text: Any) -> str:
    """
    Escape ``& < > " '`` for use in XML text and attribute values.

    ``None`` and empty values give ``""``; other non-strings are
    converted with :func:`str` first.

    Examples
    --------
    >>> escape_xml('<b>"Tom & Jerry"</b>')
    '&lt;b&gt;&quot;Tom &amp; Jerry&quot;&lt;/b&gt;'
    >>> escape_xml("plain")
    'plain'
    """
    if text is None:
        return ""
    return str(text).translate(_XML_ESCAPES)


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    """Shorten ``text`` to ``limit`` characters, appending ``suffix`` if cut."""
    if limit < 0:
        raise ValueError("limit must be non-negative")
    if len(text) <= limit:
        return text
    return text[:limit] + suffix
