# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Lightweight syntax highlighting for circuit source listings.

Lines are escaped first, then keywords and call names in the code part
(everything before the first ``#``) are wrapped in ``<tspan>`` elements.
The comment part is wrapped whole. Because escaping happens before any
markup is inserted, the output is always well-formed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from qkrump_engine.render.escape import escape_xml


KEYWORDS = ("@guppy", "def", "for", "in", "range", "return", "if", "else", "while")

KEYWORD_COLOR = "#f472b6"
FUNCTION_COLOR = "#60a5fa"
COMMENT_COLOR = "#a78bfa"

_KEYWORD_RE = re.compile(
    r"(?<![\w@])(" + "|".join(re.escape(k) for k in KEYWORDS) + r")(?!\w)"
)
_CALL_RE = re.compile(r"\b([A-Za-z_][A-Za-z0-9_]*)(\s*)\(")
_TAG_RE = re.compile(r"(<tspan[^>]*>.*?</tspan>)")


@dataclass(frozen=True)
class CodeLine:
    """One rendered source line."""

    number: int
    markup: str


def _highlight_code(code: str) -> str:
    code = _KEYWORD_RE.sub(
        rf'<tspan fill="{KEYWORD_COLOR}" font-weight="600">\1</tspan>', code
    )
    # Only wrap call names that sit outside keyword tspans.
    parts = _TAG_RE.split(code)
    for i, part in enumerate(parts):
        if not part.startswith("<tspan"):
            parts[i] = _CALL_RE.sub(
                rf'<tspan fill="{FUNCTION_COLOR}">\1</tspan>\2(', part
            )
    return "".join(parts)


def highlight_lines(source: str, enabled: bool = True) -> list[CodeLine]:
    """
    Split ``source`` into numbered, escaped (optionally highlighted) lines.

    Parameters
    ----------
    source : str
        Program text.
    enabled : bool
        When False, lines are only escaped.

    Returns
    -------
    list of CodeLine
        One entry per line, numbered from 1.
    """
    lines = []
    for number, raw in enumerate(source.split("\n"), start=1):
        escaped = escape_xml(raw.rstrip("\r"))
        if not enabled:
            lines.append(CodeLine(number, escaped))
            continue
        hash_index = escaped.find("#")
        code_part = escaped if hash_index < 0 else escaped[:hash_index]
        comment_part = "" if hash_index < 0 else escaped[hash_index:]
        markup = _highlight_code(code_part)
        if comment_part:
            markup += (
                f'<tspan fill="{COMMENT_COLOR}" font-style="italic">'
                f"{comment_part}</tspan>"
            )
        lines.append(CodeLine(number, markup))
    return lines
