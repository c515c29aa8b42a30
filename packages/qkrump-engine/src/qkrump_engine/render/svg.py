# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Minimal SVG document builder.

:class:`SvgDocument` collects definitions and positioned primitives and
serializes them to a standalone SVG string. All text content and
attribute values are escaped on the way in, so callers can pass user
supplied strings (circuit names, prompts) directly.

Keyword attributes use underscores for hyphens (``font_size`` becomes
``font-size``) and are emitted in the order given, which keeps output
byte-stable across runs.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from qkrump_engine.render.escape import escape_xml


SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

_NAMESPACED = {"xml_space": "xml:space", "xlink_href": "xlink:href"}


def fmt_num(value: float) -> str:
    """
    Format a coordinate deterministically.

    Whole numbers print without a decimal point; everything else is
    rounded to two decimals with trailing zeros removed.

    Examples
    --------
    >>> fmt_num(350.0)
    '350'
    >>> fmt_num(175.456)
    '175.46'
    """
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt_num(value)
    return escape_xml(value)


def _attrs(attrs: dict[str, Any]) -> str:
    parts = []
    for key, value in attrs.items():
        if value is None:
            continue
        name = _NAMESPACED.get(key) or key.rstrip("_").replace("_", "-")
        parts.append(f'{name}="{_attr_value(value)}"')
    return " ".join(parts)


class SvgDocument:
    """
    Incremental SVG builder.

    Parameters
    ----------
    width : float
        Document width in user units.
    height : float
        Document height in user units.
    """

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self._defs: list[str] = []
        self._body: list[str] = []
        self._depth = 1

    # -------------------------------------------------------------------------
    # Definitions
    # -------------------------------------------------------------------------

    def linear_gradient(
        self,
        gradient_id: str,
        stops: Sequence[tuple[str, float]],
        *,
        x2: str = "100%",
        y2: str = "0%",
    ) -> str:
        """
        Define a linear gradient and return its ``url(#id)`` reference.

        Parameters
        ----------
        gradient_id : str
            Element id.
        stops : sequence of (color, opacity)
            Evenly spaced colour stops.
        x2, y2 : str
            Gradient end vector; default is left-to-right.
        """
        lines = [
            f'<linearGradient {_attrs({"id": gradient_id, "x1": "0%", "y1": "0%", "x2": x2, "y2": y2})}>'
        ]
        last = max(len(stops) - 1, 1)
        for i, (color, opacity) in enumerate(stops):
            offset = f"{round(100 * i / last)}%"
            style = f"stop-color:{color};stop-opacity:{fmt_num(opacity)}"
            lines.append(f"  <stop {_attrs({'offset': offset, 'style': style})}/>")
        lines.append("</linearGradient>")
        self._defs.extend(lines)
        return f"url(#{gradient_id})"

    def dot_pattern(
        self,
        pattern_id: str,
        dots: Sequence[tuple[float, float, float, str, float]],
        size: float = 40,
    ) -> str:
        """Define a tiled dot pattern of ``(cx, cy, r, fill, opacity)`` dots."""
        self._defs.append(
            f'<pattern {_attrs({"id": pattern_id, "x": 0, "y": 0, "width": size, "height": size, "patternUnits": "userSpaceOnUse"})}>'
        )
        for cx, cy, r, fill, opacity in dots:
            self._defs.append(
                f"  <circle {_attrs({'cx': cx, 'cy': cy, 'r': r, 'fill': fill, 'opacity': opacity})}/>"
            )
        self._defs.append("</pattern>")
        return f"url(#{pattern_id})"

    def glow_filter(self, filter_id: str, std_deviation: float = 2) -> str:
        """Define a soft glow filter."""
        self._defs.extend(
            [
                f'<filter id="{escape_xml(filter_id)}">',
                f'  <feGaussianBlur stdDeviation="{fmt_num(std_deviation)}" result="coloredBlur"/>',
                "  <feMerge>",
                '    <feMergeNode in="coloredBlur"/>',
                '    <feMergeNode in="SourceGraphic"/>',
                "  </feMerge>",
                "</filter>",
            ]
        )
        return f"url(#{filter_id})"

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def _emit(self, markup: str) -> None:
        self._body.append("  " * self._depth + markup)

    def comment(self, text: str) -> None:
        """Emit an XML comment (``--`` is stripped from the text)."""
        self._emit(f"<!-- {escape_xml(text.replace('--', '-'))} -->")

    def rect(
        self, x: float, y: float, width: float, height: float, **attrs: Any
    ) -> None:
        """Emit a rectangle. Negative sizes are clamped to zero."""
        base = {"x": x, "y": y, "width": max(0.0, width), "height": max(0.0, height)}
        self._emit(f"<rect {_attrs({**base, **attrs})}/>")

    def text(self, x: float, y: float, content: Any, **attrs: Any) -> None:
        """Emit a text element; ``content`` is escaped."""
        self._emit(
            f"<text {_attrs({'x': x, 'y': y, **attrs})}>{escape_xml(content)}</text>"
        )

    def rich_text(self, x: float, y: float, markup: str, **attrs: Any) -> None:
        """
        Emit a text element whose body is pre-built markup.

        ``markup`` must already be escaped (for example ``<tspan>``
        fragments produced from escaped source text).
        """
        self._emit(f"<text {_attrs({'x': x, 'y': y, **attrs})}>{markup}</text>")

    def line(self, x1: float, y1: float, x2: float, y2: float, **attrs: Any) -> None:
        """Emit a line."""
        self._emit(f"<line {_attrs({'x1': x1, 'y1': y1, 'x2': x2, 'y2': y2, **attrs})}/>")

    def circle(self, cx: float, cy: float, r: float, **attrs: Any) -> None:
        """Emit a circle."""
        self._emit(f"<circle {_attrs({'cx': cx, 'cy': cy, 'r': r, **attrs})}/>")

    def image(
        self,
        href: str,
        x: float,
        y: float,
        width: float,
        height: float,
        **attrs: Any,
    ) -> None:
        """Emit an embedded image; ``href`` is normally a ``data:`` URI."""
        base = {
            "href": href,
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "preserveAspectRatio": "xMidYMid meet",
        }
        self._emit(f"<image {_attrs({**base, **attrs})}/>")

    @contextmanager
    def group(self, x: float = 0, y: float = 0, **attrs: Any) -> Iterator[None]:
        """Emit a ``<g>`` translated by ``(x, y)``; children nest inside."""
        transform = f"translate({fmt_num(x)}, {fmt_num(y)})"
        self._emit(f"<g {_attrs({'transform': transform, **attrs})}>")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            self._emit("</g>")

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def tostring(self) -> str:
        """Serialize the complete document."""
        root = _attrs(
            {
                "width": self.width,
                "height": self.height,
                "viewBox": f"0 0 {fmt_num(self.width)} {fmt_num(self.height)}",
                "xmlns": SVG_NS,
                "xmlns:xlink": XLINK_NS,
            }
        )
        out = ['<?xml version="1.0" encoding="UTF-8"?>', f"<svg {root}>"]
        if self._defs:
            out.append("  <defs>")
            out.extend("    " + line for line in self._defs)
            out.append("  </defs>")
        out.extend(self._body)
        out.append("</svg>")
        return "\n".join(out) + "\n"
