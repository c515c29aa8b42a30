# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Report colour themes.

A :class:`Theme` is pure data. :meth:`Theme.install` writes the
theme's gradients, pattern and filter into a document and paints the
background; sections then refer to paints through the theme's
``*_fill`` properties, which resolve to either a gradient reference or
a flat colour.

Built-in themes
---------------
quantum
    Purple-to-navy gradient with a dot overlay (generic results report).
light
    White page with soft grey cards (move report).
midnight
    Deep indigo with cyan accents (circuit portrait).
"""

from __future__ import annotations

from dataclasses import dataclass

from qkrump_engine.errors import RenderError
from qkrump_engine.render.svg import SvgDocument


Stops = tuple[tuple[str, float], ...]

_DOTS = (
    (5, 5, 1.5, "#ffffff", 0.15),
    (25, 15, 1, "#a78bfa", 0.2),
    (15, 30, 1.2, "#c4b5fd", 0.15),
    (35, 25, 0.8, "#ffffff", 0.1),
)

_MIDNIGHT_DOTS = (
    (5, 5, 1, "#8b5cf6", 0.2),
    (25, 15, 1, "#06b6d4", 0.2),
    (15, 30, 1, "#8b5cf6", 0.2),
    (35, 25, 1, "#06b6d4", 0.2),
)


@dataclass(frozen=True)
class Theme:
    """
    Colour and typography settings for a report.

    Attributes
    ----------
    name : str
        Registry key.
    dark : bool
        Whether text sits on a dark background.
    background : tuple
        Background gradient stops (a single stop means a flat colour).
    header : tuple
        Header panel gradient stops; empty for no header panel.
    bar, prob_bar : tuple
        Gradient stops for count and probability bars.
    title, text, muted, faint : str
        Text colours from strongest to weakest.
    accent : str
        Highlight colour for rules, outlines and emphasis.
    accent_alt : str
        Secondary highlight colour.
    panel, panel_alt : str
        Card and alternating-row fills.
    panel_stroke : str
        Card outline colour.
    code_panel : tuple
        Gradient stops for source listings.
    font_family : str
        Default font stack.
    dots : tuple
        Overlay dot pattern, empty for none.
    glow : bool
        Whether titles get a glow filter.
    border : bool
        Whether to draw a rounded decorative border.
    """

    name: str
    dark: bool
    background: Stops
    header: Stops
    bar: Stops
    prob_bar: Stops
    title: str
    text: str
    muted: str
    faint: str
    accent: str
    accent_alt: str
    panel: str
    panel_alt: str
    panel_stroke: str
    code_panel: Stops = ()
    font_family: str = "Arial, sans-serif"
    dots: tuple[tuple[float, float, float, str, float], ...] = ()
    glow: bool = False
    border: bool = False

    @property
    def background_fill(self) -> str:
        return "url(#bgGradient)" if len(self.background) > 1 else self.background[0][0]

    @property
    def header_fill(self) -> str:
        return "url(#headerGradient)" if self.header else self.panel

    @property
    def bar_fill(self) -> str:
        return "url(#barGradient)" if len(self.bar) > 1 else self.bar[0][0]

    @property
    def prob_fill(self) -> str:
        return "url(#probGradient)" if len(self.prob_bar) > 1 else self.prob_bar[0][0]

    @property
    def code_fill(self) -> str:
        return "url(#codeBoxGradient)" if self.code_panel else self.panel

    @property
    def glow_filter(self) -> str | None:
        return "url(#glow)" if self.glow else None

    def install(self, doc: SvgDocument) -> None:
        """Register definitions and paint background layers."""
        if len(self.background) > 1:
            doc.linear_gradient("bgGradient", self.background, x2="100%", y2="100%")
        if self.dots:
            doc.dot_pattern("quantumDots", self.dots)
        if self.glow:
            doc.glow_filter("glow", 2 if self.name != "midnight" else 3)
        if self.header:
            doc.linear_gradient("headerGradient", self.header)
        if len(self.bar) > 1:
            doc.linear_gradient("barGradient", self.bar)
        if len(self.prob_bar) > 1:
            doc.linear_gradient("probGradient", self.prob_bar)
        if self.code_panel:
            doc.linear_gradient("codeBoxGradient", self.code_panel, x2="0%", y2="100%")

        doc.comment("Background")
        doc.rect(0, 0, doc.width, doc.height, fill=self.background_fill)
        if self.dots:
            doc.rect(0, 0, doc.width, doc.height, fill="url(#quantumDots)")
        if self.border:
            doc.rect(
                10,
                10,
                doc.width - 20,
                doc.height - 20,
                fill="none",
                stroke=self.header_fill,
                stroke_width=2,
                rx=20,
                opacity=0.3,
            )


QUANTUM = Theme(
    name="quantum",
    dark=True,
    background=(("#7c3aed", 1), ("#5b21b6", 1), ("#1e3a8a", 1)),
    header=(("#8b5cf6", 0.9), ("#6366f1", 0.9)),
    bar=(("#a78bfa", 1), ("#8b5cf6", 1)),
    prob_bar=(("#c4b5fd", 1), ("#a78bfa", 1)),
    title="#ffffff",
    text="#e0e7ff",
    muted="#c4b5fd",
    faint="#c4b5fd",
    accent="#a78bfa",
    accent_alt="#6366f1",
    panel="#1e293b",
    panel_alt="#0f172a",
    panel_stroke="#a78bfa",
    dots=_DOTS,
    glow=True,
    border=True,
)

LIGHT = Theme(
    name="light",
    dark=False,
    background=(("#ffffff", 1),),
    header=(),
    bar=(("#8b5cf6", 1),),
    prob_bar=(("#a78bfa", 1),),
    title="#1a1a1a",
    text="#333333",
    muted="#666666",
    faint="#999999",
    accent="#8b5cf6",
    accent_alt="#10b981",
    panel="#fafafa",
    panel_alt="#f9f9f9",
    panel_stroke="#e0e0e0",
)

MIDNIGHT = Theme(
    name="midnight",
    dark=True,
    background=(("#1e1b4b", 1), ("#312e81", 1), ("#1e3a8a", 1)),
    header=(("#8b5cf6", 0.3), ("#06b6d4", 0.3), ("#8b5cf6", 0.3)),
    bar=(("#8b5cf6", 1), ("#06b6d4", 1)),
    prob_bar=(("#06b6d4", 1), ("#8b5cf6", 1)),
    title="#ffffff",
    text="#e2e8f0",
    muted="#94a3b8",
    faint="#64748b",
    accent="#8b5cf6",
    accent_alt="#06b6d4",
    panel="#1e293b",
    panel_alt="#0f172a",
    panel_stroke="#8b5cf6",
    code_panel=(("#1e293b", 0.95), ("#0f172a", 0.95)),
    dots=_MIDNIGHT_DOTS,
    glow=True,
    border=True,
)

THEMES: dict[str, Theme] = {t.name: t for t in (QUANTUM, LIGHT, MIDNIGHT)}


def get_theme(theme: str | Theme) -> Theme:
    """
    Resolve a theme by name.

    Raises
    ------
    RenderError
        If no built-in theme has that name.
    """
    if isinstance(theme, Theme):
        return theme
    try:
        return THEMES[theme]
    except KeyError:
        raise RenderError(
            f"Unknown theme {theme!r}; available: {', '.join(sorted(THEMES))}"
        ) from None
