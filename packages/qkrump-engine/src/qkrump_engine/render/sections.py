# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Report sections.

Every class here is a :class:`~qkrump_engine.render.layout.Block`: it
computes its height from the number of items it renders and draws
itself at an offset chosen by the layout. Blocks hold plain data and a
:class:`~qkrump_engine.render.themes.Theme`; none of them touch the
network or the clock.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence

from qkrump_engine.decoder.decode import (
    ENERGY_LEVELS,
    ENERGY_NAMES,
    DecodedMove,
    energy_label,
)
from qkrump_engine.render.escape import truncate
from qkrump_engine.render.highlight import CodeLine
from qkrump_engine.render.layout import scale
from qkrump_engine.render.svg import SvgDocument
from qkrump_engine.render.themes import Theme


ENERGY_COLORS = {0: "#9ca3af", 1: "#10b981", 2: "#f59e0b", 3: "#f43f5e"}
ENERGY_ICONS = {0: "💤", 1: "⚡", 2: "🔥", 3: "💥"}

CHOREOGRAPHY_TIPS = (
    "Start with highest probability moves for impact",
    "Mix energy levels (💤→⚡→🔥→💥) for dynamic flow",
    "Repeat top 3 moves for memorability",
    "Use lower probability moves as surprise accents",
)

RAW_LINE_HEIGHT = 14
PROMPT_LIMIT = 140


def pct(probability: float, decimals: int = 1) -> str:
    """Format a probability as a percentage string, e.g. ``"50.0%"``."""
    return f"{probability * 100:.{decimals}f}%"


def ket(bitstring: str) -> str:
    """Dirac-style state label."""
    return f"|{bitstring}⟩"


def energy_color(energy: int) -> str:
    return ENERGY_COLORS.get(energy, ENERGY_COLORS[0])


def energy_icon(energy: int) -> str:
    return ENERGY_ICONS.get(energy, ENERGY_ICONS[0])


def _section_title(doc: SvgDocument, theme: Theme, x: float, y: float, text: str,
                   size: int = 16) -> None:
    doc.text(
        x,
        y,
        text,
        text_anchor="middle",
        font_size=size,
        font_weight=600,
        fill=theme.title if theme.dark else "#333333",
        filter=theme.glow_filter,
    )


# =============================================================================
# Header / footer
# =============================================================================


@dataclass
class HeaderBlock:
    """
    Report title with metadata lines and optional logos.

    On themes with a header gradient the text sits on a rounded panel
    flanked by logos; otherwise it is laid out as plain centered text.
    """

    theme: Theme
    title: str
    meta_line: str
    timestamp: str
    highlight: str | None = None
    logo_left: str | None = None
    logo_right: str | None = None

    def height(self, width: float) -> float:
        if self.theme.header:
            return 150
        return 140 if self.highlight else 120

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        cx = width / 2
        doc.comment("Header")
        if t.header:
            doc.rect(30, y + 15, width - 60, 120, fill=t.header_fill, rx=12, opacity=0.8)
            if self.logo_left:
                doc.image(self.logo_left, 45, y + 25, 70, 70)
            if self.logo_right:
                doc.image(self.logo_right, width - 115, y + 25, 70, 70)
            doc.text(cx, y + 55, self.title, text_anchor="middle", font_size=22,
                     font_weight=700, fill=t.title, filter=t.glow_filter)
            doc.text(cx, y + 80, self.meta_line, text_anchor="middle", font_size=11,
                     fill=t.text, font_weight=500)
            doc.text(cx, y + 100, self.timestamp, text_anchor="middle", font_size=9,
                     fill=t.muted)
            if self.highlight:
                doc.text(cx, y + 120, self.highlight, text_anchor="middle",
                         font_size=12, font_weight=600, fill=t.title)
            doc.line(40, y + 145, width - 40, y + 145, stroke=t.accent,
                     stroke_width=1, opacity=0.3)
            return

        doc.text(cx, y + 30, self.title, text_anchor="middle", font_size=28,
                 font_weight="bold", fill=t.title)
        doc.text(cx, y + 60, self.meta_line, text_anchor="middle", font_size=14,
                 fill=t.muted)
        doc.text(cx, y + 80, self.timestamp, text_anchor="middle", font_size=12,
                 fill=t.faint)
        rule_y = y + 100
        if self.highlight:
            doc.text(cx, y + 105, self.highlight, text_anchor="middle", font_size=16,
                     font_weight=600, fill=t.accent)
            rule_y = y + 120
        doc.line(60, rule_y, width - 60, rule_y, stroke=t.panel_stroke, stroke_width=2)


@dataclass
class FooterBlock:
    """Closing strip with platform name and optional logo."""

    theme: Theme
    text: str
    logo: str | None = None

    def height(self, width: float) -> float:
        return 70 if self.theme.dark else 40

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        doc.comment("Footer")
        if not t.dark:
            doc.text(width / 2, y + 20, self.text, text_anchor="middle", font_size=10,
                     fill=t.faint)
            return
        doc.rect(0, y, width, 70, fill=t.panel_alt, rx=15, opacity=0.8)
        if self.logo:
            doc.image(self.logo, width - 75, y + 10, 50, 50, filter=t.glow_filter)
        doc.text(60, y + 40, self.text, text_anchor="start", font_size=10, fill=t.text,
                 font_weight=500)


# =============================================================================
# Generic results sections
# =============================================================================


@dataclass
class BarRow:
    """One horizontal bar: label, value and trailing annotation."""

    label: str
    value: float
    annotation: str


@dataclass
class BarChartBlock:
    """
    Horizontal bar chart.

    Bars scale against the largest value in ``rows``.
    """

    theme: Theme
    title: str
    rows: Sequence[BarRow]
    fill: str
    axis_label: str
    left: float = 120
    bar_max: float = 350
    bar_height: float = 30
    bar_spacing: float = 10

    TITLE_HEIGHT = 30
    AXIS_HEIGHT = 40

    def height(self, width: float) -> float:
        return (
            self.TITLE_HEIGHT
            + len(self.rows) * (self.bar_height + self.bar_spacing)
            + self.AXIS_HEIGHT
        )

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        maximum = max((r.value for r in self.rows), default=0.0)
        _section_title(doc, t, self.left + self.bar_max / 2, y + 20, self.title)
        chart_top = y + self.TITLE_HEIGHT
        with doc.group(self.left, chart_top):
            for i, row in enumerate(self.rows):
                ry = i * (self.bar_height + self.bar_spacing)
                bar = scale(row.value, maximum, self.bar_max)
                mid = ry + self.bar_height / 2 + 5
                doc.text(-10, mid, ket(row.label), text_anchor="end", font_size=14,
                         font_family="monospace", fill=t.text)
                doc.rect(0, ry, bar, self.bar_height, fill=self.fill, rx=4, opacity=0.9)
                doc.text(bar + 10, mid, row.annotation, font_size=12, fill=t.muted)
            axis_y = len(self.rows) * (self.bar_height + self.bar_spacing)
            doc.line(0, axis_y, self.bar_max, axis_y, stroke=t.accent, stroke_width=1,
                     opacity=0.5)
            doc.text(self.bar_max / 2, axis_y + 25, self.axis_label,
                     text_anchor="middle", font_size=12, fill=t.muted)


@dataclass
class TableRow:
    state: str
    count: int
    probability: float


@dataclass
class ResultsTableBlock:
    """State / count / probability table with striped rows."""

    theme: Theme
    rows: Sequence[TableRow]
    title: str = "Detailed Results"
    row_height: float = 30

    def height(self, width: float) -> float:
        return 55 + len(self.rows) * self.row_height + 25

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 16, self.title)
        doc.rect(80, y + 20, width - 160, 30, fill=t.panel, rx=4, opacity=0.8)
        head = {"font_size": 12, "font_weight": 600, "fill": t.title if t.dark else t.text}
        doc.text(120, y + 40, "State", **head)
        doc.text(width / 2, y + 40, "Count", text_anchor="middle", **head)
        doc.text(width - 120, y + 40, "Probability", text_anchor="end", **head)
        for i, row in enumerate(self.rows):
            ry = y + 55 + i * self.row_height
            fill = t.panel if i % 2 == 0 else t.panel_alt
            doc.rect(80, ry, width - 160, self.row_height - 2, fill=fill, rx=2, opacity=0.6)
            doc.text(120, ry + 18, ket(row.state), font_size=12, font_family="monospace",
                     fill=t.text)
            doc.text(width / 2, ry + 18, row.count, text_anchor="middle", font_size=12,
                     fill=t.text)
            doc.text(width - 120, ry + 18, pct(row.probability, 2), text_anchor="end",
                     font_size=12, fill=t.muted)


@dataclass
class RawDataBlock:
    """
    Pretty-printed JSON dump.

    At most ``max_lines`` lines are shown verbatim; the rest collapse
    into a ``... (N more lines)`` trailer.
    """

    theme: Theme
    data: Any
    max_lines: int = 50
    title: str = "Raw Data (JSON)"
    lines: list[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        dumped = json.dumps(self.data, indent=2, ensure_ascii=False, default=str)
        self.lines = dumped.split("\n")

    @property
    def hidden(self) -> int:
        return max(0, len(self.lines) - self.max_lines)

    def height(self, width: float) -> float:
        shown = min(len(self.lines), self.max_lines) + (1 if self.hidden else 0)
        return shown * RAW_LINE_HEIGHT + 60

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 16, self.title)
        h = self.height(width)
        doc.rect(40, y + 25, width - 80, h - 35, fill=t.panel_alt,
                 rx=4, stroke=t.accent if t.dark else t.panel_stroke, stroke_width=1,
                 opacity=0.7 if t.dark else 1)
        fill = t.muted if t.dark else t.text
        for i, line in enumerate(self.lines[: self.max_lines]):
            doc.text(50, y + 45 + i * RAW_LINE_HEIGHT, line, font_size=9,
                     font_family="monospace", fill=fill, xml_space="preserve")
        if self.hidden:
            doc.text(50, y + 45 + self.max_lines * RAW_LINE_HEIGHT,
                     f"... ({self.hidden} more lines)", font_size=9,
                     font_family="monospace", fill=t.faint)


# =============================================================================
# Move report sections
# =============================================================================


@dataclass
class MoveCardsBlock:
    """One card per decoded move with energy, statistics and components."""

    theme: Theme
    moves: Sequence[DecodedMove]
    title: str = "Move Breakdown"
    card_height: float = 180
    card_gap: float = 20

    def height(self, width: float) -> float:
        return 40 + len(self.moves) * (self.card_height + self.card_gap) + 20

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 20, self.title, size=20)
        card_width = width - 120
        bar_extent = card_width - 60
        maximum = max((m.probability for m in self.moves), default=0.0)
        for i, move in enumerate(self.moves):
            top = y + 40 + i * (self.card_height + self.card_gap)
            c = move.components
            with doc.group(60, top):
                doc.rect(0, 0, card_width, self.card_height - 10, fill=t.panel, rx=8,
                         stroke=t.panel_stroke, stroke_width=1)
                doc.text(20, 30, f"{move.emoji} {move.name}", font_size=16,
                         font_weight=600, fill=t.title)
                doc.text(20, 55, f"Energy: {energy_label(move.energy)} ({move.energy})",
                         font_size=14, fill=t.muted)
                doc.text(20, 80, f"Count: {move.count} | Probability: {pct(move.probability)}",
                         font_size=13, fill=t.muted)
                doc.rect(20, 90, scale(move.probability, maximum, bar_extent), 20,
                         fill=energy_color(move.energy), rx=4, opacity=0.8)
                doc.text(20, 125, "Components:", font_size=12, fill=t.muted)
                doc.text(
                    20,
                    145,
                    f"{_tick(c.jab_stomp)} Stomp | {_tick(c.arm_swing)} Swing | "
                    f"{_tick(c.chest_pop)} Pop",
                    font_size=11,
                    fill=t.text,
                )
                doc.text(20, 165, move.description, font_size=10, fill=t.faint)


def _tick(flag: bool) -> str:
    return "✅" if flag else "❌"


@dataclass
class RoutineBlock:
    """Numbered list of the top-ranked moves."""

    theme: Theme
    moves: Sequence[DecodedMove]
    title: str = "🎯 Suggested Routine"
    row_height: float = 40

    def height(self, width: float) -> float:
        return 20 + self._panel_height() + 40

    def _panel_height(self) -> float:
        return max(len(self.moves), 1) * self.row_height + 20

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 20, self.title, size=20)
        doc.rect(60, y + 40, width - 120, self._panel_height(), fill="#f0fdf4", rx=8,
                 stroke="#10b981", stroke_width=2)
        if not self.moves:
            doc.text(80, y + 70, "No moves decoded", font_size=14, fill=t.muted)
            return
        for i, move in enumerate(self.moves):
            doc.text(80, y + 70 + i * self.row_height,
                     f"{i + 1}. {move.emoji} {move.name} ({pct(move.probability)})",
                     font_size=14, font_weight=500, fill=t.title)


@dataclass
class TipsBlock:
    """Static list of choreography tips."""

    theme: Theme
    tips: Sequence[str] = CHOREOGRAPHY_TIPS
    title: str = "📝 Choreography Tips"
    row_height: float = 25

    def height(self, width: float) -> float:
        return 40 + len(self.tips) * self.row_height + 20 + 40

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 20, self.title, size=20)
        panel_height = len(self.tips) * self.row_height + 40
        doc.rect(60, y + 40, width - 120, panel_height, fill="#fef3c7", rx=8,
                 stroke="#f59e0b", stroke_width=2)
        for i, tip in enumerate(self.tips):
            doc.text(80, y + 70 + i * self.row_height, f"• {tip}", font_size=12,
                     fill=t.text)


@dataclass
class EnergyDistributionBlock:
    """Bar per energy level, scaled against the largest level mass."""

    theme: Theme
    distribution: dict[int, float]
    title: str = "Energy Distribution"
    row_height: float = 45
    bar_max: float = 400

    def height(self, width: float) -> float:
        return 40 + len(ENERGY_LEVELS) * self.row_height + 30

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        _section_title(doc, t, width / 2, y + 20, self.title, size=20)
        maximum = max(self.distribution.values(), default=0.0)
        for i, level in enumerate(ENERGY_LEVELS):
            mass = self.distribution.get(level, 0.0)
            ry = y + 60 + i * self.row_height
            bar = scale(mass, maximum, self.bar_max)
            doc.text(80, ry, f"{energy_icon(level)} {ENERGY_NAMES[level]} ({level}):",
                     font_size=14, font_weight=500, fill=t.text)
            doc.rect(200, ry - 15, bar, 20, fill=energy_color(level), rx=4, opacity=0.8)
            doc.text(205 + bar, ry, pct(mass), font_size=12, fill=t.muted)


# =============================================================================
# Portrait sections
# =============================================================================


@dataclass
class PortraitHeaderBlock:
    """Banner with logos, event title and an optional domain badge."""

    theme: Theme
    title: str
    subtitle: str
    domain: str | None = None
    logo_left: str | None = None
    logo_right: str | None = None

    def height(self, width: float) -> float:
        return 230

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        cx = width / 2
        doc.rect(40, y + 40, width - 80, 160, fill=t.header_fill, rx=15)
        if self.logo_left:
            doc.image(self.logo_left, 60, y + 55, 120, 120)
        if self.logo_right:
            doc.image(self.logo_right, width - 180, y + 55, 120, 120)
        doc.text(cx, y + 100, self.title, text_anchor="middle", fill=t.title,
                 font_size=42, font_weight=700, font_family=t.font_family,
                 filter=t.glow_filter)
        doc.text(cx, y + 140, self.subtitle, text_anchor="middle", fill="#e0e7ff",
                 font_size=18, font_weight=400, font_family=t.font_family)
        doc.line(200, y + 170, width - 200, y + 170, stroke=t.accent, stroke_width=1,
                 opacity=0.5)
        if self.domain:
            doc.rect(cx - 100, y + 190, 200, 30, fill=t.accent, rx=15, opacity=0.3)
            doc.text(cx, y + 210, self.domain, text_anchor="middle", fill="#e0e7ff",
                     font_size=14, font_weight=600, font_family=t.font_family)


@dataclass
class CodeBlock:
    """Numbered source listing inside a rounded panel."""

    theme: Theme
    title: str
    lines: Sequence[CodeLine]
    line_height: float = 20
    min_height: float = 400

    def height(self, width: float) -> float:
        return max(len(self.lines) * self.line_height + 60, self.min_height)

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        h = self.height(width)
        doc.rect(40, y, width - 80, h, fill=t.code_fill, rx=15, stroke=t.accent,
                 stroke_width=2, opacity=0.8)
        doc.rect(40, y, width - 80, h, fill="none", rx=15, stroke=t.accent_alt,
                 stroke_width=1, opacity=0.3, filter=t.glow_filter)
        doc.text(width / 2, y + 25, self.title, text_anchor="middle", fill="#a78bfa",
                 font_size=16, font_weight=600, font_family=t.font_family)
        for i, line in enumerate(self.lines):
            ly = y + 60 + i * self.line_height
            doc.text(60, ly, line.number, fill=t.faint, font_size=14,
                     font_family="monospace")
            doc.rich_text(100, ly, line.markup, fill=t.text, font_size=14,
                          font_family="monospace", xml_space="preserve")


@dataclass
class PromptBlock:
    """Original prompt (truncated) and category pill."""

    theme: Theme
    prompt: str | None = None
    category: str | None = None

    def height(self, width: float) -> float:
        return (80 if self.prompt else 0) + (40 if self.category else 0)

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        if self.prompt:
            doc.text(80, y + 40, "ORIGINAL PROMPT:", fill="#a78bfa", font_size=14,
                     font_weight=600, font_family=t.font_family)
            doc.text(80, y + 65, truncate(self.prompt, PROMPT_LIMIT), fill="#e0e7ff",
                     font_size=13, font_family=t.font_family)
        if self.category:
            top = y + (85 if self.prompt else 0)
            pill = max(150, len(self.category) * 8 + 40)
            doc.rect(80, top, pill, 28, fill=t.accent, rx=14, opacity=0.4)
            doc.text(80 + pill / 2, top + 19, self.category, text_anchor="middle",
                     fill="#e0e7ff", font_size=12, font_weight=600,
                     font_family=t.font_family)


@dataclass
class PortraitFooterBlock:
    """Generation timestamp, backend and shots with decorative rings."""

    theme: Theme
    timestamp: str
    backend: str | None = None
    shots: int | None = None

    def height(self, width: float) -> float:
        return 120

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        t = self.theme
        doc.rect(40, y, width - 80, 80, fill=t.panel_alt, rx=15, opacity=0.8)
        doc.line(80, y + 10, width - 80, y + 10, stroke=t.accent, stroke_width=1,
                 opacity=0.5)
        doc.text(80, y + 40, f"Generated: {self.timestamp}", fill="#e0e7ff",
                 font_size=16, font_weight=500, font_family=t.font_family)
        details = []
        if self.backend:
            details.append(f"Backend: {self.backend}")
        if self.shots:
            details.append(f"Shots: {self.shots}")
        if details:
            doc.text(80, y + 65, " | ".join(details), fill=t.muted, font_size=14,
                     font_family=t.font_family)
        cx = width - 100
        doc.circle(cx, y + 50, 25, fill="none", stroke=t.accent, stroke_width=1,
                   opacity=0.3)
        doc.circle(cx, y + 50, 15, fill="none", stroke=t.accent_alt, stroke_width=1,
                   opacity=0.5)
        doc.circle(cx, y + 50, 3, fill=t.accent, opacity=0.8, filter=t.glow_filter)
