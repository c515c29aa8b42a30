# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Report composition.

Each ``render_*`` function resolves display values, stacks section
blocks in a :class:`~qkrump_engine.render.layout.VerticalFlow`, sizes
the document from the measured flow and returns a
:class:`ReportDocument`.

Rendering is pure. Branding images arrive already resolved as data URIs
(see :mod:`qkrump_engine.assets`) and the current time comes from an
injectable clock, so identical inputs give byte-identical output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from qkrump_engine.config import Config, get_config
from qkrump_engine.decoder.decode import (
    average_energy,
    decode_result,
    energy_distribution,
    energy_label,
    top_n,
)
from qkrump_engine.errors import RenderError
from qkrump_engine.render.highlight import highlight_lines
from qkrump_engine.render.layout import Block, VerticalFlow
from qkrump_engine.render.sections import (
    BarChartBlock,
    BarRow,
    CodeBlock,
    EnergyDistributionBlock,
    FooterBlock,
    HeaderBlock,
    MoveCardsBlock,
    PortraitFooterBlock,
    PortraitHeaderBlock,
    PromptBlock,
    RawDataBlock,
    ResultsTableBlock,
    RoutineBlock,
    TableRow,
    TipsBlock,
    pct,
)
from qkrump_engine.render.svg import SvgDocument
from qkrump_engine.render.themes import Theme, get_theme
from qkrump_engine.results import (
    KRUMP_CIRCUIT,
    JobMetadata,
    JobResult,
    resolve_context,
)
from qkrump_engine.utils.common import Clock, epoch_millis, format_timestamp


logger = logging.getLogger(__name__)

MEDIA_TYPE = "image/svg+xml"

REPORT_KINDS = ("auto", "results", "krump")

_FILENAME_PREFIXES = {
    "results": "quantum-job",
    "krump": "krump-choreography",
    "portrait": "quantum-circuit",
}

RESULTS_WIDTH = 600
KRUMP_WIDTH = 700
PORTRAIT_WIDTH = 1200

PLATFORM_NAME = "Quantum Krump Platform"
PORTRAIT_TITLE = "KRUMP QUANTUM VIBE CODER"
PORTRAIT_SUBTITLE = "International Year of Quantum Science and Technology 2025"

AssetMap = Mapping[str, str]


@dataclass(frozen=True)
class ReportDocument:
    """
    A rendered report.

    Attributes
    ----------
    content : str
        Complete SVG document.
    filename : str
        Suggested download filename.
    width, height : float
        Document size in user units.
    media_type : str
        Always ``image/svg+xml``.
    """

    content: str
    filename: str
    width: float
    height: float
    media_type: str = MEDIA_TYPE

    def to_bytes(self) -> bytes:
        """UTF-8 encoded document."""
        return self.content.encode("utf-8")


@dataclass(frozen=True)
class PortraitMetadata:
    """Descriptive fields shown on a circuit portrait."""

    circuit_name: str = "Quantum Circuit"
    domain: str | None = None
    backend: str | None = None
    shots: int | None = None
    timestamp: str | None = None
    prompt: str | None = None
    category: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PortraitMetadata:
        if not data:
            return cls()
        shots = data.get("shots")
        return cls(
            circuit_name=str(data.get("circuit_name") or cls.circuit_name),
            domain=data.get("domain") or None,
            backend=data.get("backend") or None,
            shots=int(shots) if shots is not None else None,
            timestamp=data.get("timestamp") or None,
            prompt=data.get("prompt") or None,
            category=data.get("category") or None,
        )


# =============================================================================
# Helpers
# =============================================================================


def suggest_filename(
    kind: str,
    job_id: str | None = None,
    *,
    clock: Clock | None = None,
) -> str:
    """
    Build a download filename for a report.

    Parameters
    ----------
    kind : {"results", "krump", "portrait"}
        Report kind.
    job_id : str, optional
        Job identifier; its first 8 characters are included.
    clock : callable, optional
        Time source for the millisecond suffix.

    Returns
    -------
    str
        E.g. ``"krump-choreography-01hzx3k9-1730555611000.svg"``.
    """
    try:
        prefix = _FILENAME_PREFIXES[kind]
    except KeyError:
        raise RenderError(f"Unknown report kind: {kind!r}") from None
    parts = [prefix]
    if job_id:
        parts.append(job_id[:8])
    parts.append(str(epoch_millis(clock)))
    return "-".join(parts) + ".svg"


def _asset(assets: AssetMap | None, slot: str) -> str | None:
    if not assets:
        return None
    return assets.get(slot)


def _compose(
    kind: str,
    theme: Theme,
    width: float,
    blocks: list[Block],
    *,
    gap: float,
    bottom: float,
    job_id: str | None,
    clock: Clock | None,
) -> ReportDocument:
    flow = VerticalFlow(width=width, bottom=bottom, gap=gap).extend(blocks)
    height = flow.measure()
    doc = SvgDocument(width, height)
    theme.install(doc)
    flow.render(doc)
    content = doc.tostring()
    logger.info(
        "Rendered %s report (%sx%s, %d sections, %d bytes)",
        kind,
        width,
        height,
        len(blocks),
        len(content),
    )
    return ReportDocument(
        content=content,
        filename=suggest_filename(kind, job_id, clock=clock),
        width=width,
        height=height,
    )


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


# =============================================================================
# Reports
# =============================================================================


def render_results_report(
    result: JobResult,
    metadata: JobMetadata | None = None,
    *,
    assets: AssetMap | None = None,
    theme: str | Theme = "quantum",
    clock: Clock | None = None,
    job_id: str | None = None,
    config: Config | None = None,
) -> ReportDocument:
    """
    Render the generic measurement report.

    Sections: header, count chart, probability chart, detailed table,
    raw JSON, footer.

    Parameters
    ----------
    result : JobResult
        Job result to visualize.
    metadata : JobMetadata, optional
        Circuit, shots, backend and creation time fallbacks.
    assets : mapping, optional
        Resolved data URIs keyed by slot (``logo_left``, ``logo_right``,
        ``logo_footer``). Missing slots are simply not drawn.
    theme : str or Theme
        Colour theme. Default ``"quantum"``.
    clock : callable, optional
        Time source for timestamps and the filename.
    job_id : str, optional
        Included in the suggested filename.
    config : Config, optional
        Defaults to :func:`~qkrump_engine.config.get_config`.

    Returns
    -------
    ReportDocument
        Rendered report.
    """
    cfg = config or get_config()
    t = get_theme(theme)
    ctx = resolve_context(result, metadata, clock=clock)
    outcomes = result.outcomes()
    by_probability = sorted(outcomes, key=lambda o: o.probability, reverse=True)

    blocks: list[Block] = [
        HeaderBlock(
            theme=t,
            title="⚛️ Quantum Circuit Results",
            meta_line=f"{ctx.circuit} • {ctx.shots} shots • {ctx.backend}",
            timestamp=ctx.timestamp,
            logo_left=_asset(assets, "logo_left"),
            logo_right=_asset(assets, "logo_right"),
        ),
        BarChartBlock(
            theme=t,
            title="Measurement Counts",
            rows=[
                BarRow(o.bitstring, o.count, f"{o.count} ({pct(o.probability)})")
                for o in outcomes
            ],
            fill=t.bar_fill,
            axis_label="Count",
        ),
        BarChartBlock(
            theme=t,
            title="Probabilities",
            rows=[
                BarRow(o.bitstring, o.probability, pct(o.probability, 2))
                for o in by_probability
            ],
            fill=t.prob_fill,
            axis_label="Probability",
        ),
        ResultsTableBlock(
            theme=t,
            rows=[TableRow(o.bitstring, o.count, o.probability) for o in outcomes],
        ),
        RawDataBlock(
            theme=t,
            data={
                "results": result.to_dict(),
                "metadata": metadata.to_dict() if metadata else None,
            },
            max_lines=cfg.raw_data_max_lines,
        ),
        FooterBlock(
            theme=t,
            text=f"{PLATFORM_NAME} • {ctx.timestamp}",
            logo=_asset(assets, "logo_footer"),
        ),
    ]
    return _compose(
        "results", t, RESULTS_WIDTH, blocks,
        gap=20, bottom=10, job_id=job_id, clock=clock,
    )


def render_krump_report(
    result: JobResult,
    metadata: JobMetadata | None = None,
    *,
    assets: AssetMap | None = None,
    theme: str | Theme = "light",
    clock: Clock | None = None,
    job_id: str | None = None,
    config: Config | None = None,
) -> ReportDocument:
    """
    Render the choreography report for a krump circuit.

    Every measured bitstring is decoded into a move; the report shows a
    card per move, the suggested routine, tips, the energy distribution
    and the raw data (including the decoded moves).

    Raises
    ------
    UnknownOutcomeError
        If a measured bitstring has no move.
    """
    cfg = config or get_config()
    t = get_theme(theme)
    ctx = resolve_context(result, metadata, clock=clock, default_circuit=KRUMP_CIRCUIT)
    decoded = decode_result(result)
    routine = top_n(decoded, cfg.routine_size)
    avg = average_energy(decoded)

    raw = {
        "results": result.to_dict(),
        "decoded_moves": [d.to_dict() for d in decoded],
        "suggested_routine": [d.to_dict() for d in routine],
        "average_energy": round(avg, 4),
    }
    blocks: list[Block] = [
        HeaderBlock(
            theme=t,
            title="🎭 Krump Choreography Analysis",
            meta_line=(
                f"Circuit: {ctx.circuit} | Shots: {ctx.shots} | Backend: {ctx.backend}"
            ),
            timestamp=ctx.timestamp,
            highlight=(
                f"Average Energy: {energy_label(_round_half_up(avg))} ({avg:.2f})"
            ),
            logo_left=_asset(assets, "logo_left"),
            logo_right=_asset(assets, "logo_right"),
        ),
        MoveCardsBlock(theme=t, moves=decoded),
        RoutineBlock(theme=t, moves=routine),
        TipsBlock(theme=t),
        EnergyDistributionBlock(theme=t, distribution=energy_distribution(decoded)),
        RawDataBlock(
            theme=t,
            data=raw,
            max_lines=cfg.raw_data_max_lines,
            title="📊 Raw Data (JSON)",
        ),
        FooterBlock(
            theme=t,
            text=f"Generated by {PLATFORM_NAME} | Dance meets Quantum Computing",
            logo=_asset(assets, "logo_footer"),
        ),
    ]
    return _compose(
        "krump", t, KRUMP_WIDTH, blocks,
        gap=20, bottom=20, job_id=job_id, clock=clock,
    )


def render_circuit_portrait(
    code: str,
    metadata: PortraitMetadata | None = None,
    *,
    assets: AssetMap | None = None,
    highlight: bool = True,
    theme: str | Theme = "midnight",
    clock: Clock | None = None,
    job_id: str | None = None,
) -> ReportDocument:
    """
    Render a shareable portrait of circuit source code.

    Parameters
    ----------
    code : str
        Program text; every line is listed with its number.
    metadata : PortraitMetadata, optional
        Name, domain badge, prompt, category, backend and shots.
    highlight : bool
        Colour keywords, calls and comments.
    """
    meta = metadata or PortraitMetadata()
    t = get_theme(theme)
    blocks: list[Block] = [
        PortraitHeaderBlock(
            theme=t,
            title=PORTRAIT_TITLE,
            subtitle=PORTRAIT_SUBTITLE,
            domain=meta.domain,
            logo_left=_asset(assets, "logo_left"),
            logo_right=_asset(assets, "logo_right"),
        ),
        CodeBlock(theme=t, title=meta.circuit_name, lines=highlight_lines(code, highlight)),
    ]
    if meta.prompt or meta.category:
        blocks.append(PromptBlock(theme=t, prompt=meta.prompt, category=meta.category))
    blocks.append(
        PortraitFooterBlock(
            theme=t,
            timestamp=format_timestamp(meta.timestamp, clock),
            backend=meta.backend,
            shots=meta.shots,
        )
    )
    return _compose(
        "portrait", t, PORTRAIT_WIDTH, blocks,
        gap=20, bottom=0, job_id=job_id, clock=clock,
    )


def resolve_kind(
    kind: str,
    result: JobResult,
    metadata: JobMetadata | None = None,
) -> str:
    """
    Resolve ``"auto"`` to a concrete report kind.

    The move report is chosen when the circuit (from the result, else
    the metadata) is ``krump_choreography``.
    """
    if kind not in REPORT_KINDS:
        raise RenderError(
            f"Unknown report kind {kind!r}; expected one of {', '.join(REPORT_KINDS)}"
        )
    if kind != "auto":
        return kind
    circuit = result.circuit or (metadata.circuit if metadata else None)
    return "krump" if circuit == KRUMP_CIRCUIT else "results"


def render_report(
    result: JobResult,
    metadata: JobMetadata | None = None,
    *,
    kind: str = "auto",
    theme: str | Theme | None = None,
    **kwargs: Any,
) -> ReportDocument:
    """
    Render the report appropriate for ``result``.

    Parameters
    ----------
    kind : {"auto", "results", "krump"}
        Report kind; ``"auto"`` picks by circuit name.
    theme : str or Theme, optional
        Overrides the report's default theme.
    **kwargs
        Passed to the selected ``render_*`` function.
    """
    resolved = resolve_kind(kind, result, metadata)
    if theme is not None:
        kwargs["theme"] = theme
    logger.debug("Report kind %s resolved to %s", kind, resolved)
    if resolved == "krump":
        return render_krump_report(result, metadata, **kwargs)
    return render_results_report(result, metadata, **kwargs)
