# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Tests for report composition."""

from __future__ import annotations

import copy
import logging
import re
import xml.etree.ElementTree as ET

import pytest
from qkrump_engine.config import Config
from qkrump_engine.errors import RenderError, UnknownOutcomeError
from qkrump_engine.render import (
    MEDIA_TYPE,
    PortraitMetadata,
    render_circuit_portrait,
    render_krump_report,
    render_report,
    render_results_report,
    resolve_kind,
    suggest_filename,
)
from qkrump_engine.render.svg import fmt_num
from qkrump_engine.results import JobMetadata, JobResult


FIXED_MILLIS = 1762091611000  # 2025-11-02 13:53:31 UTC
LOGO = "data:image/png;base64,iVBORw0KGgo="

BELL_CODE = """@guppy
def bell() -> tuple[bool, bool]:
    q0, q1 = qubit(), qubit()
    h(q0)
    cx(q0, q1)  # entangle
    return measure(q0), measure(q1)
"""


def parse(report):
    """Parse a report, failing the test on malformed XML."""
    return ET.fromstring(report.to_bytes())


class TestResultsReport:
    def test_well_formed_and_sized(self, bell_result, bell_metadata, fixed_clock):
        report = render_results_report(bell_result, bell_metadata, clock=fixed_clock)
        root = parse(report)

        assert report.media_type == MEDIA_TYPE == "image/svg+xml"
        assert report.width == 600
        assert root.get("width") == "600"
        assert root.get("height") == fmt_num(report.height)

    def test_header_and_rows(self, bell_result, bell_metadata, fixed_clock):
        content = render_results_report(
            bell_result, bell_metadata, clock=fixed_clock
        ).content

        assert "bell_state • 1024 shots • simulator" in content
        assert "2025-11-02 13:53:31 UTC" in content
        assert "512 (50.0%)" in content
        assert "50.00%" in content
        assert "Quantum Krump Platform • 2025-11-02 13:53:31 UTC" in content

    def test_deterministic(self, bell_result, bell_metadata, fixed_clock):
        a = render_results_report(bell_result, bell_metadata, clock=fixed_clock)
        b = render_results_report(bell_result, bell_metadata, clock=fixed_clock)
        assert a == b

    def test_circuit_name_is_escaped(self, bell_result, fixed_clock):
        meta = JobMetadata(circuit="<evil & co>")
        report = render_results_report(bell_result, meta, clock=fixed_clock)

        assert "&lt;evil &amp; co&gt;" in report.content
        assert "<evil" not in report.content
        parse(report)

    def test_empty_result_renders(self, fixed_clock):
        report = render_results_report(JobResult(), clock=fixed_clock)
        parse(report)
        assert "0 shots" in report.content

    def test_raw_data_includes_metadata(self, bell_result, fixed_clock):
        report = render_results_report(
            bell_result,
            JobMetadata(circuit="bell_state", backend_type="qpu"),
            clock=fixed_clock,
        )
        assert "&quot;results&quot;: {" in report.content
        assert "&quot;backend_type&quot;: &quot;qpu&quot;" in report.content

        bare = render_results_report(bell_result, clock=fixed_clock)
        assert "&quot;metadata&quot;: null" in bare.content

    def test_raw_data_capped_by_config(self, krump_result, fixed_clock):
        capped = render_results_report(
            krump_result, clock=fixed_clock, config=Config(raw_data_max_lines=10)
        )
        full = render_results_report(krump_result, clock=fixed_clock)

        assert re.search(r"\.\.\. \(\d+ more lines\)", capped.content)
        assert "more lines" not in full.content
        assert capped.height < full.height

    def test_assets_embedded(self, bell_result, fixed_clock):
        report = render_results_report(
            bell_result,
            clock=fixed_clock,
            assets={"logo_left": LOGO, "logo_footer": LOGO},
        )
        images = parse(report).findall(".//{http://www.w3.org/2000/svg}image")
        assert len(images) == 2
        assert all(img.get("href") == LOGO for img in images)

    def test_no_assets_no_images(self, bell_result, fixed_clock):
        report = render_results_report(bell_result, clock=fixed_clock)
        assert "<image" not in report.content

    def test_inputs_not_mutated(self, krump_result, bell_metadata, fixed_clock):
        before = (copy.deepcopy(krump_result), copy.deepcopy(bell_metadata))
        render_results_report(krump_result, bell_metadata, clock=fixed_clock)
        assert (krump_result, bell_metadata) == before

    def test_logs_render(self, bell_result, fixed_clock, caplog):
        with caplog.at_level(logging.INFO, logger="qkrump_engine.render.reports"):
            render_results_report(bell_result, clock=fixed_clock)
        assert "Rendered results report" in caplog.text


class TestKrumpReport:
    def test_contents(self, krump_result, fixed_clock):
        report = render_krump_report(krump_result, clock=fixed_clock)
        parse(report)

        assert report.width == 700
        assert "Krump Choreography Analysis" in report.content
        assert "Stomp &amp; Pop" in report.content
        assert "Full Krump" in report.content
        assert "Average Energy: ⚡⚡⚡ (1.91)" in report.content
        assert "Circuit: krump_choreography | Shots: 1000 | Backend: simulator" in report.content

    def test_unknown_outcome_fails(self, bell_result, fixed_clock):
        with pytest.raises(UnknownOutcomeError):
            render_krump_report(bell_result, clock=fixed_clock)

    def test_empty_result(self, fixed_clock):
        report = render_krump_report(JobResult(), clock=fixed_clock)
        parse(report)
        assert "No moves decoded" in report.content

    def test_height_grows_with_moves(self, make_result, krump_result, fixed_clock):
        small = render_krump_report(make_result({"111": 10}), clock=fixed_clock)
        large = render_krump_report(krump_result, clock=fixed_clock)
        assert large.height > small.height


class TestCircuitPortrait:
    def test_contents(self, fixed_clock):
        meta = PortraitMetadata(
            circuit_name="Bell <pair>",
            domain="Entanglement",
            backend="simulator",
            shots=1024,
        )
        report = render_circuit_portrait(BELL_CODE, meta, clock=fixed_clock)
        parse(report)

        assert report.width == 1200
        assert "KRUMP QUANTUM VIBE CODER" in report.content
        assert "Bell &lt;pair&gt;" in report.content
        assert "Generated: 2025-11-02 13:53:31 UTC" in report.content
        assert "Backend: simulator" in report.content

    def test_minimum_height(self, fixed_clock):
        report = render_circuit_portrait("x = 1", clock=fixed_clock)
        assert report.height == 230 + 20 + 400 + 20 + 120

    def test_long_code_grows(self, fixed_clock):
        code = "\n".join(f"q{i} = qubit()" for i in range(30))
        report = render_circuit_portrait(code, clock=fixed_clock)
        assert report.height == 230 + 20 + (30 * 20 + 60) + 20 + 120

    def test_prompt_truncated(self, fixed_clock):
        meta = PortraitMetadata(prompt="x" * 200, category="Chemistry")
        content = render_circuit_portrait("pass", meta, clock=fixed_clock).content

        assert "x" * 140 + "..." in content
        assert "x" * 141 not in content
        assert "Chemistry" in content

    def test_highlight_toggle(self, fixed_clock):
        plain = render_circuit_portrait(BELL_CODE, highlight=False, clock=fixed_clock)
        colored = render_circuit_portrait(BELL_CODE, clock=fixed_clock)
        assert "<tspan" not in plain.content
        assert "<tspan" in colored.content

    def test_metadata_from_dict(self):
        meta = PortraitMetadata.from_dict({"circuit_name": "", "shots": "64"})
        assert meta.circuit_name == "Quantum Circuit"
        assert meta.shots == 64
        assert PortraitMetadata.from_dict(None) == PortraitMetadata()


class TestDispatch:
    def test_auto_picks_krump(self, krump_result):
        assert resolve_kind("auto", krump_result) == "krump"

    def test_auto_uses_metadata_circuit(self):
        meta = JobMetadata(circuit="krump_choreography")
        assert resolve_kind("auto", JobResult(), meta) == "krump"

    def test_auto_defaults_to_results(self, bell_result, bell_metadata):
        assert resolve_kind("auto", bell_result, bell_metadata) == "results"

    def test_explicit_kind(self, krump_result):
        assert resolve_kind("results", krump_result) == "results"

    def test_unknown_kind(self, bell_result):
        with pytest.raises(RenderError, match="Unknown report kind"):
            render_report(bell_result, kind="portrait")

    def test_unknown_theme(self, bell_result, fixed_clock):
        with pytest.raises(RenderError, match="Unknown theme"):
            render_report(bell_result, theme="neon", clock=fixed_clock)

    def test_theme_override(self, krump_result, fixed_clock):
        light = render_report(krump_result, clock=fixed_clock)
        dark = render_report(krump_result, theme="midnight", clock=fixed_clock)
        assert light.content != dark.content
        assert light.width == dark.width == 700


class TestFilenames:
    def test_prefixes(self, fixed_clock):
        assert suggest_filename("results", clock=fixed_clock) == f"quantum-job-{FIXED_MILLIS}.svg"
        assert suggest_filename("krump", clock=fixed_clock).startswith("krump-choreography-")
        assert suggest_filename("portrait", clock=fixed_clock).startswith("quantum-circuit-")

    def test_job_id_truncated(self, fixed_clock):
        name = suggest_filename("krump", "01HZX3K9ABCDEFGH", clock=fixed_clock)
        assert name == f"krump-choreography-01HZX3K9-{FIXED_MILLIS}.svg"

    def test_report_filename(self, bell_result, fixed_clock):
        report = render_report(bell_result, clock=fixed_clock, job_id="abc")
        assert report.filename == f"quantum-job-abc-{FIXED_MILLIS}.svg"

    def test_unknown_kind(self):
        with pytest.raises(RenderError):
            suggest_filename("poster")
