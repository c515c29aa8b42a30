# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Tests for the qkrump public Python API.

Tests the user-facing API exposed through the qkrump package.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest


class TestModuleExports:
    """Tests that public API exports are correct."""

    def test_top_level_exports(self) -> None:
        import qkrump

        for name in qkrump.__all__:
            assert hasattr(qkrump, name), name

    def test_lazy_values_are_engine_objects(self) -> None:
        import qkrump
        from qkrump_engine.decoder import decode_result
        from qkrump_engine.results import JobResult

        assert qkrump.JobResult is JobResult
        assert qkrump.decode_result is decode_result

    def test_dir_lists_exports(self) -> None:
        import qkrump

        listing = dir(qkrump)
        assert "render_report" in listing
        assert "AssetResolver" in listing

    def test_unknown_attribute(self) -> None:
        import qkrump

        with pytest.raises(AttributeError, match="no attribute"):
            qkrump.not_a_thing  # noqa: B018

    def test_version(self) -> None:
        import qkrump

        assert isinstance(qkrump.__version__, str)

    def test_errors_submodule(self) -> None:
        from qkrump import errors
        from qkrump_engine import errors as engine_errors

        assert errors.KrumpError is engine_errors.KrumpError
        assert issubclass(errors.AssetFetchError, errors.KrumpError)
        assert set(errors.__all__) <= set(dir(errors))

    def test_config_submodule(self) -> None:
        from qkrump import config

        assert config.ASSET_SLOTS == ("logo_left", "logo_right", "logo_footer")
        assert callable(config.reset_config)

    def test_ui_submodule(self) -> None:
        pytest.importorskip("fastapi")
        from qkrump import ui

        assert callable(ui.create_app)


class TestWorkflow:
    """End-to-end use of the facade."""

    def test_decode_then_render(self, fixed_clock) -> None:
        from qkrump import (
            JobMetadata,
            JobResult,
            average_energy,
            decode_result,
            energy_label,
            render_report,
        )

        result = JobResult.from_dict(
            {
                "measurements": {"111": 600, "000": 400},
                "probabilities": {"111": 0.6, "000": 0.4},
            }
        )
        moves = decode_result(result)

        assert moves[0].name == "Full Krump"
        assert average_energy(moves) == pytest.approx(1.8)
        assert energy_label(2) == "⚡⚡⚡"

        report = render_report(
            result,
            JobMetadata(circuit="krump_choreography"),
            clock=fixed_clock,
        )
        assert report.filename.startswith("krump-choreography-")
        assert ET.fromstring(report.to_bytes()).get("width") == "700"

    def test_custom_config_flows_into_reports(self, fixed_clock) -> None:
        from qkrump import Config, JobResult, render_results_report, set_config

        result = JobResult(measurements={f"{i:03b}": i + 1 for i in range(8)})
        set_config(Config(embed_assets=False, raw_data_max_lines=5))

        report = render_results_report(result, clock=fixed_clock)

        assert "more lines)" in report.content

    def test_portrait(self, fixed_clock) -> None:
        from qkrump import PortraitMetadata, render_circuit_portrait

        report = render_circuit_portrait(
            "@guppy\ndef f() -> None:\n    pass\n",
            PortraitMetadata(circuit_name="f"),
            clock=fixed_clock,
        )
        assert report.filename.startswith("quantum-circuit-")
