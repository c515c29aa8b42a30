# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""CLI tests for decode, render, portrait and config commands."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Callable

import pytest
from click.testing import CliRunner
from qkrump_engine.cli import cli


KRUMP_PAYLOAD = {
    "measurements": {"111": 600, "101": 300, "000": 100},
    "probabilities": {"111": 0.6, "101": 0.3, "000": 0.1},
    "circuit": "krump_choreography",
    "shots": 1000,
}

BELL_PAYLOAD = {
    "measurements": {"00": 512, "11": 512},
    "probabilities": {"00": 0.5, "11": 0.5},
    "statevector": None,
}


@pytest.fixture
def invoke(tmp_path: Path, monkeypatch) -> Callable[..., Any]:
    """Invoke CLI commands from inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(cli, list(args), catch_exceptions=False)

    return _invoke


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestDecode:
    """Tests for `qkrump decode`."""

    def test_pretty(self, invoke, write_json):
        path = write_json("krump.json", KRUMP_PAYLOAD)
        result = invoke("decode", str(path))

        assert result.exit_code == 0
        assert "Decoded Moves" in result.output
        assert "Full Krump" in result.output
        assert "Stomp & Pop" in result.output
        assert "Suggested routine:" in result.output
        assert "Total shots: 1000" in result.output

    def test_json(self, invoke, write_json):
        path = write_json("krump.json", KRUMP_PAYLOAD)
        result = invoke("decode", str(path), "--format", "json", "--top", "2")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [m["bitstring"] for m in data["moves"]] == ["111", "101", "000"]
        assert len(data["suggested_routine"]) == 2
        assert data["average_energy"] == pytest.approx(0.6 * 3 + 0.3 * 2)
        assert set(data["energy_distribution"]) == {"0", "1", "2", "3"}

    def test_envelope_accepted(self, invoke, write_json):
        path = write_json("job.json", {"results": KRUMP_PAYLOAD, "metadata": {"shots": 1000}})
        result = invoke("decode", str(path), "--format", "json")
        assert result.exit_code == 0

    def test_unknown_outcome(self, invoke, write_json):
        path = write_json("bell.json", BELL_PAYLOAD)
        result = invoke("decode", str(path))

        assert result.exit_code != 0
        assert "'00'" in result.output

    def test_invalid_json(self, invoke, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = invoke("decode", str(path))

        assert result.exit_code != 0
        assert "Invalid JSON" in result.output

    def test_malformed_result(self, invoke, write_json):
        path = write_json("bad.json", {"measurements": [1, 2]})
        result = invoke("decode", str(path))

        assert result.exit_code != 0
        assert "Invalid job result" in result.output


class TestRender:
    """Tests for `qkrump render`."""

    def test_auto_krump_report(self, invoke, write_json, tmp_path):
        path = write_json("krump.json", KRUMP_PAYLOAD)
        out = tmp_path / "moves.svg"
        result = invoke("render", str(path), "-o", str(out), "--no-assets")

        assert result.exit_code == 0
        assert "Wrote" in result.output
        root = ET.fromstring(out.read_bytes())
        assert root.get("width") == "700"

    def test_default_filename(self, invoke, write_json, tmp_path):
        path = write_json("bell.json", BELL_PAYLOAD)
        result = invoke("render", str(path), "--job-id", "01HZX3K9QQQQ", "--no-assets")

        assert result.exit_code == 0
        written = list(tmp_path.glob("quantum-job-01HZX3K9-*.svg"))
        assert len(written) == 1

    def test_metadata_file(self, invoke, write_json, tmp_path):
        path = write_json("bell.json", BELL_PAYLOAD)
        meta = write_json("meta.json", {"circuit": "bell_state", "shots": 1024})
        out = tmp_path / "bell.svg"
        result = invoke("render", str(path), "--metadata", str(meta), "-o", str(out))

        assert result.exit_code == 0
        assert "bell_state • 1024 shots" in out.read_text(encoding="utf-8")

    def test_krump_kind_on_bell_fails(self, invoke, write_json, tmp_path):
        path = write_json("bell.json", BELL_PAYLOAD)
        out = tmp_path / "never.svg"
        result = invoke("render", str(path), "--kind", "krump", "-o", str(out))

        assert result.exit_code != 0
        assert not out.exists()

    def test_theme_choice_validated(self, invoke, write_json):
        path = write_json("bell.json", BELL_PAYLOAD)
        result = invoke("render", str(path), "--theme", "neon")
        assert result.exit_code == 2


class TestPortrait:
    """Tests for `qkrump portrait`."""

    def test_uses_file_stem(self, invoke, tmp_path):
        code = tmp_path / "bell_pair.py"
        code.write_text("@guppy\ndef bell() -> None:\n    h(q)\n", encoding="utf-8")
        out = tmp_path / "portrait.svg"
        result = invoke(
            "portrait", str(code), "-o", str(out), "--domain", "Entanglement",
            "--no-assets",
        )

        assert result.exit_code == 0
        content = out.read_text(encoding="utf-8")
        assert "bell_pair" in content
        assert "Entanglement" in content
        ET.fromstring(out.read_bytes())


class TestConfigCommand:
    def test_json(self, invoke):
        result = invoke("config", "--format", "json")
        assert result.exit_code == 0
        assert json.loads(result.output)["embed_assets"] is False

    def test_pretty(self, invoke):
        result = invoke("config")
        assert result.exit_code == 0
        assert "(mock results)" in result.output
