# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
CLI integration tests for qkrump.

Exercises user-facing commands end to end through the console script.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest


class TestEntryPoint:
    def test_main_delegates(self) -> None:
        from qkrump.cli import main

        with patch("qkrump_engine.cli.cli") as cli:
            main()
        cli.assert_called_once_with()

    def test_help_lists_commands(self, invoke: Callable) -> None:
        result = invoke("--help")
        assert result.exit_code == 0
        for command in ("decode", "render", "portrait", "config", "serve"):
            assert command in result.output


class TestDecodeThenRender:
    """A krump job envelope decoded and rendered from the command line."""

    def test_decode_envelope(self, invoke: Callable, krump_file: Path) -> None:
        result = invoke("decode", str(krump_file), "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["moves"][0]["name"] == "Stomp & Swing"
        assert len(data["suggested_routine"]) == 3
        assert data["total_shots"] == 1024

    def test_render_uses_envelope_metadata(
        self, invoke: Callable, krump_file: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "report.svg"
        result = invoke("render", str(krump_file), "-o", str(out))

        assert result.exit_code == 0
        content = out.read_text(encoding="utf-8")
        assert "Circuit: krump_choreography | Shots: 1024 | Backend: simulator" in content
        assert "Stomp &amp; Swing" in content

    def test_verbose_flag(self, invoke: Callable, krump_file: Path) -> None:
        result = invoke("-v", "decode", str(krump_file))
        assert result.exit_code == 0

    def test_missing_file(self, invoke: Callable) -> None:
        result = invoke("decode", "missing.json")
        assert result.exit_code == 2


class TestServe:
    def test_serve_runs_uvicorn(self, invoke: Callable) -> None:
        with patch("qkrump_ui.app.run_server") as run_server:
            result = invoke("serve", "--port", "9001")

        assert result.exit_code == 0
        run_server.assert_called_once_with(host="127.0.0.1", port=9001, debug=False)

    @pytest.mark.parametrize("missing", ["uvicorn", "fastapi"])
    def test_serve_without_ui_extra(
        self, invoke: Callable, monkeypatch: pytest.MonkeyPatch, missing: str
    ) -> None:
        with patch("qkrump_ui.app.run_server") as run_server:
            monkeypatch.setitem(sys.modules, missing, None)
            result = invoke("serve")

        assert result.exit_code == 1
        assert "qkrump[ui]" in result.output
        run_server.assert_not_called()
