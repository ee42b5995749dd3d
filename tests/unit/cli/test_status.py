"""Tests for synapse status and the version commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from phpsynapse.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYNAPSE_PATH", raising=False)
    monkeypatch.delenv("SYNAPSE_MODE", raising=False)


def _write_manifest(root: Path, data: dict) -> None:
    out = root / ".synapse"
    (out / "handlers").mkdir(parents=True, exist_ok=True)
    (out / "manifest.json").write_text(json.dumps(data), encoding="utf-8")


# ---------------------------------------------------------------------------
# synapse --version / version
# ---------------------------------------------------------------------------


def test_version_flag_exits_zero() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "synapse" in result.output.lower()


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "synapse" in result.output.lower()


# ---------------------------------------------------------------------------
# synapse status
# ---------------------------------------------------------------------------


def test_status_without_manifest(tmp_path: Path) -> None:
    result = runner.invoke(app, ["status", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert "No manifest found" in result.output
    assert "synapse build" in result.output


def test_status_shows_setups_and_hierarchy(tmp_path: Path) -> None:
    _write_manifest(
        tmp_path,
        {
            "setups": {"pages/Home.ts": "m6mllh"},
            "hierarchy": {"app.ts": {"pages/Home.ts": {"shared.ts": {}}}},
        },
    )
    (tmp_path / ".synapse" / "handlers" / "m6mllh.php").write_text("<?php\n")

    result = runner.invoke(app, ["status", "--root", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "pages/Home.ts" in result.output
    assert "m6mllh.php" in result.output
    assert "app.ts" in result.output
    assert "shared.ts" in result.output
    assert "Handlers:  1" in result.output


def test_status_dev_manifest_without_hierarchy(tmp_path: Path) -> None:
    _write_manifest(tmp_path, {"setups": {"a.ts": "x"}})
    result = runner.invoke(app, ["status", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert "No hierarchy recorded" in result.output


def test_status_corrupt_manifest_treated_as_empty(tmp_path: Path) -> None:
    (tmp_path / ".synapse").mkdir()
    (tmp_path / ".synapse" / "manifest.json").write_text("nope", encoding="utf-8")
    result = runner.invoke(app, ["status", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert "No setup exports recorded" in result.output


def test_status_bad_config(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("synapse_path: /etc\n", encoding="utf-8")
    result = runner.invoke(app, ["status", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
