"""Tests for synapse init."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from phpsynapse.cli.main import app

runner = CliRunner()


def test_init_creates_config(tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 0, result.output
    content = (tmp_path / "synapse.yaml").read_text(encoding="utf-8")
    assert "synapse_path: .synapse/" in content
    assert "mode: build" in content


def test_init_creates_missing_directory(tmp_path: Path) -> None:
    target = tmp_path / "new" / "project"
    result = runner.invoke(app, ["init", str(target)])
    assert result.exit_code == 0
    assert (target / "synapse.yaml").exists()


def test_init_keeps_existing_config(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("mode: serve\n", encoding="utf-8")
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 0
    assert "already exists" in result.output
    assert (tmp_path / "synapse.yaml").read_text(encoding="utf-8") == "mode: serve\n"


def test_init_force_overwrites(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("mode: serve\n", encoding="utf-8")
    result = runner.invoke(app, ["init", str(tmp_path), "--force"])
    assert result.exit_code == 0
    assert "mode: build" in (tmp_path / "synapse.yaml").read_text(encoding="utf-8")


def test_init_prints_next_steps(tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert "synapse build" in result.output
