"""Tests for the phpsynapse config loader."""

from __future__ import annotations

import warnings
from pathlib import Path

import pytest
import yaml

from phpsynapse.config import (
    MODE_BUILD,
    MODE_SERVE,
    ConfigError,
    SynapseConfig,
    ensure_project_config,
    load_config,
    validate_config,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data), encoding="utf-8")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYNAPSE_PATH", raising=False)
    monkeypatch.delenv("SYNAPSE_MODE", raising=False)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_load_config_defaults_no_file(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)
    assert cfg.root == tmp_path.resolve()
    assert cfg.synapse_path == ".synapse/"
    assert cfg.include == [r"re:\.[jt]sx?$"]
    assert cfg.exclude == ["re:node_modules", r"re:\.synapse/"]
    assert cfg.mode == MODE_BUILD
    assert not cfg.incremental


def test_derived_paths(tmp_path: Path) -> None:
    cfg = SynapseConfig(root=tmp_path, synapse_path="out/synapse")
    assert cfg.output_dir == tmp_path / "out" / "synapse"
    assert cfg.handlers_dir == tmp_path / "out" / "synapse" / "handlers"
    assert cfg.manifest_path == tmp_path / "out" / "synapse" / "manifest.json"


def test_dataclass_derives_exclude_from_synapse_path(tmp_path: Path) -> None:
    cfg = SynapseConfig(root=tmp_path, synapse_path="gen/")
    assert cfg.exclude == ["re:node_modules", "re:gen/"]


# ---------------------------------------------------------------------------
# synapse.yaml
# ---------------------------------------------------------------------------


def test_project_file_overrides_defaults(tmp_path: Path) -> None:
    _write_yaml(
        tmp_path / "synapse.yaml",
        {"synapse_path": "build/php", "include": ["resources/**"], "mode": "serve"},
    )
    cfg = load_config(tmp_path)
    assert cfg.synapse_path == "build/php"
    assert cfg.include == ["resources/**"]
    assert cfg.exclude == ["re:node_modules", "re:build/php"]
    assert cfg.mode == MODE_SERVE
    assert cfg.incremental


def test_explicit_exclude_is_kept(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"exclude": ["vendor/*"]})
    assert load_config(tmp_path).exclude == ["vendor/*"]


def test_single_string_pattern_becomes_list(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"include": "src/*.ts"})
    assert load_config(tmp_path).include == ["src/*.ts"]


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path).synapse_path == ".synapse/"


def test_non_mapping_file_rejected(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_bad_pattern_type_rejected(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"include": {"a": 1}})
    with pytest.raises(ConfigError, match="include"):
        load_config(tmp_path)


def test_unknown_key_warns(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"synapsePath": ".x/"})
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        load_config(tmp_path)
    assert any("synapsePath" in str(w.message) for w in caught)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("bad", ["/abs/path", "../outside", "a/../../b", "  "])
def test_bad_synapse_path_rejected(tmp_path: Path, bad: str) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"synapse_path": bad})
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_mode_rejected(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"mode": "watch"})
    with pytest.raises(ConfigError, match="mode"):
        load_config(tmp_path)


def test_validate_config_accepts_defaults(tmp_path: Path) -> None:
    validate_config(SynapseConfig(root=tmp_path))


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_yaml(tmp_path / "synapse.yaml", {"synapse_path": "from-file/", "mode": "build"})
    monkeypatch.setenv("SYNAPSE_PATH", "from-env/")
    monkeypatch.setenv("SYNAPSE_MODE", "serve")
    cfg = load_config(tmp_path)
    assert cfg.synapse_path == "from-env/"
    assert cfg.exclude == ["re:node_modules", "re:from\\-env/"]
    assert cfg.mode == MODE_SERVE


def test_env_value_is_validated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNAPSE_MODE", "prod")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


# ---------------------------------------------------------------------------
# ensure_project_config
# ---------------------------------------------------------------------------


def test_ensure_project_config_writes_loadable_defaults(tmp_path: Path) -> None:
    path = ensure_project_config(tmp_path)
    assert path == tmp_path / "synapse.yaml"
    cfg = load_config(tmp_path)
    assert cfg.synapse_path == ".synapse/"
    assert cfg.include == [r"re:\.[jt]sx?$"]
    assert cfg.mode == MODE_BUILD


def test_ensure_project_config_keeps_existing(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("mode: serve\n", encoding="utf-8")
    ensure_project_config(tmp_path)
    assert (tmp_path / "synapse.yaml").read_text(encoding="utf-8") == "mode: serve\n"


def test_ensure_project_config_force(tmp_path: Path) -> None:
    (tmp_path / "synapse.yaml").write_text("mode: serve\n", encoding="utf-8")
    ensure_project_config(tmp_path, force=True)
    assert load_config(tmp_path).mode == MODE_BUILD
