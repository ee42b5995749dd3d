"""phpsynapse configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (SYNAPSE_PATH, SYNAPSE_MODE)
  3. Per-project synapse.yaml  (in the project root)
  4. Hardcoded defaults

synapse_path must stay inside the project root — handlers and the manifest are
written below it. All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_PROJECT_CONFIG_NAME: str = "synapse.yaml"
_DEFAULT_SYNAPSE_PATH: str = ".synapse/"

MODE_BUILD: str = "build"
MODE_SERVE: str = "serve"
_MODES: frozenset[str] = frozenset([MODE_BUILD, MODE_SERVE])

# Known top-level keys — unknown keys produce a warning
_KNOWN_KEYS: frozenset[str] = frozenset(["synapse_path", "include", "exclude", "mode"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


def default_include() -> list[str]:
    return [r"re:\.[jt]sx?$"]


def default_exclude(synapse_path: str = _DEFAULT_SYNAPSE_PATH) -> list[str]:
    return ["re:node_modules", f"re:{re.escape(synapse_path)}"]


@dataclass
class SynapseConfig:
    """Root configuration object, built by load_config() from merged layers.

    Attributes:
        root: Project root. Manifest keys and identifier seeds are relative to it.
        synapse_path: Output directory (relative to *root*) for handlers and
            manifest.json.
        include: Filter patterns a file id must match (``re:`` prefix = regex,
            otherwise a glob on the root-relative path).
        exclude: Filter patterns that reject a file id; exclude beats include.
            ``None`` means "derive from synapse_path".
        mode: ``build`` (batch manifest write at the end) or ``serve``
            (incremental merge-write after every setup-bearing file).
    """

    root: Path = field(default_factory=Path.cwd)
    synapse_path: str = _DEFAULT_SYNAPSE_PATH
    include: list[str] = field(default_factory=default_include)
    exclude: list[str] | None = None
    mode: str = MODE_BUILD

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.exclude is None:
            self.exclude = default_exclude(self.synapse_path)

    @property
    def output_dir(self) -> Path:
        return self.root / self.synapse_path

    @property
    def handlers_dir(self) -> Path:
        return self.output_dir / "handlers"

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / "manifest.json"

    @property
    def incremental(self) -> bool:
        return self.mode == MODE_SERVE


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _validate_synapse_path(synapse_path: str) -> None:
    """Raise ConfigError if *synapse_path* is absolute or escapes the root."""
    posix = PurePosixPath(synapse_path.replace("\\", "/"))
    if not synapse_path.strip() or posix.is_absolute() or Path(synapse_path).is_absolute():
        raise ConfigError(
            f"synapse_path must be a relative directory inside the project: '{synapse_path}'\n"
            "  Example: synapse_path: .synapse/"
        )
    if ".." in posix.parts:
        raise ConfigError(
            f"synapse_path must not leave the project root: '{synapse_path}'\n"
            "  Path traversal ('..') is not permitted."
        )


def _validate_mode(mode: str) -> None:
    if mode not in _MODES:
        raise ConfigError(
            f"Unknown mode '{mode}'.\n"
            f"  Expected one of: {', '.join(sorted(_MODES))}"
        )


def _as_pattern_list(value: Any, key: str, source: Path) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(
            f"'{key}' in '{source}' must be a list of patterns.\n"
            f"  Example: {key}: ['re:\\.tsx?$', 'src/**/*.js']"
        )
    return list(value)


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_KEYS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


def _cfg_from_dict(data: dict[str, Any], root: Path, source: Path) -> SynapseConfig:
    """Build a *SynapseConfig* from a raw YAML dict."""
    synapse_path = str(data.get("synapse_path", _DEFAULT_SYNAPSE_PATH))

    include = (
        _as_pattern_list(data["include"], "include", source)
        if "include" in data
        else default_include()
    )
    exclude = (
        _as_pattern_list(data["exclude"], "exclude", source)
        if "exclude" in data
        else None
    )

    return SynapseConfig(
        root=root,
        synapse_path=synapse_path,
        include=include,
        exclude=exclude,
        mode=str(data.get("mode", MODE_BUILD)),
    )


def _apply_env_overrides(cfg: SynapseConfig, explicit_exclude: bool) -> SynapseConfig:
    """Apply SYNAPSE_* environment variable overrides."""
    if synapse_path := os.environ.get("SYNAPSE_PATH"):
        cfg.synapse_path = synapse_path
        if not explicit_exclude:
            cfg.exclude = default_exclude(synapse_path)
    if mode := os.environ.get("SYNAPSE_MODE"):
        cfg.mode = mode
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(project_dir: Path | None = None) -> SynapseConfig:
    """Load and return a merged *SynapseConfig*.

    Applies layers in order: defaults → synapse.yaml → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Project root holding *synapse.yaml*. Defaults to CWD.

    Returns:
        Validated *SynapseConfig* rooted at *project_dir*.

    Raises:
        ConfigError: If the file is malformed, the mode is unknown, or
            ``synapse_path`` is absolute or escapes the project root.
    """
    root = (project_dir if project_dir is not None else Path.cwd()).resolve()
    cfg_path = root / _PROJECT_CONFIG_NAME

    raw: dict[str, Any] = {}
    if cfg_path.exists():
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Config file '{cfg_path}' must contain a mapping at the top level."
            )
        _warn_unknown_keys(raw, cfg_path)

    cfg = _cfg_from_dict(raw, root, cfg_path)
    cfg = _apply_env_overrides(cfg, explicit_exclude="exclude" in raw)

    validate_config(cfg)
    return cfg


def validate_config(cfg: SynapseConfig) -> None:
    """Raise ConfigError for values that cannot drive a pipeline."""
    _validate_synapse_path(cfg.synapse_path)
    _validate_mode(cfg.mode)


def ensure_project_config(project_dir: Path, force: bool = False) -> Path:
    """Create ``synapse.yaml`` with defaults in *project_dir*.

    An existing file is left untouched unless *force* is set.

    Returns:
        Path to the project config file.
    """
    target = project_dir / _PROJECT_CONFIG_NAME
    if target.exists() and not force:
        return target

    content = (
        "# phpsynapse project configuration.\n"
        "# Patterns prefixed with 're:' are regular expressions matched against the\n"
        "# absolute file path; anything else is a glob on the project-relative path.\n"
        "\n"
        f"synapse_path: {_DEFAULT_SYNAPSE_PATH}\n"
        "\n"
        "include:\n"
        "  - 're:\\.[jt]sx?$'\n"
        "\n"
        "# exclude defaults to node_modules and synapse_path when omitted:\n"
        "# exclude:\n"
        "#   - 're:node_modules'\n"
        "\n"
        "mode: build  # build | serve\n"
    )
    target.write_text(content, encoding="utf-8")
    return target
