"""manifest.json persistence.

Two write disciplines over one ``Manifest`` value:

  overwrite    full builds — the whole manifest is written once at the end,
               replacing whatever was on disk.
  merge_into   dev server — a fragment is deep-merged into the file on disk
               after every transform that found a setup. A missing or
               unreadable file counts as ``{}``.

There is no locking; read-merge-write runs once per transform call in the
caller's own order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from phpsynapse.models import Manifest
from phpsynapse.output.writer import write_atomic


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _dumps(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def read_manifest_data(path: Path) -> dict[str, Any]:
    """Return the raw manifest object at *path*, or ``{}`` if unusable."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_manifest(path: Path) -> Manifest:
    return Manifest.from_dict(read_manifest_data(path))


class ManifestStore:
    """Writes manifests to a fixed ``manifest.json`` path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def overwrite(self, manifest: Manifest) -> None:
        """Replace the file with *manifest*.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        write_atomic(self.path, _dumps(manifest.to_dict()))

    def merge_into(self, fragment: Manifest) -> dict[str, Any]:
        """Deep-merge the setups of *fragment* into the file on disk.

        Hierarchy is not merged; it is only known once a full build ends.
        Returns the merged object, or ``{}`` without touching disk when the
        fragment carries no setups.
        """
        if not fragment.setups:
            return {}

        merged = deep_merge(read_manifest_data(self.path), {"setups": dict(fragment.setups)})
        write_atomic(self.path, _dumps(merged))
        return merged
