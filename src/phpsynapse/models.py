"""Domain models shared by the transform pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PLACEHOLDER_PREFIX = "$variable"

Hierarchy = dict[str, "Hierarchy"]


@dataclass
class EmbeddedBlock:
    """One php-tagged template found in a host file.

    ``segments`` are the raw static texts of the template in order; a
    ``$variableN`` placeholder stands between ``segments[N]`` and
    ``segments[N + 1]`` in the reconstructed PHP.
    """

    identifier: str
    index: int
    segments: list[str]
    start_byte: int = 0
    end_byte: int = 0
    is_setup: bool = False

    @property
    def code(self) -> str:
        parts: list[str] = []
        last = len(self.segments) - 1
        for i, segment in enumerate(self.segments):
            parts.append(segment)
            if i < last:
                parts.append(f"{PLACEHOLDER_PREFIX}{i}")
        return "".join(parts)

    @property
    def parameter_count(self) -> int:
        return max(0, len(self.segments) - 1)


@dataclass
class TransformResult:
    code: str
    map: None = None
    blocks: list[EmbeddedBlock] = field(default_factory=list)


@dataclass
class Manifest:
    setups: dict[str, str] = field(default_factory=dict)
    hierarchy: Hierarchy = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"setups": dict(self.setups), "hierarchy": self.hierarchy}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Manifest:
        setups = data.get("setups") or {}
        hierarchy = data.get("hierarchy") or {}
        return cls(
            setups={str(k): str(v) for k, v in setups.items()} if isinstance(setups, dict) else {},
            hierarchy=hierarchy if isinstance(hierarchy, dict) else {},
        )
