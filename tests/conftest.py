"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from phpsynapse.config import MODE_BUILD, MODE_SERVE, SynapseConfig
from phpsynapse.pipeline import SynapsePipeline


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def pipeline(project: Path) -> SynapsePipeline:
    """Batch-mode pipeline rooted at *project*, build already started."""
    p = SynapsePipeline(SynapseConfig(root=project, mode=MODE_BUILD))
    p.build_start()
    return p


@pytest.fixture
def dev_pipeline(project: Path) -> SynapsePipeline:
    """Incremental (serve) pipeline rooted at *project*."""
    p = SynapsePipeline(SynapseConfig(root=project, mode=MODE_SERVE))
    p.build_start()
    return p
