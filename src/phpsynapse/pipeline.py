"""The transform-and-track pipeline driven by a build tool.

One ``SynapsePipeline`` lives for one build or dev-server session and is fed
files one at a time, in whatever order the build tool chooses:

    pipeline = SynapsePipeline(load_config())
    pipeline.build_start()
    for path in files:
        result = pipeline.transform(path.read_text(), path)
    pipeline.generate_bundle()

Per file: parse → record imports → skip files without the marker → extract
blocks → classify setup → write handlers → rewrite the templates. Handler
identifiers depend only on the file's project path and the block's position
in it, so results do not depend on the order files arrive in.
"""

from __future__ import annotations

import os
from pathlib import Path

from phpsynapse.config import SynapseConfig, validate_config
from phpsynapse.filters import create_filter
from phpsynapse.models import EmbeddedBlock, Manifest, TransformResult
from phpsynapse.output.artifacts import write_handler
from phpsynapse.output.manifest import ManifestStore
from phpsynapse.syntax.parser import Edit, parse_source
from phpsynapse.transform.blocks import extract_block, has_marker, iter_marker_templates
from phpsynapse.transform.exports import is_inside_setup_export
from phpsynapse.transform.hierarchy import build_hierarchy, project_relative
from phpsynapse.transform.imports import collect_imports
from phpsynapse.transform.tracking import TrackingState


class SynapsePipeline:
    """Owns the manifest and tracking state for one build session."""

    def __init__(self, config: SynapseConfig) -> None:
        validate_config(config)
        self.config = config
        self.root = Path(os.path.abspath(config.root))
        self.accepts = create_filter(config.include, config.exclude, self.root)
        self.store = ManifestStore(config.manifest_path)
        self.state = TrackingState()
        self.manifest = Manifest()

    @property
    def incremental(self) -> bool:
        return self.config.incremental

    # ------------------------------------------------------------------
    # Build hooks
    # ------------------------------------------------------------------

    def build_start(self) -> None:
        """Forget everything learned in a previous build."""
        self.manifest = Manifest()
        self.state.reset()

    def transform(self, code: str, file_id: str | Path) -> TransformResult | None:
        """Extract the php blocks of one file and return its rewritten source.

        Returns ``None`` when the filter rejects *file_id*.

        Raises:
            ParseError: If the file is not valid JavaScript / TypeScript.
            OSError: If a handler or the manifest cannot be written.
        """
        if not self.accepts(file_id):
            return None

        path = self._absolute(file_id)
        project_path = project_relative(path, self.root)

        parsed = parse_source(code, path)
        self.state.record_imports(path, collect_imports(parsed, path))
        self.manifest.setups.pop(project_path, None)

        if not has_marker(code):
            self.state.mark_blocks(path, False)
            return TransformResult(code=code)

        blocks: list[EmbeddedBlock] = []
        edits: list[Edit] = []
        setup: str | None = None
        for index, node in enumerate(iter_marker_templates(parsed)):
            block, block_edits = extract_block(node, parsed, project_path, index)
            if is_inside_setup_export(node, parsed):
                block.is_setup = True
                setup = block.identifier
            write_handler(self.root, self.config.synapse_path, block.identifier, block.code)
            blocks.append(block)
            edits.extend(block_edits)

        self.state.mark_blocks(path, bool(blocks))
        if setup is not None:
            self.manifest.setups[project_path] = setup
            if self.incremental:
                self.store.merge_into(Manifest(setups={project_path: setup}))

        return TransformResult(code=parsed.apply_edits(edits), blocks=blocks)

    def generate_bundle(self) -> Manifest:
        """Compute the hierarchy and write the complete manifest."""
        self.manifest.hierarchy = build_hierarchy(self.state, self.root)
        self.store.overwrite(self.manifest)
        return self.manifest

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _absolute(self, file_id: str | Path) -> Path:
        return Path(os.path.normpath(os.path.join(self.root, file_id)))
