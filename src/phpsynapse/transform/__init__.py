"""Per-file analysis: block extraction, setup classification, import graph."""

from phpsynapse.transform.blocks import MARKER_TAG, extract_block, has_marker, iter_marker_templates
from phpsynapse.transform.exports import is_inside_setup_export
from phpsynapse.transform.hierarchy import build_hierarchy
from phpsynapse.transform.imports import PROBE_EXTENSIONS, collect_imports
from phpsynapse.transform.tracking import TrackingState

__all__ = [
    "MARKER_TAG",
    "PROBE_EXTENSIONS",
    "TrackingState",
    "build_hierarchy",
    "collect_imports",
    "extract_block",
    "has_marker",
    "is_inside_setup_export",
    "iter_marker_templates",
]
