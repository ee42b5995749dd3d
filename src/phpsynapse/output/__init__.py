"""Generated output: PHP handlers and the manifest."""

from phpsynapse.output.artifacts import handler_path, list_handlers, php_skeleton, write_handler
from phpsynapse.output.manifest import ManifestStore, deep_merge, load_manifest

__all__ = [
    "ManifestStore",
    "deep_merge",
    "handler_path",
    "list_handlers",
    "load_manifest",
    "php_skeleton",
    "write_handler",
]
