"""phpsynapse — extract php-tagged template literals into PHP handlers."""

from phpsynapse.config import SynapseConfig, load_config
from phpsynapse.hashing import block_identifier, filesystem_safe_hash
from phpsynapse.models import EmbeddedBlock, Manifest, TransformResult
from phpsynapse.pipeline import SynapsePipeline
from phpsynapse.syntax.parser import ParseError

__all__ = [
    "EmbeddedBlock",
    "Manifest",
    "ParseError",
    "SynapseConfig",
    "SynapsePipeline",
    "TransformResult",
    "block_identifier",
    "filesystem_safe_hash",
    "load_config",
]
