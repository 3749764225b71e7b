"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Stream sources (firehose, replay, mock)
- Configuration loading (YAML, environment)
- HTML rendering (Jinja2)
- HTTP report server (FastAPI)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    ServiceConfig,
    SourceConfig,
    SourceKind,
    load_service_config,
)
from infrastructure.sources import StreamSource, make_source

__all__ = [
    # Stream sources (most commonly used)
    "make_source",
    "StreamSource",
    # Configuration (most commonly used)
    "load_service_config",
    "ServiceConfig",
    "SourceConfig",
    "SourceKind",
]
