"""
Telemetry stream sources.

Implements the adapter pattern for different envelope feeds:
- Firehose (Loggregator V2 RLP gateway, server-sent events)
- Replay (newline-delimited JSON capture)
- Mock (for testing)

All sources implement the StreamSource interface.
"""

from infrastructure.sources.base import StreamSource, StreamSourceError
from infrastructure.sources.factory import make_source
from infrastructure.sources.firehose import FirehoseSource
from infrastructure.sources.mock import MockSource, value_metric_envelope
from infrastructure.sources.replay import ReplaySource

__all__ = [
    # Abstract base
    "StreamSource",
    "StreamSourceError",
    # Concrete implementations
    "FirehoseSource",
    "ReplaySource",
    "MockSource",
    "value_metric_envelope",
    # Factory (most commonly used)
    "make_source",
]
