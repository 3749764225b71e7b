"""Base adapter interface for telemetry stream sources."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from domain.schemas import Envelope, MetricEvent
from infrastructure.config.models import SourceConfig, SourceKind

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]


class StreamSourceError(RuntimeError):
    """A delivery problem reported by a source (connection, HTTP status, payload)."""


def log_stream_error(exc: Exception) -> None:
    """Default error handler: log and carry on."""
    logger.error("Stream error: %s", exc)


class StreamSource(ABC):
    """
    Abstract base class for stream sources.
    Common interface for envelope feeds (firehose, replay file, in-memory mock).

    All concrete sources must implement:
    - iter_envelopes(): Yield decoded envelopes until the source closes

    Delivery errors never end the stream: they go to `on_error` (logged by
    default) and the source keeps going. Setting `stop_event` asks the source
    to finish at the next opportunity.
    """

    kind: SourceKind
    cfg: SourceConfig

    def __init__(
        self,
        *,
        cfg: SourceConfig,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        self.cfg = cfg
        self.on_error = on_error or log_stream_error
        self.stop_event = stop_event or threading.Event()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    def report_error(self, exc: Exception) -> None:
        self.on_error(exc)

    def iter_events(self) -> Iterator[MetricEvent]:
        """Yield (origin, metric name) events from value-metric envelopes only."""
        for envelope in self.iter_envelopes():
            event = MetricEvent.from_envelope(envelope)
            if event is not None:
                yield event

    def close(self) -> None:
        """Release any underlying resources."""
        return None

    @abstractmethod
    def iter_envelopes(self) -> Iterator[Envelope]:
        """Yield envelopes in arrival order until the source closes or is stopped."""

        raise NotImplementedError
