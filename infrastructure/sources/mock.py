"""Mock stream source for testing."""

import logging
import threading
from collections.abc import Iterable, Iterator

from domain.schemas import VALUE_METRIC, Envelope, ValueMetric
from infrastructure.config.models import SourceConfig, SourceKind
from infrastructure.sources.base import ErrorHandler, StreamSource

logger = logging.getLogger(__name__)

MockItem = Envelope | tuple[str, str] | Exception


def value_metric_envelope(origin: str, name: str, value: float | None = None) -> Envelope:
    """Build a value-metric envelope for (origin, name)."""
    return Envelope(origin=origin, event_type=VALUE_METRIC, value_metric=ValueMetric(name=name, value=value))


class MockSource(StreamSource):
    """
    In-memory source without any network access.

    Fixtures are yielded in order: envelopes as-is, (origin, name) tuples as
    value-metric envelopes, and exceptions are reported through `on_error`
    (simulating delivery errors) instead of being yielded.
    """

    kind = SourceKind.MOCK

    def __init__(
        self,
        *,
        cfg: SourceConfig | None = None,
        fixtures: Iterable[MockItem] | None = None,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize mock source."""
        super().__init__(cfg=cfg or SourceConfig(kind=SourceKind.MOCK), on_error=on_error, stop_event=stop_event)
        self.fixtures = list(fixtures or [])
        logger.info("Initialized Mock source (%d fixtures, no network)", len(self.fixtures))

    def iter_envelopes(self) -> Iterator[Envelope]:
        for item in self.fixtures:
            if self.stopped:
                return
            if isinstance(item, Exception):
                self.report_error(item)
            elif isinstance(item, Envelope):
                yield item
            else:
                origin, name = item
                yield value_metric_envelope(origin, name)
