"""Stream ingestion workflow: source events -> taxonomy store."""

import logging
import threading
from collections import Counter

from pydantic import BaseModel, Field

from domain.taxonomy import IngestOutcome, TaxonomyStore, parse_metric_name
from infrastructure.observability.logging import set_log_context
from infrastructure.sources.base import StreamSource

logger = logging.getLogger(__name__)


class IngestionSummary(BaseModel):
    """What one ingestion run consumed."""

    events: int = 0
    origins: int = 0
    outcomes: dict[str, int] = Field(default_factory=dict)


def run_ingestion(
    source: StreamSource,
    store: TaxonomyStore,
    *,
    log_every: int = 10_000,
) -> IngestionSummary:
    """
    Consume value-metric events from `source` into `store`, in arrival order.

    Runs until the source closes (or is stopped). Delivery errors are handled
    by the source itself and never reach this loop.

    Args:
        source: Stream source to drain
        store: Taxonomy store (the single writer is this loop)
        log_every: Emit a progress line every N events (0 disables)

    Returns:
        IngestionSummary with event and outcome counts
    """
    set_log_context(subscription_id=source.cfg.subscription_id, source=source.kind.value)
    logger.info("Ingestion started (source=%s)", source.kind.value)

    outcomes: Counter[str] = Counter()
    seen_origins: set[str] = set()
    events = 0

    for event in source.iter_events():
        events += 1
        outcome = store.ingest(event.origin, event.name)
        outcomes[outcome.value] += 1

        if event.origin not in seen_origins:
            seen_origins.add(event.origin)
            logger.info("New origin: %s", event.origin)

        if outcome is IngestOutcome.CREATED:
            logger.info("New category for %s: %s", event.origin, parse_metric_name(event.name)[0])
        elif outcome is IngestOutcome.DROPPED:
            logger.debug(
                "Dropped %r for %s: category was first seen without subcategories",
                event.name,
                event.origin,
            )
        elif outcome is IngestOutcome.PROMOTED:
            logger.info("Promoted category for %s: %s", event.origin, parse_metric_name(event.name)[0])

        if log_every and events % log_every == 0:
            stats = store.stats()
            logger.info(
                "Ingested %d events (origins=%d, categories=%d, dropped=%d)",
                events,
                stats.origins,
                stats.categories,
                stats.events_dropped,
            )

    logger.info("Ingestion finished: %d events from %d origins", events, len(seen_origins))
    return IngestionSummary(events=events, origins=len(seen_origins), outcomes=dict(outcomes))


def start_ingestion_thread(
    source: StreamSource,
    store: TaxonomyStore,
    *,
    log_every: int = 10_000,
) -> threading.Thread:
    """Run `run_ingestion` on a daemon thread and return the started thread."""
    thread = threading.Thread(
        target=run_ingestion,
        args=(source, store),
        kwargs={"log_every": log_every},
        name="ingestion",
        daemon=True,
    )
    thread.start()
    return thread
