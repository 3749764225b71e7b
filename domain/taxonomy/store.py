"""Thread-safe per-origin taxonomy store."""

import threading

from pydantic import BaseModel

from domain.taxonomy.aggregator import IngestOutcome, ingest_metric
from domain.taxonomy.entries import CategoryOnly, CategoryWithSubcategories, TaxonomySnapshot


class StoreStats(BaseModel):
    """Point-in-time counters for the store."""

    origins: int = 0
    categories: int = 0
    events_ingested: int = 0
    events_dropped: int = 0


class TaxonomyStore:
    """
    Shared taxonomy aggregate: origin -> entries in first-seen order.

    The mapping is only reachable through `ingest` (writer) and `snapshot`
    (readers). Both take the same lock; snapshots are deep copies, so a
    reader never observes a half-applied event and cannot mutate the store.
    Entries are never removed.
    """

    def __init__(self, *, promote_category_only: bool = False) -> None:
        self.promote_category_only = promote_category_only
        self._lock = threading.Lock()
        self._origins: dict[str, list[CategoryOnly | CategoryWithSubcategories]] = {}
        self._events_ingested = 0
        self._events_dropped = 0

    def ingest(self, origin: str, metric_name: str) -> IngestOutcome:
        """Apply one (origin, metric name) event."""
        with self._lock:
            entries = self._origins.setdefault(origin, [])
            outcome = ingest_metric(
                entries,
                metric_name,
                promote_category_only=self.promote_category_only,
            )
            self._events_ingested += 1
            if outcome is IngestOutcome.DROPPED:
                self._events_dropped += 1
            return outcome

    def snapshot(self) -> TaxonomySnapshot:
        """Return a consistent, detached copy of the whole taxonomy."""
        with self._lock:
            return {
                origin: tuple(entry.model_copy(deep=True) for entry in entries)
                for origin, entries in self._origins.items()
            }

    def stats(self) -> StoreStats:
        with self._lock:
            return StoreStats(
                origins=len(self._origins),
                categories=sum(len(entries) for entries in self._origins.values()),
                events_ingested=self._events_ingested,
                events_dropped=self._events_dropped,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._origins)
