"""
Metric taxonomy: parsing, entry model, aggregation and the shared store.

Everything here is pure (no I/O). The store is the only stateful piece and
guards its mapping with a lock.
"""

from domain.taxonomy.aggregator import IngestOutcome, TaxonomyInvariantError, ingest_metric
from domain.taxonomy.entries import (
    CategoryEntry,
    CategoryOnly,
    CategoryWithSubcategories,
    TaxonomySnapshot,
    leaf_count,
)
from domain.taxonomy.parser import parse_metric_name
from domain.taxonomy.store import StoreStats, TaxonomyStore

__all__ = [
    "parse_metric_name",
    # Entries
    "CategoryEntry",
    "CategoryOnly",
    "CategoryWithSubcategories",
    "TaxonomySnapshot",
    "leaf_count",
    # Aggregation
    "IngestOutcome",
    "TaxonomyInvariantError",
    "ingest_metric",
    # Store
    "TaxonomyStore",
    "StoreStats",
]
