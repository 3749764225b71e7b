"""Build a TaxonomyReport from a store snapshot."""

from domain.report.models import ReportRow, SubcategoryCell, TaxonomyReport
from domain.taxonomy.entries import (
    CategoryOnly,
    CategoryWithSubcategories,
    TaxonomySnapshot,
    leaf_count,
)
from domain.taxonomy.parser import parse_metric_name


def _subcategory_cells(entry: CategoryOnly | CategoryWithSubcategories) -> list[SubcategoryCell]:
    match entry:
        case CategoryWithSubcategories(subcategories=subcategories):
            # Single re-split: "a.b.c" shows as "a" over "b.c", not three levels.
            return [SubcategoryCell(base=base, remainder=rest) for base, rest in map(parse_metric_name, subcategories)]
        case CategoryOnly():
            return []
    raise TypeError(f"Unsupported category entry: {type(entry).__name__}")


def total_metrics(snapshot: TaxonomySnapshot) -> int:
    """Count leaf metrics: 1 per bare category, one per subcategory otherwise."""
    return sum(leaf_count(entry) for entries in snapshot.values() for entry in entries)


def build_report(snapshot: TaxonomySnapshot) -> TaxonomyReport:
    """
    Flatten a snapshot into one row per (origin, category).

    Origins are ordered by name; categories keep their first-seen order.
    The origin cell is carried by the first row of each origin and spans
    all of that origin's rows.

    Args:
        snapshot: Detached copy of the store (see TaxonomyStore.snapshot)

    Returns:
        TaxonomyReport with rows and the total leaf-metric count
    """
    rows: list[ReportRow] = []
    for origin in sorted(snapshot):
        entries = snapshot[origin]
        for position, entry in enumerate(entries):
            first = position == 0
            rows.append(
                ReportRow(
                    origin=origin if first else None,
                    origin_rowspan=len(entries) if first else 0,
                    category=entry.category,
                    has_subcategories=isinstance(entry, CategoryWithSubcategories),
                    subcategories=_subcategory_cells(entry),
                )
            )

    return TaxonomyReport(rows=rows, total_metrics=total_metrics(snapshot))
