"""Apply metric-name events to a single origin's taxonomy."""

from enum import Enum

from domain.taxonomy.entries import CategoryOnly, CategoryWithSubcategories
from domain.taxonomy.parser import parse_metric_name


class IngestOutcome(str, Enum):
    """What a single event did to the taxonomy."""

    CREATED = "created"  # new category entry appended
    APPENDED = "appended"  # new subcategory appended to an existing entry
    UNCHANGED = "unchanged"  # already known
    DROPPED = "dropped"  # subcategory seen for a category-only entry
    PROMOTED = "promoted"  # category-only entry upgraded (opt-in)


class TaxonomyInvariantError(RuntimeError):
    """Raised when an origin holds more than one entry for the same category."""


def find_entry(
    entries: list[CategoryOnly | CategoryWithSubcategories],
    category: str,
) -> int:
    """Return the index of the entry for `category`, or -1 if there is none."""
    matches = [i for i, entry in enumerate(entries) if entry.category == category]
    if len(matches) > 1:
        raise TaxonomyInvariantError(f"Duplicate entries for category {category!r} at positions {matches}")
    return matches[0] if matches else -1


def ingest_metric(
    entries: list[CategoryOnly | CategoryWithSubcategories],
    metric_name: str,
    *,
    promote_category_only: bool = False,
) -> IngestOutcome:
    """
    Record one metric name in an origin's entry list (mutated in place).

    Rules:
    - Unknown category: append a new entry, with the remainder as its first
      subcategory when there is one, otherwise as a bare category.
    - Known category with subcategories: append the remainder if it is new.
    - Known bare category: the remainder is dropped, unless
      `promote_category_only` is set, in which case the entry is replaced in
      place by one carrying the remainder.

    Args:
        entries: The origin's entries, in first-seen order
        metric_name: Dotted metric name from the event
        promote_category_only: Upgrade bare categories when a subcategory shows up

    Returns:
        IngestOutcome describing the mutation (if any)
    """
    category, remainder = parse_metric_name(metric_name)

    index = find_entry(entries, category)
    if index < 0:
        if remainder:
            entries.append(CategoryWithSubcategories(category=category, subcategories=[remainder]))
        else:
            entries.append(CategoryOnly(category=category))
        return IngestOutcome.CREATED

    match entries[index]:
        case CategoryWithSubcategories(subcategories=subcategories):
            if not remainder or remainder in subcategories:
                return IngestOutcome.UNCHANGED
            subcategories.append(remainder)
            return IngestOutcome.APPENDED
        case CategoryOnly():
            if not remainder:
                return IngestOutcome.UNCHANGED
            if not promote_category_only:
                return IngestOutcome.DROPPED
            entries[index] = CategoryWithSubcategories(category=category, subcategories=[remainder])
            return IngestOutcome.PROMOTED

    raise TypeError(f"Unsupported category entry: {type(entries[index]).__name__}")
