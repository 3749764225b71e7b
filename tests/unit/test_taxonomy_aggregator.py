import pytest

from domain.taxonomy import (
    CategoryOnly,
    CategoryWithSubcategories,
    IngestOutcome,
    TaxonomyInvariantError,
    ingest_metric,
)


def test_new_category_without_remainder_is_category_only() -> None:
    entries: list = []
    assert ingest_metric(entries, "uptime") is IngestOutcome.CREATED
    assert entries == [CategoryOnly(category="uptime")]


def test_subcategories_dedup_in_first_seen_order() -> None:
    entries: list = []
    assert ingest_metric(entries, "foo.bar") is IngestOutcome.CREATED
    assert ingest_metric(entries, "foo.baz") is IngestOutcome.APPENDED
    assert ingest_metric(entries, "foo.bar") is IngestOutcome.UNCHANGED

    assert entries == [CategoryWithSubcategories(category="foo", subcategories=["bar", "baz"])]


def test_categories_keep_first_seen_order() -> None:
    entries: list = []
    for name in ["b.x", "a", "c.y", "a", "b.z"]:
        ingest_metric(entries, name)

    assert [e.category for e in entries] == ["b", "a", "c"]
    assert entries[0].subcategories == ["x", "z"]


def test_ingest_is_idempotent() -> None:
    once: list = []
    twice: list = []
    for name in ["foo", "foo.bar", "x.y.z", "x.y"]:
        ingest_metric(once, name)
        ingest_metric(twice, name)
        ingest_metric(twice, name)

    assert once == twice


def test_subcategory_after_category_only_is_dropped() -> None:
    entries: list = []
    ingest_metric(entries, "foo")
    assert ingest_metric(entries, "foo.bar") is IngestOutcome.DROPPED
    assert entries == [CategoryOnly(category="foo")]


def test_bare_name_for_category_with_subcategories_changes_nothing() -> None:
    entries: list = []
    ingest_metric(entries, "foo.bar")
    assert ingest_metric(entries, "foo") is IngestOutcome.UNCHANGED
    assert entries == [CategoryWithSubcategories(category="foo", subcategories=["bar"])]


def test_promotion_keeps_position_when_enabled() -> None:
    entries: list = []
    ingest_metric(entries, "first")
    ingest_metric(entries, "foo")
    ingest_metric(entries, "last")

    outcome = ingest_metric(entries, "foo.bar", promote_category_only=True)

    assert outcome is IngestOutcome.PROMOTED
    assert [e.category for e in entries] == ["first", "foo", "last"]
    assert entries[1] == CategoryWithSubcategories(category="foo", subcategories=["bar"])


def test_duplicate_category_is_an_invariant_error() -> None:
    entries: list = [CategoryOnly(category="foo"), CategoryOnly(category="foo")]
    with pytest.raises(TaxonomyInvariantError):
        ingest_metric(entries, "foo.bar")
