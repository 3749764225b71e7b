from domain.taxonomy import parse_metric_name


def test_name_without_dot_is_all_category() -> None:
    assert parse_metric_name("foo") == ("foo", "")


def test_splits_on_first_dot_only() -> None:
    assert parse_metric_name("foo.bar") == ("foo", "bar")
    assert parse_metric_name("foo.bar.baz") == ("foo", "bar.baz")


def test_empty_name() -> None:
    assert parse_metric_name("") == ("", "")


def test_leading_and_trailing_dots() -> None:
    assert parse_metric_name(".bar") == ("", "bar")
    assert parse_metric_name("foo.") == ("foo", "")
