"""Metric name parsing."""


def parse_metric_name(name: str) -> tuple[str, str]:
    """
    Split a dotted metric name into (category, remainder) at the first dot.

    Examples:
        >>> parse_metric_name("foo")
        ('foo', '')
        >>> parse_metric_name("foo.bar.baz")
        ('foo', 'bar.baz')

    Args:
        name: Dotted hierarchical metric name

    Returns:
        Tuple of (category, remainder); remainder is "" when there is no dot
    """
    category, _, remainder = name.partition(".")
    return category, remainder
