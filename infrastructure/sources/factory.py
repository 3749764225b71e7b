"""Factory for creating stream sources."""

import importlib
import logging
import threading

from infrastructure.config.models import SourceConfig, SourceKind

from .base import ErrorHandler, StreamSource
from .mock import MockItem, MockSource
from .registry import get_source_class

logger = logging.getLogger(__name__)


def _ensure_source_imported(kind: SourceKind) -> None:
    """
    Lazy-import the source module to trigger `register_source(...)`.

    Convention:
      - SourceKind value MUST match module filename under infrastructure/sources/
        e.g., SourceKind.FIREHOSE.value == "firehose" -> infrastructure/sources/firehose.py
    """
    module_name = f"{__package__}.{kind.value}"
    try:
        importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if getattr(e, "name", None) == module_name:
            raise RuntimeError(
                f"No source module found for kind='{kind.value}'. Expected file: infrastructure/sources/{kind.value}.py"
            ) from e
        raise


def make_source(
    cfg: SourceConfig,
    *,
    on_error: ErrorHandler | None = None,
    stop_event: threading.Event | None = None,
    mock_fixtures: list[MockItem] | None = None,
) -> StreamSource:
    """
    Factory function to create the configured stream source.
    Args:
        cfg: Source configuration
        on_error: Handler for delivery errors (default: log them)
        stop_event: Event that asks the source to finish
        mock_fixtures: Fixtures for the MockSource (kind == mock)
    Returns:
        An instance of StreamSource for the configured kind.
    Raises:
        RuntimeError: If the source kind is unsupported.
    """
    if cfg.kind is SourceKind.MOCK:
        return MockSource(cfg=cfg, fixtures=mock_fixtures, on_error=on_error, stop_event=stop_event)

    # 1) Try registry first (maybe already imported elsewhere)
    source_cls = get_source_class(cfg.kind)

    # 2) If not registered yet, import the source module by convention, then retry
    if source_cls is None:
        _ensure_source_imported(cfg.kind)
        source_cls = get_source_class(cfg.kind)

    if source_cls is None:
        raise RuntimeError(
            f"Source '{cfg.kind.value}' did not register a class. "
            f"Make sure {cfg.kind.value}.py calls register_source(...)."
        )

    # Standard constructor path
    return source_cls.from_cfg(cfg, on_error=on_error, stop_event=stop_event)  # type: ignore[attr-defined]
