import logging

from infrastructure.config.models import SourceKind

from .base import StreamSource

logger = logging.getLogger(__name__)

# SourceKind -> StreamSource class
_SOURCE_REGISTRY: dict[SourceKind, type[StreamSource]] = {}


def register_source(kind: SourceKind, source_cls: type[StreamSource], *, override: bool = False) -> None:
    """Register a stream source class for a source kind.

    This is the plugin hook: source modules call this at import time.
    """
    if (kind in _SOURCE_REGISTRY) and not override:
        existing = _SOURCE_REGISTRY[kind]
        raise RuntimeError(
            f"Source already registered for kind={kind.value}: {existing.__name__}. Use override=True to replace."
        )
    _SOURCE_REGISTRY[kind] = source_cls
    logger.debug("Registered source for kind=%s: %s", kind.value, source_cls.__name__)


def get_source_class(kind: SourceKind) -> type[StreamSource] | None:
    """Return the registered source class (or None if not registered yet)."""
    return _SOURCE_REGISTRY.get(kind)
