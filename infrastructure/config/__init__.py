"""
Configuration management: models, loading, and validation.

Handles:
- ServiceConfig: Main service configuration
- Source / server / taxonomy sections
- Environment variable overrides (DOPPLER_ADDR, CF_ACCESS_TOKEN, PORT, ...)

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import apply_env_overrides, load_service_config
from infrastructure.config.models import (
    # Main config
    ServiceConfig,
    # Sections
    ServerConfig,
    SourceConfig,
    # Enums
    SourceKind,
    TaxonomyConfig,
)

__all__ = [
    # Main config (most commonly used)
    "ServiceConfig",
    "load_service_config",
    # Enums
    "SourceKind",
    # Sections
    "SourceConfig",
    "ServerConfig",
    "TaxonomyConfig",
    # Loaders
    "apply_env_overrides",
]
