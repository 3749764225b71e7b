"""Configuration loading from YAML files and environment variables."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import ServiceConfig

from .registry import ENV_OVERRIDES

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    # An empty file is a valid "all defaults" config
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """
    Overlay environment variables onto a raw config dict.

    Only variables that are set and non-empty override the file values.
    Returns a new dict; `data` is not modified.
    """
    merged: dict[str, Any] = {k: dict(v) if isinstance(v, dict) else v for k, v in data.items()}
    for env_name, (section, key) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or not raw.strip():
            continue
        if not isinstance(merged.get(section), dict):
            merged[section] = {}
        merged[section][key] = raw.strip()
        logger.debug("Config override from env: %s -> %s.%s", env_name, section, key)
    return merged


def load_service_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> ServiceConfig:
    """
    Load service.yaml (optional) and environment overrides into a ServiceConfig.

    Args:
        config_path: YAML file to read; None means environment only
        environ: Environment mapping (defaults to os.environ)
        overrides: Per-section values applied last (e.g. from CLI flags)

    Returns:
        Validated ServiceConfig

    Raises:
        FileNotFoundError: If config_path is given but missing
        ValueError / pydantic.ValidationError: If the merged config is invalid
    """
    data = _load_yaml(config_path) if config_path is not None else {}
    data = {k: v for k, v in data.items() if v is not None}
    for section in ("source", "server", "taxonomy"):
        if section in data and not isinstance(data[section], dict):
            raise ValueError(f"'{section}' must be a mapping in {config_path}")

    merged = apply_env_overrides(data, os.environ if environ is None else environ)
    for section, values in (overrides or {}).items():
        if not isinstance(merged.get(section), dict):
            merged[section] = {}
        merged[section].update(values)
    if not isinstance(merged.get("source"), dict):
        merged["source"] = {}

    return ServiceConfig.model_validate(merged)
