"""
Envelope decoding for the JSON shapes Loggregator emits.

- V1 (dropsonde-style): {"origin", "eventType", "valueMetric": {"name", "value", "unit"}}
- V2 (RLP gateway): {"source_id", "tags": {"origin"}, "gauge": {"metrics": {...}}} and friends,
  delivered by the gateway in {"batch": [...]} payloads.

A V2 gauge carries several named values; it is fanned out into one V1-style
ValueMetric envelope per name. Gauges made of the container metric names are
container metrics in V1 terms and are not value metrics.
"""

import json
from typing import Any

from domain.schemas import VALUE_METRIC, Envelope, ValueMetric

CONTAINER_METRIC_NAMES = frozenset({"cpu", "memory", "disk", "memory_quota", "disk_quota"})

# V2 envelope body key -> V1 event type
_V2_EVENT_TYPES = {
    "log": "LogMessage",
    "counter": "CounterEvent",
    "timer": "HttpStartStop",
    "event": "Unknown",
}


def _mapping(value: object, what: str) -> dict[str, Any]:
    """Return `value` as a dict (None means empty), else raise ValueError."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def decode_v2_envelope(raw: dict[str, Any]) -> list[Envelope]:
    """Decode one V2 envelope; a gauge yields one envelope per metric."""
    tags = _mapping(raw.get("tags"), "tags")
    common = {
        "origin": str(tags.get("origin") or raw.get("source_id") or ""),
        "deployment": tags.get("deployment"),
        "job": tags.get("job"),
        "index": tags.get("index") or raw.get("instance_id") or None,
    }

    if "gauge" in raw:
        gauge = _mapping(raw["gauge"], "gauge")
        metrics = _mapping(gauge.get("metrics"), "gauge.metrics")
        if metrics and set(metrics) <= CONTAINER_METRIC_NAMES:
            return [Envelope(event_type="ContainerMetric", **common)]
        bodies = {name: _mapping(body, f"gauge.metrics[{name!r}]") for name, body in metrics.items()}
        return [
            Envelope(
                event_type=VALUE_METRIC,
                value_metric=ValueMetric(name=str(name), value=body.get("value"), unit=body.get("unit")),
                **common,
            )
            for name, body in bodies.items()
        ]

    for key, event_type in _V2_EVENT_TYPES.items():
        if key in raw:
            return [Envelope(event_type=event_type, **common)]
    return [Envelope(event_type="Unknown", **common)]


def decode_v1_envelope(raw: dict[str, Any]) -> Envelope:
    """Decode one V1 JSON envelope."""
    return Envelope.model_validate(raw)


def decode_envelopes(raw: object) -> list[Envelope]:
    """
    Decode a parsed JSON value into envelopes, whatever its shape.

    Accepts a gateway batch, a single V2 envelope, or a single V1 envelope.

    Raises:
        ValueError: If the value is not a recognised envelope shape
            (pydantic.ValidationError is a ValueError)
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a JSON object, got {type(raw).__name__}")

    if "batch" in raw:
        batch = raw.get("batch") or []
        if not isinstance(batch, list):
            raise ValueError("'batch' must be a list")
        envelopes: list[Envelope] = []
        for item in batch:
            if not isinstance(item, dict):
                raise ValueError(f"Batch item must be a JSON object, got {type(item).__name__}")
            envelopes.extend(decode_v2_envelope(item))
        return envelopes

    if "eventType" in raw or "event_type" in raw:
        return [decode_v1_envelope(raw)]

    if "source_id" in raw or "tags" in raw:
        return decode_v2_envelope(raw)

    raise ValueError(f"Unrecognised envelope shape with keys {sorted(raw)}")


def decode_json(text: str) -> list[Envelope]:
    """Parse JSON text and decode it (see decode_envelopes)."""
    return decode_envelopes(json.loads(text))
