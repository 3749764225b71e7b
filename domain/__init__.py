"""
Domain layer: Business logic with minimal external dependencies.

Contains:
- schemas: Pydantic models for telemetry envelopes and metric events
- taxonomy: Metric name parsing, category entries, aggregation and the store
- report: Row-oriented report built from a taxonomy snapshot
"""

from domain.schemas import Envelope, MetricEvent, ValueMetric

__all__ = [
    "Envelope",
    "MetricEvent",
    "ValueMetric",
]
