"""Pydantic models for telemetry envelopes delivered by a stream source."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

VALUE_METRIC = "ValueMetric"

EventType = Literal[
    "HttpStartStop",
    "LogMessage",
    "ValueMetric",
    "CounterEvent",
    "Error",
    "ContainerMetric",
    "Unknown",
]


class ValueMetric(BaseModel):
    """Named gauge-style measurement emitted by a component."""

    name: str = Field(..., description="Dotted hierarchical metric name.")
    value: float | None = Field(default=None, description="Measured value (not tracked by the taxonomy).")
    unit: str | None = None


class Envelope(BaseModel):
    """A single unit of telemetry from the firehose."""

    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., description="Name of the component that emitted the event.")
    event_type: EventType = Field(default="Unknown", alias="eventType")
    value_metric: ValueMetric | None = Field(default=None, alias="valueMetric")
    deployment: str | None = None
    job: str | None = None
    index: str | None = None

    @property
    def is_value_metric(self) -> bool:
        return self.event_type == VALUE_METRIC and self.value_metric is not None


class MetricEvent(BaseModel):
    """(origin, metric name) pair fed to the taxonomy store."""

    origin: str
    name: str

    @classmethod
    def from_envelope(cls, envelope: Envelope) -> "MetricEvent | None":
        """Return the event carried by a value-metric envelope, else None."""
        if not envelope.is_value_metric:
            return None
        return cls(origin=envelope.origin, name=envelope.value_metric.name)  # type: ignore[union-attr]
