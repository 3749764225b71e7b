"""Configuration models (Pydantic classes)."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from infrastructure.constants import DEFAULT_PORT, DEFAULT_SUBSCRIPTION_ID


class SourceKind(str, Enum):
    """Supported stream sources."""

    FIREHOSE = "firehose"
    REPLAY = "replay"
    MOCK = "mock"


class SourceConfig(BaseModel):
    """Stream source settings."""

    kind: SourceKind = Field(default=SourceKind.FIREHOSE, description="Which stream source adapter to use.")
    address: str | None = Field(
        default=None,
        description="Loggregator gateway address (e.g. https://log-stream.example.com).",
    )
    auth_token: str | None = Field(default=None, repr=False, description="OAuth token, e.g. 'bearer ...'.")
    subscription_id: str = Field(
        default=DEFAULT_SUBSCRIPTION_ID,
        description="Firehose subscription (shard) id; consumers sharing it split the stream.",
    )
    verify_tls: bool = False
    connect_timeout_s: float = 10.0
    reconnect_delay_s: float = 1.0
    max_reconnects: int | None = Field(
        default=None,
        description="Give up after this many consecutive failed connections; None retries forever.",
    )
    replay_file: Path | None = Field(default=None, description="Newline-delimited JSON envelopes to replay.")

    @model_validator(mode="after")
    def _validate(self) -> "SourceConfig":
        if self.kind is SourceKind.FIREHOSE and not self.address:
            raise ValueError("source.address (DOPPLER_ADDR) is required for the firehose source")
        if self.kind is SourceKind.REPLAY and self.replay_file is None:
            raise ValueError("source.replay_file is required for the replay source")
        if self.reconnect_delay_s < 0:
            raise ValueError("source.reconnect_delay_s must be >= 0")
        if self.max_reconnects is not None and self.max_reconnects < 0:
            raise ValueError("source.max_reconnects must be >= 0 or None")
        return self


class ServerConfig(BaseModel):
    """Report HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)


class TaxonomyConfig(BaseModel):
    """Taxonomy aggregation settings."""

    promote_category_only: bool = Field(
        default=False,
        description="If true, a bare category gains subcategories when one is later observed. "
        "If false (default), such subcategories are dropped.",
    )
    log_every: int = Field(default=10_000, ge=0, description="Log a progress line every N events (0 = never).")


class ServiceConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from an optional service.yaml
    - Overridden by environment variables (DOPPLER_ADDR, CF_ACCESS_TOKEN, PORT, ...)
    - Consumed by the stream source, the ingestion loop and the HTTP server
    """

    source: SourceConfig
    server: ServerConfig = Field(default_factory=ServerConfig)
    taxonomy: TaxonomyConfig = Field(default_factory=TaxonomyConfig)
