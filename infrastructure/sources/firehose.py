"""Firehose source: Loggregator V2 RLP gateway over server-sent events."""

import logging
import threading
from collections.abc import Iterable, Iterator

import httpx

from domain.schemas import Envelope
from infrastructure.config.models import SourceConfig, SourceKind
from infrastructure.sources.base import ErrorHandler, StreamSource, StreamSourceError
from infrastructure.sources.envelopes import decode_json
from infrastructure.sources.registry import register_source

logger = logging.getLogger(__name__)

READ_PATH = "/v2/read"


def gateway_base_url(address: str) -> str:
    """Normalise a gateway address; ws:// and wss:// map to http:// and https://."""
    address = address.strip().rstrip("/")
    if address.startswith("ws://"):
        return "http://" + address[len("ws://") :]
    if address.startswith("wss://"):
        return "https://" + address[len("wss://") :]
    return address


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """
    Yield the data payload of each server-sent event.

    Multi-line data fields are joined with newlines; comments (":...")
    and other fields (event, id, retry) are ignored.
    """
    data: list[str] = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            if data:
                yield "\n".join(data)
                data = []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if field == "data":
            data.append(value[1:] if value.startswith(" ") else value)
    if data:
        yield "\n".join(data)


class FirehoseSource(StreamSource):
    """
    Streams gauge envelopes for one firehose subscription.

    - GET {address}/v2/read?shard_id=<subscription>&gauge&counter with the access token
    - Each SSE event carries a JSON {"batch": [...]} of V2 envelopes
    - Connection failures and error statuses are reported, then the source
      reconnects after `reconnect_delay_s` (bounded by `max_reconnects`)
    - A stream closed by the gateway is reopened; only the stop event or
      exhausted reconnects end iteration
    """

    kind = SourceKind.FIREHOSE

    def __init__(
        self,
        *,
        cfg: SourceConfig,
        client: httpx.Client,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        super().__init__(cfg=cfg, on_error=on_error, stop_event=stop_event)
        if not cfg.address:
            raise ValueError("FirehoseSource requires cfg.address")
        self.client = client
        self.url = gateway_base_url(cfg.address) + READ_PATH

    @classmethod
    def from_cfg(
        cls,
        cfg: SourceConfig,
        *,
        on_error: ErrorHandler | None = None,
        stop_event: threading.Event | None = None,
    ) -> "FirehoseSource":
        client = httpx.Client(
            verify=cfg.verify_tls,
            # Reads block until the next event arrives
            timeout=httpx.Timeout(cfg.connect_timeout_s, read=None),
        )
        return cls(cfg=cfg, client=client, on_error=on_error, stop_event=stop_event)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "text/event-stream"}
        if self.cfg.auth_token:
            headers["Authorization"] = self.cfg.auth_token
        return headers

    def _params(self) -> dict[str, str]:
        return {"shard_id": self.cfg.subscription_id, "gauge": "", "counter": ""}

    def _read_stream(self) -> Iterator[Envelope]:
        with self.client.stream("GET", self.url, params=self._params(), headers=self._headers()) as resp:
            if resp.status_code >= 400:
                body = resp.read().decode("utf-8", errors="replace")[:200]
                raise StreamSourceError(f"Firehose returned HTTP {resp.status_code}: {body!r}")

            logger.info("Connected to firehose (subscription=%s)", self.cfg.subscription_id)
            for payload in iter_sse_data(resp.iter_lines()):
                if self.stopped:
                    return
                try:
                    envelopes = decode_json(payload)
                except ValueError as e:
                    self.report_error(StreamSourceError(f"Malformed firehose payload: {e}"))
                    continue
                yield from envelopes

    def iter_envelopes(self) -> Iterator[Envelope]:
        failures = 0
        while not self.stopped:
            try:
                for envelope in self._read_stream():
                    failures = 0
                    yield envelope
                    if self.stopped:
                        return
                logger.info("Firehose stream closed by server; reconnecting")
            except (httpx.HTTPError, StreamSourceError) as e:
                failures += 1
                err = e if isinstance(e, StreamSourceError) else StreamSourceError(f"Firehose connection failed: {e}")
                self.report_error(err)
                if self.cfg.max_reconnects is not None and failures > self.cfg.max_reconnects:
                    logger.error("Giving up on firehose after %d consecutive failures", failures)
                    return

            if self.stop_event.wait(self.cfg.reconnect_delay_s):
                return

    def close(self) -> None:
        self.client.close()


register_source(SourceKind.FIREHOSE, FirehoseSource)
