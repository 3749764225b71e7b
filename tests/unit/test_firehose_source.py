import json
import threading

import httpx

from infrastructure.config import SourceConfig
from infrastructure.sources import FirehoseSource, StreamSourceError
from infrastructure.sources.firehose import gateway_base_url, iter_sse_data


def _sse(*payloads: str) -> bytes:
    return "".join(f"data: {p}\n\n" for p in payloads).encode("utf-8")


def _gauge_batch(origin: str, *names: str) -> str:
    return json.dumps(
        {"batch": [{"source_id": origin, "tags": {"origin": origin}, "gauge": {"metrics": {n: {"value": 1} for n in names}}}]}
    )


def _source(handler, errors: list[Exception], **cfg_kwargs) -> FirehoseSource:
    cfg = SourceConfig(
        address="ws://gateway.test/",
        auth_token="bearer t0k3n",
        subscription_id="firehose-test",
        reconnect_delay_s=0,
        **cfg_kwargs,
    )
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return FirehoseSource(cfg=cfg, client=client, on_error=errors.append)


def test_streams_value_metrics_and_survives_errors() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if len(requests) == 1:
            body = _sse(_gauge_batch("doppler", "ingress", "egress.total"), "{broken", _gauge_batch("bbs", "locks"))
            return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})
        return httpx.Response(503, content=b"unavailable")

    errors: list[Exception] = []
    source = _source(handler, errors, max_reconnects=0)

    events = [(e.origin, e.name) for e in source.iter_events()]

    assert events == [("doppler", "ingress"), ("doppler", "egress.total"), ("bbs", "locks")]
    assert len(requests) == 2
    first = requests[0]
    assert first.url.path == "/v2/read"
    assert first.url.scheme == "http"
    assert first.url.params["shard_id"] == "firehose-test"
    assert "gauge" in first.url.params
    assert "counter" in first.url.params
    assert first.headers["Authorization"] == "bearer t0k3n"

    assert len(errors) == 2
    assert all(isinstance(e, StreamSourceError) for e in errors)
    assert "Malformed" in str(errors[0])
    assert "503" in str(errors[1])


def test_connection_failures_are_retried_up_to_the_limit() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("refused", request=request)

    errors: list[Exception] = []
    source = _source(handler, errors, max_reconnects=2)

    assert list(source.iter_envelopes()) == []
    assert calls == 3
    assert len(errors) == 3


def test_stop_event_ends_iteration() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=_sse(_gauge_batch("a", "x"), _gauge_batch("b", "y")))

    errors: list[Exception] = []
    source = _source(handler, errors)
    source.stop_event = threading.Event()

    seen = []
    for envelope in source.iter_envelopes():
        seen.append(envelope.origin)
        source.stop_event.set()

    assert seen == ["a"]
    assert errors == []


def test_iter_sse_data_handles_comments_multiline_and_crlf() -> None:
    lines = [": heartbeat", "event: message", "data: {\"a\":", "data:  1}", "", "id: 7\r", "data: x\r", "\r", "data: tail"]
    assert list(iter_sse_data(lines)) == ['{"a":\n 1}', "x", "tail"]


def test_gateway_base_url() -> None:
    assert gateway_base_url("wss://host:443/") == "https://host:443"
    assert gateway_base_url("ws://host") == "http://host"
    assert gateway_base_url("https://log-stream.example.com") == "https://log-stream.example.com"
