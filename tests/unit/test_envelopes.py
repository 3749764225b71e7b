import pytest

from domain.schemas import Envelope, MetricEvent
from infrastructure.sources.envelopes import decode_envelopes, decode_json


def test_v1_value_metric() -> None:
    [env] = decode_json(
        '{"origin": "gorouter", "eventType": "ValueMetric", '
        '"valueMetric": {"name": "latency.uaa", "value": 12.5, "unit": "ms"}}'
    )

    assert env.is_value_metric
    assert MetricEvent.from_envelope(env) == MetricEvent(origin="gorouter", name="latency.uaa")


def test_v1_other_event_types_are_not_metric_events() -> None:
    [env] = decode_envelopes({"origin": "rep", "eventType": "LogMessage"})
    assert not env.is_value_metric
    assert MetricEvent.from_envelope(env) is None


def test_value_metric_event_without_body_is_not_a_metric_event() -> None:
    env = Envelope(origin="rep", event_type="ValueMetric")
    assert not env.is_value_metric
    assert MetricEvent.from_envelope(env) is None


def test_v2_gauge_fans_out_per_metric_name() -> None:
    envs = decode_envelopes(
        {
            "batch": [
                {
                    "source_id": "doppler",
                    "tags": {"origin": "loggregator.doppler", "job": "doppler"},
                    "gauge": {
                        "metrics": {
                            "ingress": {"unit": "envelopes", "value": 3},
                            "dropped.total": {"unit": "envelopes", "value": 0},
                        }
                    },
                },
                {"source_id": "app-guid", "log": {"payload": "aGk=", "type": "OUT"}},
            ]
        }
    )

    events = [MetricEvent.from_envelope(e) for e in envs]
    assert events == [
        MetricEvent(origin="loggregator.doppler", name="ingress"),
        MetricEvent(origin="loggregator.doppler", name="dropped.total"),
        None,
    ]
    assert envs[0].job == "doppler"
    assert envs[2].event_type == "LogMessage"


def test_v2_origin_falls_back_to_source_id() -> None:
    [env] = decode_envelopes({"source_id": "bbs", "gauge": {"metrics": {"ConvergenceLRPDuration": {"value": 1}}}})
    assert env.origin == "bbs"


def test_v2_container_metrics_are_not_value_metrics() -> None:
    [env] = decode_envelopes(
        {
            "source_id": "app-guid",
            "gauge": {"metrics": {"cpu": {"value": 0.1}, "memory": {"value": 10}, "disk": {"value": 5}}},
        }
    )
    assert env.event_type == "ContainerMetric"
    assert MetricEvent.from_envelope(env) is None


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"batch": "nope"},
        {"batch": [1]},
        {"something": "else"},
        {"eventType": "ValueMetric"},  # missing origin
        {"source_id": "a", "gauge": {"metrics": {"x.y": 5}}},
        {"source_id": "a", "tags": ["nope"], "gauge": {"metrics": {"x": {"value": 1}}}},
        {"source_id": "a", "gauge": "nope"},
        {"source_id": "a", "gauge": {"metrics": ["x"]}},
        {"batch": [{"source_id": "a", "gauge": {"metrics": {"ok": {"value": 1}, "bad": 2}}}]},
    ],
)
def test_malformed_shapes_raise_value_error(raw: object) -> None:
    with pytest.raises(ValueError):
        decode_envelopes(raw)


def test_invalid_json_raises_value_error() -> None:
    with pytest.raises(ValueError):
        decode_json("{not json")
