"""Tests for _client module — full client lifecycle against a fake endpoint."""

from __future__ import annotations

import json
import time
from datetime import timedelta

import httpx

from appinsights import Config, SeverityLevel, TelemetryClient
from appinsights._transmitter import Transmitter

ENDPOINT = "https://collector.test/v2/track"


class _Collector:
    """Records every POSTed batch."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200)

    @property
    def items(self) -> list[dict]:
        return [item for r in self.requests for item in json.loads(r.content)]


def _make_client(
    collector: _Collector, interval: timedelta = timedelta(seconds=10)
) -> TelemetryClient:
    config = (
        Config.builder()
        .with_ikey("ik-test")
        .with_endpoint(ENDPOINT)
        .with_interval(interval)
        .build()
    )
    http = httpx.Client(transport=httpx.MockTransport(collector))
    return TelemetryClient(config, transmitter=Transmitter(config.endpoint, client=http))


def test_client_keeps_config() -> None:
    config = Config.new("ik")
    client = TelemetryClient(config)
    try:
        assert client.config is config
        assert client._transmitter is not None
        assert client._transmitter.endpoint == config.endpoint
    finally:
        client.close()


def test_track_and_flush_reach_endpoint() -> None:
    collector = _Collector()
    client = _make_client(collector)

    client.track_event("signup", {"plan": "pro"})
    client.track_trace("disk low", SeverityLevel.WARNING)
    client.track_metric("latency_ms", 12.5)
    client.flush()

    assert len(collector.requests) == 1
    assert str(collector.requests[0].url) == ENDPOINT
    items = collector.items
    assert [i["data"]["baseType"] for i in items] == ["EventData", "MessageData", "MetricData"]
    assert all(i["iKey"] == "ik-test" for i in items)
    client.close()


def test_interval_drives_background_flush() -> None:
    collector = _Collector()
    client = _make_client(collector, interval=timedelta(milliseconds=50))

    client.track_event("tick")
    time.sleep(0.3)

    assert len(collector.items) == 1
    client.close()


def test_close_flushes_and_is_idempotent() -> None:
    collector = _Collector()
    client = _make_client(collector)
    client.track_event("last")
    client.close()
    client.close()

    assert client.is_closed
    assert len(collector.items) == 1


def test_tracking_after_close_is_discarded() -> None:
    collector = _Collector()
    client = _make_client(collector)
    client.close()
    client.track_event("too late")
    client.flush()
    assert collector.items == []


def test_disabled_client_drops_telemetry() -> None:
    collector = _Collector()
    client = _make_client(collector)
    client.enabled = False
    client.track_event("ignored")
    client.close()
    assert collector.items == []


def test_context_manager_closes() -> None:
    collector = _Collector()
    with _make_client(collector) as client:
        client.track_trace("hello")
    assert client.is_closed
    assert len(collector.items) == 1
