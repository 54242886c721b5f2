from __future__ import annotations

import json

import httpx

from adapters.http_client import build_async_client
from adapters.umami import UmamiAnalytics
from core.domain.events import AnalyticsEvent


def _sink(settings, handler, **overrides) -> UmamiAnalytics:
    configured = settings.model_copy(update={"umami_host": "stats.example.org", "umami_id": "site-123", **overrides})
    client = build_async_client(configured, transport=httpx.MockTransport(handler))
    return UmamiAnalytics(configured, client=client)


async def test_event_is_posted(settings):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    await _sink(settings, handler).log(AnalyticsEvent.QRCODE_TAG)

    assert len(seen) == 1
    assert str(seen[0].url) == "https://stats.example.org/api/send"
    assert seen[0].headers["User-Agent"].startswith("Mozilla/5.0")
    assert json.loads(seen[0].content) == {
        "payload": {
            "hostname": "stats.example.org",
            "website": "site-123",
            "name": "/qrcode-tag",
            "data": None,
        },
        "type": "event",
    }


async def test_development_mode_only_logs(settings, caplog):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    with caplog.at_level("INFO", logger="adapters.umami"):
        await _sink(settings, handler, environment="development").log(AnalyticsEvent.GATEWAY_PEOPLE)

    assert seen == []
    assert "/gateway-people" in caplog.text


async def test_unconfigured_sink_is_a_no_op(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    sink = UmamiAnalytics(settings, client=build_async_client(settings, transport=httpx.MockTransport(handler)))

    assert sink.enabled is False
    await sink.log(AnalyticsEvent.QRCODE_PEOPLE)


async def test_failures_are_swallowed(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    await _sink(settings, handler).log(AnalyticsEvent.QRCODE_PEOPLE)
