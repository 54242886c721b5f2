"""Sink de analítica: Umami (`POST /api/send`).

Fire-and-forget: ningún fallo de Umami llega al request que emite el evento.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.events import AnalyticsEvent
from core.interfaces.analytics import AnalyticsSink

logger = logging.getLogger(__name__)

# Umami descarta eventos con User-Agent de bot.
_BROWSER_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0"


class UmamiAnalytics(AnalyticsSink):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._settings.umami_host and self._settings.umami_id)

    def build_payload(self, event: AnalyticsEvent, data: dict[str, Any] | None = None) -> dict[str, Any]:
        return {
            "payload": {
                "hostname": self._settings.umami_host,
                "website": self._settings.umami_id,
                "name": event.value,
                "data": data,
            },
            "type": "event",
        }

    async def log(self, event: AnalyticsEvent, data: dict[str, Any] | None = None) -> None:
        if self._settings.is_development:
            logger.info("Umami event %s", event.value)
            return
        if not self.enabled:
            return

        endpoint = f"https://{self._settings.umami_host}/api/send"
        headers = {"User-Agent": _BROWSER_USER_AGENT}
        payload = self.build_payload(event, data)
        try:
            if self._client is not None:
                await self._client.post(endpoint, json=payload, headers=headers)
            else:
                async with build_async_client(self._settings) as client:
                    await client.post(endpoint, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.debug("Umami event %s not sent: %s", event.value, exc)
