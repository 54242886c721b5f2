"""Contrato del colaborador de analítica."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.events import AnalyticsEvent


@runtime_checkable
class AnalyticsSink(Protocol):
    """Emisión fire-and-forget: `log` nunca propaga errores."""

    async def log(self, event: AnalyticsEvent, data: dict[str, Any] | None = None) -> None:
        ...


class NullAnalytics:
    """Sink que descarta los eventos (tests, CLI)."""

    async def log(self, event: AnalyticsEvent, data: dict[str, Any] | None = None) -> None:
        return None
