"""Shared fixtures: settings, in-memory gazette index, analytics recorder, frame asset."""

from __future__ import annotations

from io import BytesIO
from typing import Any, Callable

import httpx
import pytest
from PIL import Image

from adapters.http_client import build_async_client
from adapters.jorfsearch import JORFSearchClient
from core.config import AppSettings
from core.domain.events import AnalyticsEvent
from core.domain.models import OrganisationIdentity, ResolvedItem
from core.resources_loader import RenderAssets

FRAME_SIZE = (800, 1200)
FRAME_COLOR = (240, 230, 210)


class FakeIndex:
    """In-memory `GazetteIndex` recording every call."""

    def __init__(
        self,
        *,
        people: list[ResolvedItem] | None = None,
        tags: list[ResolvedItem] | None = None,
        organisation_items: list[ResolvedItem] | None = None,
        identities: list[OrganisationIdentity] | None = None,
    ) -> None:
        self.people = people or []
        self.tags = tags or []
        self.organisation_items = organisation_items or []
        self.identities = identities or []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def search_by_person_name(self, name: str) -> list[ResolvedItem]:
        self.calls.append(("search_by_person_name", (name,)))
        return list(self.people)

    async def search_by_tag(self, tag: str, tag_value: str | None = None) -> list[ResolvedItem]:
        self.calls.append(("search_by_tag", (tag, tag_value)))
        return list(self.tags)

    async def search_by_organisation(self, wikidata_id: str) -> list[ResolvedItem]:
        self.calls.append(("search_by_organisation", (wikidata_id,)))
        return list(self.organisation_items)

    async def resolve_organisation_names(self, wikidata_id: str) -> list[OrganisationIdentity]:
        self.calls.append(("resolve_organisation_names", (wikidata_id,)))
        return list(self.identities)


class RecordingAnalytics:
    def __init__(self) -> None:
        self.events: list[AnalyticsEvent] = []

    async def log(self, event: AnalyticsEvent, data: dict[str, Any] | None = None) -> None:
        self.events.append(event)


def item(prenom: str, nom: str) -> ResolvedItem:
    return ResolvedItem(prenom=prenom, nom=nom)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        app_domain="qr.example.org",
        jorfsearch_base_url="https://jorf.test",
        telegram_bot_name="joel_bot",
        whatsapp_phone_number="33600000000",
        environment="production",
        umami_host=None,
        umami_id=None,
        frame_path=tmp_path / "missing-frame.png",
        font_path=tmp_path / "missing-font.ttf",
    )


@pytest.fixture
def frame_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", FRAME_SIZE, FRAME_COLOR).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def assets(frame_bytes) -> RenderAssets:
    return RenderAssets(frame_bytes=frame_bytes, font_bytes=None)


@pytest.fixture
def analytics() -> RecordingAnalytics:
    return RecordingAnalytics()


@pytest.fixture
def make_client(settings, analytics) -> Callable[[Callable[[httpx.Request], httpx.Response]], JORFSearchClient]:
    """Build a `JORFSearchClient` whose transport is the given handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> JORFSearchClient:
        http_client = build_async_client(settings, transport=httpx.MockTransport(handler))
        return JORFSearchClient(settings, client=http_client, analytics=analytics)

    return _make
