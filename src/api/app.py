"""FastAPI app factory for the JOEL QR server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from adapters.http_client import build_async_client
from adapters.jorfsearch import JORFSearchClient
from adapters.umami import UmamiAnalytics
from api.errors import register_exception_handlers
from api.routes import router
from core.config import AppSettings
from core.interfaces.analytics import AnalyticsSink
from core.interfaces.gazette import GazetteIndex
from core.resources_loader import RenderAssets, try_load_render_assets

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    index: GazetteIndex | None = None,
    analytics: AnalyticsSink | None = None,
    assets: RenderAssets | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Collaborators passed in are used as-is; the others are built once in the
    lifespan (shared HTTP client, JORFSearch client, Umami sink, render
    assets) and are read-only while serving.
    """

    settings = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        http_client = build_async_client(settings)
        if app.state.analytics is None:
            app.state.analytics = UmamiAnalytics(settings, client=http_client)
        if app.state.index is None:
            app.state.index = JORFSearchClient(settings, client=http_client, analytics=app.state.analytics)
        if app.state.assets is None:
            app.state.assets = try_load_render_assets(settings)
        logger.info("JOEL QR server ready at %s", settings.app_url)
        try:
            yield
        finally:
            await http_client.aclose()

    app = FastAPI(title="JOEL QR", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.index = index
    app.state.analytics = analytics
    app.state.assets = assets

    register_exception_handlers(app)
    app.include_router(router)
    return app
