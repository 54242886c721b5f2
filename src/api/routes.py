"""FastAPI router: QR image, gateway page and liveness."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, BackgroundTasks, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from adapters.gateway_page import render_gateway_html
from adapters.qr_renderer import render_qr
from core.config import AppSettings
from core.domain.events import AnalyticsEvent
from core.domain.models import FollowQuery
from core.interfaces.analytics import AnalyticsSink
from core.interfaces.gazette import GazetteIndex
from core.resources_loader import RenderAssets
from core.services.follow_resolver import resolve_follow_target
from core.services.gateway import build_gateway
from core.services.qr_payload import build_render_request, check_output_options

router = APIRouter()


def _settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _index(request: Request) -> GazetteIndex:
    return request.app.state.index


def _analytics(request: Request) -> AnalyticsSink:
    return request.app.state.analytics


def _assets(request: Request) -> RenderAssets | None:
    return request.app.state.assets


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "JOEL QR server is running."


@router.get("/qrcode")
async def qrcode_image(
    request: Request,
    background_tasks: BackgroundTasks,
    size: int | None = Query(None, gt=0, description="Output size in px (bare QR only)."),
    frame: bool = Query(True, description="Composite the QR onto the branded frame."),
    verify: bool = Query(False, description="Check the person or tag on JORFSearch first."),
    name: str = Query("", description="Person to follow: firstname lastname."),
    organisation: str = Query("", description="Wikidata id of the organisation to follow."),
    function_tag: str = Query("", description="JORFSearch function tag to follow."),
) -> Response:
    """Render the QR code that opens the gateway page for one follow target."""

    settings = _settings(request)
    check_output_options(size, frame)

    query = FollowQuery(name=name, organisation=organisation, function_tag=function_tag, verify=verify)
    target = await resolve_follow_target(query, _index(request))

    render_request = build_render_request(target, settings.app_url, size=size, frame=frame)
    png = await asyncio.to_thread(render_qr, render_request, _assets(request))

    background_tasks.add_task(_analytics(request).log, AnalyticsEvent.qrcode_for(target.type))
    return Response(content=png, media_type="image/png")


@router.get("/choose", response_class=HTMLResponse)
async def choose(request: Request, background_tasks: BackgroundTasks) -> HTMLResponse:
    """Gateway landing page opened by a scanned QR code."""

    page = await build_gateway(
        dict(request.query_params),
        index=_index(request),
        settings=_settings(request),
        user_agent=request.headers.get("user-agent"),
    )
    background_tasks.add_task(_analytics(request).log, AnalyticsEvent.gateway_for(page.target.type))
    return HTMLResponse(render_gateway_html(page))


__all__ = ["router"]
