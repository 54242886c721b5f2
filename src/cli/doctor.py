"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.qr_renderer import render_qr
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import RenderError
from core.domain.models import QRRenderRequest
from core.resources_loader import load_render_assets

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_framed_render(settings: AppSettings) -> tuple[bool, str]:
    """Attempt a full framed render to detect broken assets."""

    try:
        assets = load_render_assets(settings)
        png = render_qr(
            QRRenderRequest(destination_url=settings.app_url, label="Doctor"),
            assets,
        )
    except RenderError as exc:
        return False, str(exc)
    font = "TTF" if assets.font_bytes else "Pillow default font"
    return True, f"OK ({len(png)} bytes, {font})"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="JOEL-QR Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("App URL", "OK", settings.app_url)
    for label, value in (
        ("Telegram bot", settings.telegram_bot_name),
        ("WhatsApp number", settings.whatsapp_phone_number),
    ):
        table.add_row(label, "OK" if value else "MISSING", value or "Gateway links will be broken")
    if settings.umami_host and settings.umami_id:
        table.add_row("Umami", "OK", settings.umami_host)
    else:
        table.add_row("Umami", "OPTIONAL", "Analytics disabled")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.jorfsearch_base_url, settings))
    table.add_row("JORFSearch", "OK" if ok_http else "FAIL", detail_http)

    # Assets
    ok_render, detail_render = _check_framed_render(settings)
    table.add_row("Framed render", "OK" if ok_render else "FAIL", detail_render)

    _console.print(table)

    if not ok_render:
        _console.print(
            "\n[yellow]Note:[/yellow] Without a frame asset only `frame=false` QR codes can be served."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    domain = typer.prompt("Public domain (host[:port])", default="localhost:3000", show_default=True).strip()
    bot = typer.prompt("Telegram bot name", default="", show_default=False).strip()
    phone = typer.prompt("WhatsApp phone number", default="", show_default=False).strip()

    if not domain:
        raise typer.BadParameter("domain is required")

    env_path = write_user_env_vars(
        {
            "JOEL_QR_APP_DOMAIN": domain,
            "JOEL_QR_TELEGRAM_BOT_NAME": bot,
            "JOEL_QR_WHATSAPP_PHONE_NUMBER": phone,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
