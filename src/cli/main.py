"""JOEL-QR command line: serve the API, render QR codes, query JORFSearch."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.jorfsearch import JORFSearchClient
from adapters.qr_renderer import render_qr
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_identities_table,
    build_items_table,
    build_target_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import FollowTargetError, RenderError
from core.domain.models import FollowQuery
from core.resources_loader import load_render_assets
from core.services.follow_resolver import resolve_follow_target
from core.services.qr_payload import build_render_request, check_output_options

app = typer.Typer(no_args_is_help=True, help="QR codes to follow JORF appointments with JOEL.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: settings)."),
    port: int | None = typer.Option(None, help="Port (default: settings)."),
) -> None:
    """Run the HTTP server (uvicorn)."""

    import uvicorn

    from api.app import create_app

    settings = AppSettings()
    print_banner(_console)
    _console.print(f"Try: {settings.app_url}/choose")
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command()
def render(
    output: Path = typer.Option(Path("qrcode.png"), "--output", "-o", help="PNG file to write."),
    name: str = typer.Option("", help="Person to follow: firstname lastname."),
    organisation: str = typer.Option("", help="Wikidata id of the organisation."),
    function_tag: str = typer.Option("", "--function-tag", help="JORFSearch function tag."),
    verify: bool = typer.Option(False, help="Check the person or tag on JORFSearch first."),
    frame: bool = typer.Option(True, help="Composite onto the branded frame."),
    size: int | None = typer.Option(None, min=1, help="Bare QR size in px (requires --no-frame)."),
) -> None:
    """Resolve a follow target and write its QR code to a PNG file."""

    settings = AppSettings()
    query = FollowQuery(name=name, organisation=organisation, function_tag=function_tag, verify=verify)

    try:
        check_output_options(size, frame)
        target = asyncio.run(resolve_follow_target(query, JORFSearchClient(settings)))
        request = build_render_request(target, settings.app_url, size=size, frame=frame)
        png = render_qr(request, load_render_assets(settings) if frame else None)
    except FollowTargetError as exc:
        _console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=2) from exc
    except RenderError as exc:
        _console.print(f"[red]Render failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(png)
    _console.print(build_target_panel(target, request.destination_url))
    _console.print(f"[green]Saved:[/green] {output}")


@app.command()
def lookup(
    name: str = typer.Option("", help="Person name."),
    tag: str = typer.Option("", help="Function tag."),
    tag_value: str | None = typer.Option(None, "--tag-value", help="Exact tag value."),
    organisation: str = typer.Option("", help="Wikidata id."),
) -> None:
    """Query JORFSearch directly and print the normalized results."""

    if sum(bool(v) for v in (name, tag, organisation)) != 1:
        raise typer.BadParameter("Use exactly one of --name, --tag, --organisation")

    client = JORFSearchClient(AppSettings())

    async def _run() -> None:
        if name:
            _console.print(build_items_table(await client.search_by_person_name(name), title=name))
        elif tag:
            _console.print(build_items_table(await client.search_by_tag(tag, tag_value), title=tag))
        else:
            _console.print(build_identities_table(await client.resolve_organisation_names(organisation)))
            items = await client.search_by_organisation(organisation)
            _console.print(build_items_table(items, title=organisation.upper()))

    asyncio.run(_run())


def run() -> None:
    app()
