"""Render de la página de pasarela (`/choose`).

Por qué está en adapters:
- El HTML es un detalle de presentación (Jinja2).
- El Core solo produce el `GatewayPage` con los datos ya resueltos.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.services.gateway import GatewayPage

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache(maxsize=1)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_gateway_html(page: GatewayPage) -> str:
    """Renderiza el HTML autocontenido de la pasarela."""

    template = _get_env().get_template("choose.html")
    return template.render(
        follow_label=page.target.canonical_label,
        follow_type=page.target.type.value,
        qr_url=page.qr_url,
        hide_qr=page.hide_qr,
        base_url=page.base_url,
        whatsapp_link=page.whatsapp_link,
        telegram_link=page.telegram_link,
    )
