"""Cargador de recursos estáticos del renderer (marco PNG + fuente TTF).

Este módulo vive en `core/` porque:
- centraliza *qué* assets necesitamos sin acoplarse a la CLI ni a la API
- se ejecuta una sola vez al arrancar; el resultado es inmutable y se pasa
  por referencia al renderer.

No incluye los assets binarios en el código; las rutas vienen de `AppSettings`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import RenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderAssets:
    """Bytes del marco y de la fuente, compartidos en solo lectura."""

    frame_bytes: bytes
    font_bytes: bytes | None = None


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise RenderError(f"Cannot read asset {path}: {exc}") from exc


def load_render_assets(settings: AppSettings | None = None) -> RenderAssets:
    """Lee el marco (obligatorio) y la fuente (opcional).

    Sin fuente el renderer usa la fuente por defecto de Pillow; sin marco no
    hay salida enmarcada posible, así que se lanza `RenderError`.
    """

    settings = settings or AppSettings()
    frame_bytes = _read_bytes(settings.frame_path)

    font_bytes: bytes | None = None
    if settings.font_path.is_file():
        font_bytes = _read_bytes(settings.font_path)
    else:
        logger.warning("Font %s not found, falling back to Pillow's default font", settings.font_path)

    return RenderAssets(frame_bytes=frame_bytes, font_bytes=font_bytes)


def try_load_render_assets(settings: AppSettings | None = None) -> RenderAssets | None:
    """Como `load_render_assets`, pero devuelve None si el marco no está disponible.

    Permite servir QR sin marco aunque el despliegue no tenga assets.
    """

    try:
        return load_render_assets(settings)
    except RenderError as exc:
        logger.warning("Framed rendering disabled: %s", exc)
        return None
