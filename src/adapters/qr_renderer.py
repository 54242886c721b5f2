"""Renderizado del QR (qrcode + Pillow).

Por qué está en adapters:
- Rasterizar y componer imágenes es infraestructura (Pillow).
- El Core solo conoce `QRRenderRequest` y los bytes de los assets.

Layout del marco (proporciones fijas):
- QR centrado horizontalmente, borde superior al 45% de la altura del marco.
- Franja de texto de `3 * FONT_SIZE` px al 35% de la altura, texto centrado
  y a 70% de la altura de la franja.
"""

from __future__ import annotations

from io import BytesIO

import qrcode
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError
from qrcode.constants import ERROR_CORRECT_M

from core.domain.errors import RenderError
from core.domain.models import QRRenderRequest
from core.resources_loader import RenderAssets

QR_MARGIN_MODULES = 1
QR_DARK = "#000000"
QR_LIGHT = "#ffffff"

FONT_SIZE = 40
TEXT_COLOR = "#62676c"  # gris JOEL

QR_TOP_RATIO = 0.45
TEXT_TOP_RATIO = 0.35
TEXT_BASELINE_RATIO = 0.70


def render_qr_image(destination_url: str, pixel_size: int) -> Image.Image:
    """QR en blanco y negro de `pixel_size` x `pixel_size` px.

    Si `pixel_size` no llega a un píxel por módulo (zona de silencio incluida)
    se devuelve el QR a 1 px por módulo: más grande que lo pedido, pero legible.
    """

    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=QR_MARGIN_MODULES)
    qr.add_data(destination_url)
    qr.make(fit=True)

    modules = qr.modules_count + 2 * QR_MARGIN_MODULES
    qr.box_size = max(1, pixel_size // modules)
    image = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT).get_image().convert("RGB")

    if pixel_size >= modules and image.size != (pixel_size, pixel_size):
        image = image.resize((pixel_size, pixel_size), Image.Resampling.NEAREST)
    return image


def _load_font(font_bytes: bytes | None) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_bytes is None:
        return ImageFont.load_default(size=FONT_SIZE)
    return ImageFont.truetype(BytesIO(font_bytes), FONT_SIZE)


def _render_label_band(width: int, label: str | None, font_bytes: bytes | None) -> Image.Image:
    band = Image.new("RGBA", (width, FONT_SIZE * 3), (0, 0, 0, 0))
    if not label:
        return band

    draw = ImageDraw.Draw(band)
    draw.text(
        (width / 2, band.height * TEXT_BASELINE_RATIO),
        label,
        font=_load_font(font_bytes),
        fill=TEXT_COLOR,
        anchor="mm",
    )
    return band


def _to_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


def compose_framed(qr_image: Image.Image, label: str | None, assets: RenderAssets) -> Image.Image:
    try:
        frame = Image.open(BytesIO(assets.frame_bytes))
        frame.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise RenderError(f"Invalid frame image: {exc}") from exc

    frame = frame.convert("RGBA")
    frame_w, frame_h = frame.size

    left = round((frame_w - qr_image.width) / 2)
    top = round(frame_h * QR_TOP_RATIO)
    frame.paste(qr_image, (left, top))

    band = _render_label_band(frame_w, label, assets.font_bytes)
    frame.alpha_composite(band, dest=(0, round(frame_h * TEXT_TOP_RATIO)))
    return frame


def render_qr(request: QRRenderRequest, assets: RenderAssets | None = None) -> bytes:
    """Devuelve el PNG final (QR solo o QR enmarcado con leyenda)."""

    qr_image = render_qr_image(request.destination_url, request.pixel_size)
    if not request.frame_enabled:
        return _to_png(qr_image)

    if assets is None:
        raise RenderError("Framed rendering requested but no frame asset is loaded.")

    try:
        return _to_png(compose_framed(qr_image, request.label, assets))
    except OSError as exc:
        raise RenderError(f"Framed rendering failed: {exc}") from exc
