"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI ni la API.
- Permite que adaptadores (JORFSearch, Umami, renderer) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "joel-qr"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "joel-qr"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "joel-qr"
    return Path.home() / ".config" / "joel-qr"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# JOEL-QR user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


_ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/API/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOEL_QR_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    app_domain: str = Field(
        default="localhost:3000",
        min_length=1,
        description="Dominio público del servidor (se usa en las URLs codificadas en el QR).",
    )
    app_scheme: str = Field(
        default="http",
        pattern=r"^https?$",
        description="Esquema de las URLs públicas.",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interfaz de escucha de `joel-qr serve`.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Puerto de escucha de `joel-qr serve`.",
    )

    telegram_bot_name: str = Field(
        default="",
        description="Nombre del bot de Telegram de JOEL (enlace t.me).",
    )
    whatsapp_phone_number: str = Field(
        default="",
        description="Número de WhatsApp de JOEL (enlace wa.me).",
    )

    jorfsearch_base_url: str = Field(
        default="https://jorfsearch.steinertriples.ch",
        min_length=8,
        description="Base URL del índice JORFSearch.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="joel-qr/0.1 (+https://jorfsearch.steinertriples.ch)",
        min_length=1,
        description="User-Agent para peticiones a JORFSearch.",
    )

    frame_path: Path = Field(
        default=_ASSETS_DIR / "frame.png",
        description="Imagen de marco (PNG) sobre la que se compone el QR.",
    )
    font_path: Path = Field(
        default=_ASSETS_DIR / "fonts" / "DejaVuSans-Bold.ttf",
        description="Fuente TrueType del texto superpuesto.",
    )

    umami_host: str | None = Field(
        default=None,
        description="Host de Umami para eventos de analítica (sin esquema).",
    )
    umami_id: str | None = Field(
        default=None,
        description="Website ID de Umami.",
    )
    environment: str = Field(
        default="production",
        pattern=r"^(production|development)$",
        description="En `development` los eventos de analítica solo se registran en el log.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging raíz.",
    )

    @property
    def app_url(self) -> str:
        return f"{self.app_scheme}://{self.app_domain}"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"
