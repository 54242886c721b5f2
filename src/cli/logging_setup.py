"""Configuración de logging para CLI y servidor (Rich)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Instala un `RichHandler` en el logger raíz (idempotente)."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(
        RichHandler(
            console=console or Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
    )
    # httpx registra cada request en INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
