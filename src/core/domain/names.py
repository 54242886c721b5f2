"""Normalización de nombres de persona para el path `/name/{...}` de JORFSearch.

Limpiar el nombre antes de consultar reduce las respuestas "redirect"
del índice (nombre/apellido con mayúsculas o acentos distintos).
"""

from __future__ import annotations

import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
# Primera letra tras inicio, espacio, guion o apóstrofo.
_WORD_START = re.compile(r"(^|[\s\-'])([^\W\d_])")
_PARENTHESES = re.compile(r"[()]")


def _upper_initial(match: re.Match[str]) -> str:
    letter = match.group(2)
    upper = letter.upper()
    # "ß".upper() == "SS": se deja tal cual para que la función sea idempotente.
    return match.group(1) + (upper if len(upper) == 1 else letter)


def normalize_for_url(value: str) -> str:
    """Devuelve `value` sin acentos, en Title Case por componente y sin paréntesis.

    Los paréntesis se quitan antes de capitalizar: así `normalize_for_url` es
    idempotente también para entradas como "jean (paul)".

    >>> normalize_for_url("jean-paul o'brien")
    "Jean-Paul O'Brien"
    """

    if not value:
        return ""

    out = value.strip().lower()
    out = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", out))
    out = _PARENTHESES.sub("", out).strip()
    return _WORD_START.sub(_upper_initial, out)


def name_tokens(value: str) -> list[str]:
    """Tokens separados por espacios (nombre, apellido, ...)."""

    return value.split()
