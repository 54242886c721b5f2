"""Utilidades de URL compartidas por el cliente del índice y el payload del QR."""

from __future__ import annotations

from urllib.parse import quote

# Caracteres que `encodeURI` deja intactos además de los alfanuméricos.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"

FORMAT_JSON_MARKER = "?format=JSON"


def encode_uri(value: str) -> str:
    """Codifica una URI completa (mantiene los separadores reservados)."""

    return quote(value, safe=_URI_SAFE)


def with_format_marker(url: str) -> str:
    """Añade `?format=JSON` si la URL no termina ya con él."""

    if url.endswith(FORMAT_JSON_MARKER):
        return url
    return f"{url}{FORMAT_JSON_MARKER}"
