"""Errores tipados del dominio.

Todos son errores de entrada del usuario: la capa HTTP los traduce a 4xx con
`{"error": <mensaje>}`. La indisponibilidad de JORFSearch no aparece aquí:
el cliente la degrada a una lista vacía.
"""

from __future__ import annotations


class FollowTargetError(Exception):
    """Base de los errores de validación del objetivo a seguir."""

    status_code = 400
    default_message = "Invalid follow target."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictingParameters(FollowTargetError):
    default_message = "Parameters people, function_tag and organisations are exclusive."


class MissingParameter(FollowTargetError):
    default_message = "One of people, function_tag and organisations must be provided."


class InvalidNameFormat(FollowTargetError):
    default_message = "Name parameter must be composed two words minimum: firstname lastname."


class NotFound(FollowTargetError):
    default_message = "No result found on JORFSearch."


class AmbiguousResult(FollowTargetError):
    default_message = "Too many results found on JORFSearch."


class RenderError(RuntimeError):
    """Fallo interno de rasterizado (asset de marco ausente o ilegible, encoding)."""
