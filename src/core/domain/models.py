"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita normalizar las respuestas heterogéneas de JORFSearch.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

DEFAULT_QRCODE_SIZE = 500


class FollowType(str, Enum):
    """Tipo de seguimiento solicitado (exactamente uno por request)."""

    PERSON = "people"
    ROLE_TAG = "function_tag"
    ORGANISATION = "organisation"


class ResolvedItem(BaseModel):
    """Publicación del JORF devuelta por el índice, reducida a la identidad.

    El índice devuelve muchos más campos (fecha, organisations, tags...);
    solo conservamos nombre y apellido.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    given_name: str = Field(
        ...,
        alias="prenom",
        min_length=1,
        description="Nombre de pila (`prenom` en el JSON de JORFSearch).",
    )
    family_name: str = Field(
        ...,
        alias="nom",
        min_length=1,
        description="Apellido (`nom` en el JSON de JORFSearch).",
    )

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"


class OrganisationIdentity(BaseModel):
    """Identidad de una organización en Wikidata (`wikidata_id_to_name`)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Nombre legible de la organización.")
    id: str = Field(..., min_length=1, description="Identificador Wikidata (p.ej. Q109039648).")


class FollowQuery(BaseModel):
    """Parámetros crudos tal como llegan de la capa de routing."""

    name: str = ""
    organisation: str = ""
    function_tag: str = ""
    verify: bool = False


class FollowTarget(BaseModel):
    """Resultado del resolver: qué se sigue y cómo se muestra."""

    model_config = ConfigDict(frozen=True)

    type: FollowType
    raw_argument: str = Field(
        ...,
        min_length=1,
        description="Valor reenviado a los comandos del bot (Suivre/SuivreO/SuivreF).",
    )
    canonical_label: str = Field(
        ...,
        description="Texto mostrado en la leyenda del QR y en la página de pasarela.",
    )


class QRRenderRequest(BaseModel):
    """Petición de rasterizado de un QR (con o sin marco)."""

    destination_url: str = Field(..., min_length=1)
    pixel_size: int = Field(default=DEFAULT_QRCODE_SIZE, gt=0)
    frame_enabled: bool = True
    label: str | None = None
    explicit_size: bool = Field(
        default=False,
        exclude=True,
        description="True si `pixel_size` vino del cliente (incompatible con el marco).",
    )

    @model_validator(mode="after")
    def _size_and_frame_are_exclusive(self) -> "QRRenderRequest":
        if self.frame_enabled and self.explicit_size:
            raise ValueError("Cannot use fixed size and frame at the same time.")
        return self
