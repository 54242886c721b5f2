"""Contrato del índice del JORF.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El resolver depende de esta abstracción; los tests inyectan fakes en memoria
  y la app inyecta `adapters.jorfsearch.JORFSearchClient`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import OrganisationIdentity, ResolvedItem


@runtime_checkable
class GazetteIndex(Protocol):
    """Búsquedas contra el índice de nombramientos.

    Reglas de diseño:
    - Todo es asíncrono porque hace I/O (HTTP).
    - Nunca lanza: un fallo de transporte se devuelve como lista vacía.
    """

    async def search_by_person_name(self, name: str) -> list[ResolvedItem]:
        ...

    async def search_by_tag(self, tag: str, tag_value: str | None = None) -> list[ResolvedItem]:
        ...

    async def search_by_organisation(self, wikidata_id: str) -> list[ResolvedItem]:
        ...

    async def resolve_organisation_names(self, wikidata_id: str) -> list[OrganisationIdentity]:
        ...
