"""Cliente de JORFSearch (índice de nombramientos del Journal officiel).

Contrato del índice (`?format=JSON`):
- `null`          -> sin resultado.
- `[...]`         -> lista de publicaciones (nos quedamos con prenom/nom).
- `"..."` (str)   -> el índice corrigió la consulta (orden nombre/apellido,
  mayúsculas...) y redirigió; los datos están en la URL resuelta. Solo se
  sigue para búsquedas por nombre y como máximo una vez.

Política de errores: cualquier fallo de transporte (red, no-2xx, JSON roto)
se registra en el log y se devuelve como lista vacía.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.events import AnalyticsEvent
from core.domain.models import OrganisationIdentity, ResolvedItem
from core.domain.names import normalize_for_url
from core.domain.urls import FORMAT_JSON_MARKER, encode_uri, with_format_marker
from core.interfaces.analytics import AnalyticsSink, NullAnalytics
from core.interfaces.gazette import GazetteIndex

logger = logging.getLogger(__name__)


def clean_items(raw_items: Any) -> list[ResolvedItem]:
    """Filtra la respuesta cruda: descarta entradas sin `prenom` o `nom`.

    Una entrada inválida no invalida el resto del lote.
    """

    if not isinstance(raw_items, list):
        return []

    items: list[ResolvedItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        try:
            items.append(ResolvedItem.model_validate(raw))
        except ValidationError:
            continue
    return items


def clean_identities(raw_items: Any) -> list[OrganisationIdentity]:
    if not isinstance(raw_items, list):
        return []

    identities: list[OrganisationIdentity] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        try:
            identities.append(OrganisationIdentity.model_validate(raw))
        except ValidationError:
            continue
    return identities


class JORFSearchClient(GazetteIndex):
    """Implementación HTTP de `GazetteIndex`.

    Si se inyecta `client`, se reutiliza (la API comparte uno por proceso);
    si no, cada consulta abre y cierra su propio `httpx.AsyncClient`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        analytics: AnalyticsSink | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._analytics = analytics or NullAnalytics()
        self._base_url = self._settings.jorfsearch_base_url.rstrip("/")

    async def search_by_person_name(self, name: str) -> list[ResolvedItem]:
        await self._analytics.log(AnalyticsEvent.JORFSEARCH_REQUEST_PEOPLE)
        # Limpiar el nombre reduce el número de llamadas redirigidas.
        path = f"/name/{normalize_for_url(name)}{FORMAT_JSON_MARKER}"
        return await self._query(path, follow_redirect=True)

    async def search_by_tag(self, tag: str, tag_value: str | None = None) -> list[ResolvedItem]:
        await self._analytics.log(AnalyticsEvent.JORFSEARCH_REQUEST_TAG)
        qualifier = f'="{tag_value}"' if tag_value is not None else ""
        path = f"/tag/{tag}{qualifier}{FORMAT_JSON_MARKER}"
        return await self._query(path)

    async def search_by_organisation(self, wikidata_id: str) -> list[ResolvedItem]:
        await self._analytics.log(AnalyticsEvent.JORFSEARCH_REQUEST_ORGANISATION)
        path = f"/{wikidata_id.upper()}{FORMAT_JSON_MARKER}"
        return await self._query(path)

    async def resolve_organisation_names(self, wikidata_id: str) -> list[OrganisationIdentity]:
        url = self._url(f"/wikidata_id_to_name?ids[]={wikidata_id}")
        try:
            response = await self._get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("JORFSearch organisation name lookup failed (%s): %s", url, exc)
            return []
        return clean_identities(data)

    async def _query(self, path: str, *, follow_redirect: bool = False) -> list[ResolvedItem]:
        url = self._url(path)
        try:
            response = await self._get(url)
            response.raise_for_status()
            data = response.json()

            if isinstance(data, str) and follow_redirect:
                # Un único salto: un segundo string se trata como "sin resultado".
                await self._analytics.log(AnalyticsEvent.JORFSEARCH_REQUEST_PEOPLE_FORMATTED)
                retry_url = with_format_marker(str(response.url))
                logger.debug("JORFSearch redirected %s -> %s", url, retry_url)
                response = await self._get(retry_url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("JORFSearch request failed (%s): %s", url, exc)
            return []

        return clean_items(data)

    def _url(self, path: str) -> str:
        return encode_uri(f"{self._base_url}{path}")

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)
        async with build_async_client(self._settings) as client:
            return await client.get(url)
