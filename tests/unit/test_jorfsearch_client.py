from __future__ import annotations

import json

import httpx

from adapters.jorfsearch import clean_items
from core.domain.events import AnalyticsEvent


def _json(body) -> httpx.Response:
    return httpx.Response(200, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})


def test_clean_items_drops_incomplete_entries():
    raw = [
        {"prenom": "Jean", "nom": "Dupont", "date": "2024-01-01", "organisations": []},
        {"prenom": "A"},
        {"nom": "B"},
        {"prenom": "", "nom": "Vide"},
        "not an object",
        {"prenom": "Marie", "nom": "Curie"},
    ]

    items = clean_items(raw)

    assert [(i.given_name, i.family_name) for i in items] == [("Jean", "Dupont"), ("Marie", "Curie")]


def test_clean_items_non_list_is_empty():
    assert clean_items(None) == []
    assert clean_items("Jean Dupont") == []
    assert clean_items({"prenom": "Jean", "nom": "Dupont"}) == []


async def test_person_null_response_is_empty(make_client, analytics):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _json(None)

    client = make_client(handler)

    assert await client.search_by_person_name("jean dupont") == []
    assert len(seen) == 1
    assert seen[0].url.host == "jorf.test"
    assert seen[0].url.path == "/name/Jean Dupont"
    assert seen[0].url.params["format"] == "JSON"
    assert analytics.events == [AnalyticsEvent.JORFSEARCH_REQUEST_PEOPLE]


async def test_person_missing_family_name_is_dropped(make_client):
    client = make_client(lambda request: _json([{"prenom": "A"}]))

    assert await client.search_by_person_name("A B") == []


async def test_person_item_list(make_client):
    client = make_client(lambda request: _json([{"prenom": "Élisabeth", "nom": "Borne", "cabinet": "x"}]))

    items = await client.search_by_person_name("élisabeth borne")

    assert len(items) == 1
    assert items[0].full_name == "Élisabeth Borne"


async def test_person_redirect_is_followed_once(make_client, analytics):
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if request.url.path == "/name/Dupont Jean":
            return httpx.Response(302, headers={"Location": "https://jorf.test/name/Jean%20Dupont"})
        if "format" not in request.url.params:
            return _json("Jean Dupont")
        return _json([{"prenom": "Jean", "nom": "Dupont"}])

    client = make_client(handler)

    items = await client.search_by_person_name("dupont jean")

    assert [i.full_name for i in items] == ["Jean Dupont"]
    assert seen == [
        "https://jorf.test/name/Dupont%20Jean?format=JSON",
        "https://jorf.test/name/Jean%20Dupont",
        "https://jorf.test/name/Jean%20Dupont?format=JSON",
    ]
    assert analytics.events == [
        AnalyticsEvent.JORFSEARCH_REQUEST_PEOPLE,
        AnalyticsEvent.JORFSEARCH_REQUEST_PEOPLE_FORMATTED,
    ]


async def test_person_second_redirect_marker_is_not_followed(make_client):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return _json("Jean Dupont")

    client = make_client(handler)

    assert await client.search_by_person_name("jean dupont") == []
    assert calls == 2


async def test_tag_string_response_is_not_followed(make_client, analytics):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _json("redirect")

    client = make_client(handler)

    assert await client.search_by_tag("ambassadeur") == []
    assert len(seen) == 1
    assert seen[0].url.path == "/tag/ambassadeur"
    assert analytics.events == [AnalyticsEvent.JORFSEARCH_REQUEST_TAG]


async def test_tag_with_value_uses_quoted_equality(make_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _json([{"prenom": "Jean", "nom": "Dupont"}])

    client = make_client(handler)

    items = await client.search_by_tag("cabinet", "Premier ministre")

    assert len(items) == 1
    assert seen[0].url.path == '/tag/cabinet="Premier ministre"'
    assert seen[0].url.params["format"] == "JSON"


async def test_organisation_id_is_upper_cased(make_client, analytics):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _json([{"prenom": "Jean", "nom": "Dupont"}, {"nom": "Sans prénom"}])

    client = make_client(handler)

    items = await client.search_by_organisation("q109039648")

    assert len(items) == 1
    assert seen[0].url.path == "/Q109039648"
    assert analytics.events == [AnalyticsEvent.JORFSEARCH_REQUEST_ORGANISATION]


async def test_organisation_string_response_is_empty(make_client):
    client = make_client(lambda request: _json("moved"))

    assert await client.search_by_organisation("Q1") == []


async def test_resolve_organisation_names(make_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _json([{"name": "Conseil d'État", "id": "Q769657"}, {"id": "Q1"}, None])

    client = make_client(handler)

    identities = await client.resolve_organisation_names("Q769657")

    assert [(i.name, i.id) for i in identities] == [("Conseil d'État", "Q769657")]
    assert seen[0].url.path == "/wikidata_id_to_name"
    assert seen[0].url.params["ids[]"] == "Q769657"


async def test_transport_failures_degrade_to_empty(make_client):
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(unreachable)

    assert await client.search_by_person_name("Jean Dupont") == []
    assert await client.search_by_tag("ambassadeur") == []
    assert await client.search_by_organisation("Q1") == []
    assert await client.resolve_organisation_names("Q1") == []


async def test_server_error_and_malformed_body_degrade_to_empty(make_client):
    server_error = make_client(lambda request: httpx.Response(503, text="maintenance"))
    malformed = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    assert await server_error.search_by_person_name("Jean Dupont") == []
    assert await malformed.search_by_person_name("Jean Dupont") == []
    assert await malformed.resolve_organisation_names("Q1") == []


async def test_failure_on_redirect_follow_up_degrades_to_empty(make_client):
    hits = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal hits
        hits += 1
        if hits == 1:
            return _json("Jean Dupont")
        raise httpx.ReadTimeout("timeout", request=request)

    client = make_client(handler)

    assert await client.search_by_person_name("Jean Dupont") == []
    assert hits == 2
