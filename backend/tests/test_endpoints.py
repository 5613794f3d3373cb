"""HTTP-level tests for the catalog and search routes."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from asset_search.api.deps import get_embedder
from asset_search.main import app

from tests.factories import CrashingEmbedder, FailingEmbedder, FakeEmbedder, fail_next_commit, seed_scenario


async def _create_agency_and_creator(client) -> tuple[int, int]:
    agency = await client.post("/agency", json={"name": "Northstar"})
    assert agency.status_code == 201
    agency_id = agency.json()["agency_id"]
    creator = await client.post(
        "/creator",
        json={"agency_id": agency_id, "stage_name": "Ruby", "categories": "photo, video"},
    )
    assert creator.status_code == 201
    return agency_id, creator.json()["creator_id"]


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_agency_and_creator_round_trip(client):
    agency_id, creator_id = await _create_agency_and_creator(client)

    agencies = await client.get("/agency")
    creators = await client.get("/creator", params={"agency_id": agency_id})

    assert [row["name"] for row in agencies.json()] == ["Northstar"]
    body = creators.json()
    assert [row["creator_id"] for row in body] == [creator_id]
    assert body[0]["categories"] == ["photo", "video"]


@pytest.mark.asyncio
async def test_agency_requires_name(client):
    response = await client.post("/agency", json={})
    assert response.status_code == 400
    assert "name" in response.json()["error"]


@pytest.mark.asyncio
async def test_creator_for_unknown_agency_is_not_found(client):
    response = await client.post("/creator", json={"agency_id": 77, "stage_name": "Ghost"})
    assert response.status_code == 404
    assert response.json() == {"error": "Agency 77 not found"}


@pytest.mark.asyncio
async def test_create_and_list_assets(client, embedder):
    agency_id, creator_id = await _create_agency_and_creator(client)

    created = await client.post(
        "/assets",
        json={
            "description": "red dress in bathroom",
            "price": 5,
            "category": "photo",
            "media_type": "jpg",
            "agency_id": agency_id,
            "creator_id": creator_id,
        },
    )
    assert created.status_code == 201
    asset_id = created.json()["id"]

    listed = await client.get("/assets", params={"agency_id": agency_id, "creator_id": creator_id})
    rows = listed.json()
    assert [row["id"] for row in rows] == [asset_id]
    assert rows[0]["media_type"] == "jpg"
    assert "embedding" not in rows[0]
    assert embedder.calls == ["red dress in bathroom"]


@pytest.mark.asyncio
async def test_create_asset_requires_fields(client, embedder):
    response = await client.post("/assets", json={"description": "red dress", "price": 5})
    assert response.status_code == 400
    assert "error" in response.json()
    assert embedder.calls == []


@pytest.mark.asyncio
async def test_embedding_failure_surfaces_as_bad_gateway(client):
    agency_id, creator_id = await _create_agency_and_creator(client)
    app.dependency_overrides[get_embedder] = lambda: FailingEmbedder()

    response = await client.post(
        "/assets",
        json={
            "description": "red dress",
            "price": 5,
            "category": "photo",
            "agency_id": agency_id,
            "creator_id": creator_id,
        },
    )

    assert response.status_code == 502
    assert response.json() == {"error": "Embedding provider request failed"}
    assert (await client.get("/assets")).json() == []


@pytest.mark.asyncio
async def test_search_returns_ranked_results(client, session, embedder):
    ids = await seed_scenario(session, embedder)

    response = await client.post(
        "/search",
        json={"query": "red dress", "agency_id": 1, "creator_id": 10, "limit": 10},
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert [row["id"] for row in results] == [ids["a"], ids["b"]]
    assert set(results[0]) == {"id", "description", "price", "category", "media_type", "distance"}
    assert results[0]["distance"] <= results[1]["distance"]


@pytest.mark.asyncio
async def test_search_with_category_and_limit(client, session, embedder):
    ids = await seed_scenario(session, embedder)

    video = await client.post(
        "/search",
        json={"query": "red dress", "agency_id": 1, "creator_id": 10, "category": "video"},
    )
    blank_category = await client.post(
        "/search",
        json={"query": "red dress", "agency_id": 1, "creator_id": 10, "category": "", "limit": 1},
    )

    assert [row["id"] for row in video.json()["results"]] == [ids["b"]]
    assert [row["id"] for row in blank_category.json()["results"]] == [ids["a"]]


@pytest.mark.asyncio
async def test_search_unknown_creator_is_empty(client, session, embedder):
    await seed_scenario(session, embedder)

    response = await client.post("/search", json={"query": "red dress", "agency_id": 1, "creator_id": 999})

    assert response.status_code == 200
    assert response.json() == {"results": []}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"query": "red dress", "creator_id": 10},
        {"query": "red dress", "agency_id": 1},
        {"agency_id": 1, "creator_id": 10},
        {"query": "red dress", "agency_id": 1, "creator_id": 10, "limit": 0},
        {"query": "red dress", "agency_id": 1, "creator_id": 10, "limit": "many"},
    ],
)
async def test_search_rejects_invalid_input(client, embedder, body):
    response = await client.post("/search", json=body)

    assert response.status_code == 400
    assert response.json()["error"]
    assert embedder.calls == []


@pytest.mark.asyncio
async def test_search_dimension_mismatch_is_server_error(client, session, embedder):
    await seed_scenario(session, embedder)
    app.dependency_overrides[get_embedder] = lambda: FakeEmbedder(dim=8)

    response = await client.post("/search", json={"query": "red dress", "agency_id": 1, "creator_id": 10})

    assert response.status_code == 500
    assert "dimension" in response.json()["error"]


@pytest.mark.asyncio
async def test_failed_save_returns_service_unavailable(client, session, monkeypatch):
    fail_next_commit(monkeypatch, session)

    failed = await client.post("/agency", json={"name": "Northstar"})

    assert failed.status_code == 503
    assert failed.json() == {"error": "Could not save agency"}
    assert (await client.get("/agency")).json() == []

    retried = await client.post("/agency", json={"name": "Northstar"})
    assert retried.status_code == 201
    assert [row["name"] for row in (await client.get("/agency")).json()] == ["Northstar"]


@pytest.mark.asyncio
async def test_search_storage_failure_returns_service_unavailable(client, session, embedder, monkeypatch):
    await seed_scenario(session, embedder)

    async def _broken_exec(statement):
        raise OperationalError("SELECT assets", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "exec", _broken_exec)

    response = await client.post("/search", json={"query": "red dress", "agency_id": 1, "creator_id": 10})

    assert response.status_code == 503
    assert response.json() == {"error": "Search backend unavailable"}


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_message(client):
    app.dependency_overrides[get_embedder] = lambda: CrashingEmbedder()
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://testserver") as raw_client:
        response = await raw_client.post("/search", json={"query": "red dress", "agency_id": 1, "creator_id": 10})

    assert response.status_code == 500
    assert response.json() == {"error": "The operation could not be completed"}
