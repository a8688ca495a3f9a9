"""
Tests for tag administration endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_add_tag(client: AsyncClient, auth_headers):
    response = await client.post("/api/v1/db/tags", json={"tagName": "sketches"}, headers=auth_headers)

    assert response.status_code == 201
    assert response.json() == {"message": "Tag 'sketches' added successfully."}

    tags = await client.get("/api/v1/db/all-tags")
    assert tags.json() == ["sketches"]


@pytest.mark.asyncio
async def test_add_duplicate_tag(client: AsyncClient, auth_headers, seed_tags):
    response = await client.post("/api/v1/db/tags", json={"tagName": "cats"}, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


@pytest.mark.asyncio
async def test_add_invalid_tag(client: AsyncClient, auth_headers):
    response = await client.post("/api/v1/db/tags", json={"tagName": "Not Valid"}, headers=auth_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_tag_mutations_require_api_key(client: AsyncClient):
    response = await client.post("/api/v1/db/tags", json={"tagName": "sketches"})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_remove_tag(client: AsyncClient, auth_headers, seed_tags):
    response = await client.delete("/api/v1/db/tags/cats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Tag 'cats' removed successfully."}


@pytest.mark.asyncio
async def test_remove_unknown_tag(client: AsyncClient, auth_headers):
    response = await client.delete("/api/v1/db/tags/nope", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_association_endpoints(client: AsyncClient, auth_headers, coordinator, seed_tags, png_bytes):
    await coordinator.publish("cat.png", png_bytes, "A cat", "cat")

    added = await client.post(
        "/api/v1/db/assocs",
        json={"filename": "cat.png", "tagName": "cats"},
        headers=auth_headers,
    )
    assert added.status_code == 201
    assocs = await client.get("/api/v1/db/all-assocs")
    assert assocs.json() == [{"filename": "cat.png", "tagName": "cats"}]

    removed = await client.delete("/api/v1/db/assocs/cat.png/cats", headers=auth_headers)
    assert removed.status_code == 200
    assocs = await client.get("/api/v1/db/all-assocs")
    assert assocs.json() == []


@pytest.mark.asyncio
async def test_association_with_unknown_tag(client: AsyncClient, auth_headers, coordinator, png_bytes):
    await coordinator.publish("cat.png", png_bytes, "A cat", "cat")

    response = await client.post(
        "/api/v1/db/assocs",
        json={"filename": "cat.png", "tagName": "unknown"},
        headers=auth_headers,
    )

    assert response.status_code == 404
