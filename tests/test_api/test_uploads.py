"""
Tests for upload and delete endpoints.
"""

import json

import pytest
from httpx import AsyncClient

from portfolio_api.api.v1.uploads import parse_tags
from portfolio_api.core.exceptions import StoreDeleteError, StoreUploadError, ValidationError


def upload_form(**overrides) -> dict:
    data = {
        "description": "A cat",
        "alt_text": "A cat sitting on a mat",
        "tags": json.dumps(["animals", "cats"]),
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


async def upload(client: AsyncClient, headers, content: bytes, filename: str = "cat.png", **form):
    return await client.put(
        "/api/v1/upload",
        files={"file": (filename, content, "image/png")},
        data=upload_form(**form),
        headers=headers,
    )


@pytest.mark.asyncio
async def test_upload_image(client: AsyncClient, auth_headers, seed_tags, blob_store, png_bytes):
    response = await upload(client, auth_headers, png_bytes)

    assert response.status_code == 200
    assert response.json() == {
        "message": "Successfully uploaded: https://bucket.test/portfolio-images/cat.png"
    }
    assert blob_store.objects["cat.png"] == png_bytes

    art = await client.get("/api/v1/db/art/cats")
    assert art.json() == [{
        "filename": "cat.png",
        "bucketUrl": "https://bucket.test/portfolio-images/cat.png",
        "description": "A cat",
        "altText": "A cat sitting on a mat",
    }]


@pytest.mark.asyncio
async def test_upload_reports_dropped_tags(client: AsyncClient, auth_headers, seed_tags, png_bytes):
    response = await upload(client, auth_headers, png_bytes, tags="cats,unicorns")

    assert response.status_code == 200
    assert response.json()["message"].endswith("Dropped unknown tags: unicorns")


@pytest.mark.asyncio
async def test_upload_sanitizes_input(client: AsyncClient, auth_headers, png_bytes):
    response = await upload(
        client,
        auth_headers,
        png_bytes,
        filename="my cat.png",
        description="<b>bold</b>",
        tags=None,
    )

    assert response.status_code == 200
    art = (await client.get("/api/v1/db/all-art")).json()
    assert art[0]["filename"] == "my_cat.png"
    assert art[0]["description"] == "&lt;b&gt;bold&lt;/b&gt;"


@pytest.mark.asyncio
async def test_upload_requires_api_key(client: AsyncClient, blob_store, png_bytes):
    response = await upload(client, {}, png_bytes)

    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"
    assert blob_store.calls == []


@pytest.mark.asyncio
async def test_upload_rejects_wrong_api_key(client: AsyncClient, png_bytes):
    response = await upload(client, {"x-api-key": "wrong"}, png_bytes)

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["description", "alt_text"])
async def test_upload_requires_metadata(client: AsyncClient, auth_headers, png_bytes, field):
    response = await upload(client, auth_headers, png_bytes, **{field: None})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_failed"
    assert body["details"] == {"field": field}


@pytest.mark.asyncio
async def test_upload_rejects_mismatched_type(client: AsyncClient, auth_headers, gif_bytes):
    response = await upload(client, auth_headers, gif_bytes, filename="cat.png")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_rejects_empty_file(client: AsyncClient, auth_headers):
    response = await upload(client, auth_headers, b"")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient, auth_headers, png_bytes):
    response = await upload(client, auth_headers, png_bytes + b"\x00" * (64 * 1024))

    assert response.status_code == 413
    assert response.json()["error"] == "payload_too_large"


@pytest.mark.asyncio
async def test_upload_duplicate(client: AsyncClient, auth_headers, blob_store, png_bytes):
    await upload(client, auth_headers, png_bytes)

    response = await upload(client, auth_headers, png_bytes)

    assert response.status_code == 409
    assert "already exists" in response.json()["message"]
    assert blob_store.calls == [("upload", "cat.png")]


@pytest.mark.asyncio
async def test_upload_failure_hides_details(client: AsyncClient, auth_headers, blob_store, png_bytes):
    blob_store.upload_error = StoreUploadError("cat.png", "secret internal host unreachable")

    response = await upload(client, auth_headers, png_bytes)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "store_upload_failure"
    assert "secret internal host" not in body["message"]

    filenames = await client.get("/api/v1/db/all-filenames")
    assert filenames.json() == []


@pytest.mark.asyncio
async def test_delete_image(client: AsyncClient, auth_headers, blob_store, png_bytes):
    await upload(client, auth_headers, png_bytes)

    response = await client.delete("/api/v1/delete/cat.png", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "cat.png removed successfully."}
    assert blob_store.objects == {}


@pytest.mark.asyncio
async def test_delete_orphan_blob(client: AsyncClient, auth_headers, blob_store, png_bytes):
    """A file left in the bucket without metadata can still be deleted."""
    blob_store.objects["ghost.png"] = png_bytes

    response = await client.delete("/api/v1/delete/ghost.png", headers=auth_headers)

    assert response.status_code == 200
    assert blob_store.objects == {}


@pytest.mark.asyncio
async def test_delete_bucket_failure_hides_details(client: AsyncClient, auth_headers, blob_store, png_bytes):
    await upload(client, auth_headers, png_bytes)
    blob_store.delete_error = StoreDeleteError("cat.png", "secret internal host unreachable")

    response = await client.delete("/api/v1/delete/cat.png", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "store_delete_failure"
    assert "secret internal host" not in response.json()["message"]


@pytest.mark.asyncio
async def test_delete_requires_api_key(client: AsyncClient):
    response = await client.delete("/api/v1/delete/cat.png")

    assert response.status_code == 403


class TestParseTags:

    def test_json_array(self):
        assert parse_tags('["animals", " cats "]') == ["animals", "cats"]

    def test_comma_separated(self):
        assert parse_tags("animals, cats,,") == ["animals", "cats"]

    def test_empty(self):
        assert parse_tags(None) == []
        assert parse_tags("  ") == []

    @pytest.mark.parametrize("raw", ["[1, 2]", "[not json", '["a", {"b": 1}]'])
    def test_rejects_malformed_json(self, raw):
        with pytest.raises(ValidationError):
            parse_tags(raw)
