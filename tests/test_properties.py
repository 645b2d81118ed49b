import pytest


@pytest.fixture
def create_property(client, admin_headers):
    async def _create(title="Lagos Loft", address="12 Marina Road, Lagos", images=None):
        response = await client.post(
            "/api/v1/properties/admin",
            json={"title": title, "address": address, "images": images or []},
            headers=admin_headers,
        )
        assert response.status_code == 201
        return response.json()["data"]

    return _create


@pytest.mark.asyncio
async def test_create_requires_admin(client):
    response = await client.post(
        "/api/v1/properties/admin", json={"title": "Loft", "address": "Somewhere"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_and_fetch(client, create_property):
    created = await create_property(images=["front.jpg", "kitchen.jpg"])

    response = await client.get(f"/api/v1/properties/{created['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Lagos Loft"
    assert data["images"] == ["front.jpg", "kitchen.jpg"]


@pytest.mark.asyncio
async def test_missing_property_is_404(client):
    response = await client.get("/api/v1/properties/unknown-id")

    assert response.status_code == 404
    assert response.json()["message"] == "Property not found"


@pytest.mark.asyncio
async def test_create_validates_fields(client, admin_headers):
    response = await client.post(
        "/api/v1/properties/admin",
        json={"title": "x" * 201, "address": "   "},
        headers=admin_headers,
    )

    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["data"]["errors"]}
    assert {"title", "address"} <= fields


@pytest.mark.asyncio
async def test_list_is_paginated_newest_first(client, create_property):
    for i in range(3):
        await create_property(title=f"Property {i}")

    response = await client.get("/api/v1/properties", params={"page": 1, "limit": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["title"] for p in data["properties"]] == ["Property 2", "Property 1"]
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    response = await client.get("/api/v1/properties", params={"page": 2, "limit": 2})
    assert [p["title"] for p in response.json()["data"]["properties"]] == ["Property 0"]


@pytest.mark.asyncio
async def test_list_limit_bounds(client):
    response = await client.get("/api/v1/properties", params={"limit": 101})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_partial_update(client, create_property, admin_headers):
    created = await create_property(images=["a.jpg"])

    response = await client.put(
        f"/api/v1/properties/admin/{created['id']}",
        json={"title": "Renamed"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Renamed"
    assert data["address"] == created["address"]
    assert data["images"] == ["a.jpg"]


@pytest.mark.asyncio
async def test_delete(client, create_property, admin_headers):
    created = await create_property()

    response = await client.delete(f"/api/v1/properties/admin/{created['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/properties/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_remove_image(client, create_property, admin_headers):
    created = await create_property(images=["a.jpg", "b.jpg"])
    url = f"/api/v1/properties/admin/{created['id']}/images"

    response = await client.delete(f"{url}/a.jpg", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["images"] == ["b.jpg"]

    response = await client.delete(f"{url}/a.jpg", headers=admin_headers)
    assert response.status_code == 404
