"""Integration tests for Lost & Found API."""

import pytest
from httpx import AsyncClient

FORM = {
    "title": "Blue umbrella",
    "description": "Left in lecture hall B.",
    "location": "Lecture Hall B",
    "category": "lost",
    "date": "2026-02-01",
    "contact_info": "sam@example.edu",
}


class TestLostFoundAPI:
    @pytest.mark.asyncio
    async def test_create_without_image(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post("/api/v1/lost-found", headers=auth_headers, data=FORM)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["category"] == "lost"
        assert data["date"] == "2026-02-01"
        assert data["image_url"] is None
        assert data["author_name"] == "Test User"

    @pytest.mark.asyncio
    async def test_create_with_image(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post(
            "/api/v1/lost-found",
            headers=auth_headers,
            data={**FORM, "category": "found"},
            files={"image": ("umbrella.png", b"\x89PNG data", "image/png")},
        )

        assert response.status_code == 201
        image_url = response.json()["data"]["image_url"]
        assert image_url.startswith("https://storage.test/lostFound/")
        assert image_url.endswith("_umbrella.png")

    @pytest.mark.asyncio
    async def test_rejects_non_image(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post(
            "/api/v1/lost-found",
            headers=auth_headers,
            data=FORM,
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_UPLOAD"

        listed = await api_client.get("/api/v1/lost-found", headers=auth_headers)
        assert listed.json()["data"] == []

    @pytest.mark.asyncio
    async def test_rejects_oversized_image(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post(
            "/api/v1/lost-found",
            headers=auth_headers,
            data=FORM,
            files={"image": ("big.jpg", b"x" * 2048, "image/jpeg")},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_category(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post(
            "/api/v1/lost-found", headers=auth_headers, data={**FORM, "category": "stolen"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_by_category(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        await api_client.post("/api/v1/lost-found", headers=auth_headers, data=FORM)
        await api_client.post(
            "/api/v1/lost-found", headers=auth_headers, data={**FORM, "category": "found"}
        )

        response = await api_client.get(
            "/api/v1/lost-found", headers=auth_headers, params={"category": "found"}
        )

        assert [item["category"] for item in response.json()["data"]] == ["found"]

    @pytest.mark.asyncio
    async def test_delete_own_report(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        created = await api_client.post("/api/v1/lost-found", headers=auth_headers, data=FORM)
        item_id = created.json()["data"]["id"]

        response = await api_client.delete(f"/api/v1/lost-found/{item_id}", headers=auth_headers)

        assert response.status_code == 204
