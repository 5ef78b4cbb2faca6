"""Integration tests for Notices API."""

import pytest
from httpx import AsyncClient

NOTICE = {
    "title": "Library hours",
    "content": "The library closes early on Friday.",
    "category": "general",
    "priority": "high",
}


class TestNoticesAPI:
    """Integration tests for Notices API."""

    @pytest.mark.asyncio
    async def test_student_cannot_post(
        self, api_client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await api_client.post("/api/v1/notices", headers=auth_headers, json=NOTICE)

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_admin_posts_notice(
        self,
        api_client: AsyncClient,
        admin_headers: dict[str, str],
        auth_headers: dict[str, str],
    ) -> None:
        response = await api_client.post("/api/v1/notices", headers=admin_headers, json=NOTICE)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["priority"] == "high"
        assert data["created_by"] == "Admin User"
        assert data["expiry_date"] is None

        listed = await api_client.get("/api/v1/notices", headers=auth_headers)
        assert [n["title"] for n in listed.json()["data"]] == ["Library hours"]

    @pytest.mark.asyncio
    async def test_expired_notices_hidden_by_default(
        self, api_client: AsyncClient, admin_headers: dict[str, str]
    ) -> None:
        await api_client.post(
            "/api/v1/notices",
            headers=admin_headers,
            json={**NOTICE, "title": "Old", "expiry_date": "2000-01-01"},
        )

        hidden = await api_client.get("/api/v1/notices", headers=admin_headers)
        shown = await api_client.get(
            "/api/v1/notices", headers=admin_headers, params={"include_expired": "true"}
        )

        assert hidden.json()["data"] == []
        assert [n["title"] for n in shown.json()["data"]] == ["Old"]

    @pytest.mark.asyncio
    async def test_invalid_priority(
        self, api_client: AsyncClient, admin_headers: dict[str, str]
    ) -> None:
        response = await api_client.post(
            "/api/v1/notices", headers=admin_headers, json={**NOTICE, "priority": "urgent"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_notice(
        self, api_client: AsyncClient, admin_headers: dict[str, str]
    ) -> None:
        created = await api_client.post("/api/v1/notices", headers=admin_headers, json=NOTICE)
        notice_id = created.json()["data"]["id"]

        response = await api_client.delete(f"/api/v1/notices/{notice_id}", headers=admin_headers)
        assert response.status_code == 204

        again = await api_client.delete(f"/api/v1/notices/{notice_id}", headers=admin_headers)
        assert again.status_code == 404
