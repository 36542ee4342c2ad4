"""Integration tests for plans and account state."""

import pytest
from httpx import AsyncClient

from infrastructure.auth.provider import TokenUser


class TestPlansAPI:
    @pytest.mark.asyncio
    async def test_list_plans_without_auth(self, app_client: AsyncClient):
        response = await app_client.get("/api/v1/plans")

        assert response.status_code == 200
        plans = {plan["id"]: plan for plan in response.json()["data"]}
        assert set(plans) == {"free", "pro"}
        assert plans["free"]["price_monthly"] is None
        assert plans["pro"]["price_monthly"] == 9.99
        assert plans["pro"]["currency"] == "USD"
        assert "analytics-dashboard" in [f["id"] for f in plans["pro"]["features"]]


class TestAccountStateAPI:
    """Integration tests for GET /api/v1/me/state."""

    @pytest.mark.asyncio
    async def test_requires_auth(self, app_client: AsyncClient):
        response = await app_client.get("/api/v1/me/state")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_new_account_is_getting_started(
        self, app_client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await app_client.get("/api/v1/me/state", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["state"] == "registered"
        assert data["label"] == "Getting Started"
        assert data["plan_id"] == "free"
        assert data["is_owner"] is False

    @pytest.mark.asyncio
    async def test_published_free_user(
        self, app_client: AsyncClient, auth_headers: dict[str, str]
    ):
        created = await app_client.post(
            "/api/v1/profiles", json={"username": "ana"}, headers=auth_headers
        )
        await app_client.patch(
            f"/api/v1/profiles/{created.json()['data']['id']}",
            json={"published": True},
            headers=auth_headers,
        )

        response = await app_client.get("/api/v1/me/state", headers=auth_headers)

        data = response.json()["data"]
        assert data["state"] == "free_user"
        assert data["is_owner"] is True
        features = {f["id"]: f for f in data["features"]}
        assert features["basic-sections"]["allowed"] is True
        assert features["analytics-dashboard"]["allowed"] is False
        assert features["analytics-dashboard"]["name"] == "Analytics Dashboard"
        assert features["analytics-dashboard"]["reason"] == (
            "Analytics Dashboard is available in the Pro plan"
        )

    @pytest.mark.asyncio
    async def test_published_pro_user(
        self,
        app_client: AsyncClient,
        auth_headers: dict[str, str],
        test_user: TokenUser,
        set_plan,
    ):
        created = await app_client.post(
            "/api/v1/profiles", json={"username": "ana"}, headers=auth_headers
        )
        await app_client.patch(
            f"/api/v1/profiles/{created.json()['data']['id']}",
            json={"published": True},
            headers=auth_headers,
        )
        await set_plan(test_user.id, "pro")

        response = await app_client.get("/api/v1/me/state", headers=auth_headers)

        data = response.json()["data"]
        assert data["state"] == "pro_user"
        assert all(f["allowed"] for f in data["features"])
