"""
Tests for shop registration endpoints.
"""
import pytest
from httpx import AsyncClient

from sellgpt.core.security import decrypt_token


@pytest.fixture
def sample_shop_data() -> dict:
    return {
        "domain": "Widgets.MyShop.com",
        "accessToken": "shpat_test_123",
        "scopes": "read_products,write_online_store_navigation",
        "name": "Widgets",
    }


async def test_create_shop(async_client: AsyncClient, sample_shop_data: dict, shop_lookup):
    response = await async_client.post("/api/shops", json=sample_shop_data)

    assert response.status_code == 201
    data = response.json()
    assert data["domain"] == "widgets.myshop.com"
    assert data["hasAccessToken"] is True
    assert data["llmsGeneratedAt"] is None
    assert "accessToken" not in data

    shop = await shop_lookup("widgets.myshop.com")
    assert decrypt_token(shop.access_token_encrypted) == "shpat_test_123"


async def test_reinstall_rotates_token(async_client: AsyncClient, sample_shop_data: dict, shop_lookup):
    first = await async_client.post("/api/shops", json=sample_shop_data)
    second = await async_client.post(
        "/api/shops",
        json={**sample_shop_data, "accessToken": "shpat_rotated"},
    )

    assert first.json()["id"] == second.json()["id"]
    shop = await shop_lookup("widgets.myshop.com")
    assert decrypt_token(shop.access_token_encrypted) == "shpat_rotated"


async def test_create_shop_without_token(async_client: AsyncClient):
    response = await async_client.post("/api/shops", json={"domain": "bare.myshopify.com"})

    assert response.status_code == 201
    assert response.json()["hasAccessToken"] is False


async def test_shop_details_are_not_exposed(async_client: AsyncClient, sample_shop_data: dict):
    await async_client.post("/api/shops", json=sample_shop_data)

    response = await async_client.get("/api/shops/widgets.myshop.com")

    assert response.status_code in (404, 405)
    assert "hasAccessToken" not in response.text
