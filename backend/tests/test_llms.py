"""
Tests for public llms.txt retrieval.
"""
import pytest
from httpx import AsyncClient

from sellgpt.storage.artifacts import artifact_key

from conftest import SHOP_DOMAIN


@pytest.mark.parametrize("path", ["/llms", "/app/sellgpt/llms", "/apps/sellgpt/llms"])
async def test_returns_stored_document_verbatim(async_client: AsyncClient, make_shop, store, path):
    shop = await make_shop()
    content = "# Widgets (https://widgets.myshop.com)\n\n## Products\n\n- [Blue Mug](x)  \n"
    store.put(artifact_key(shop.id), content)

    response = await async_client.get(path, params={"shop": SHOP_DOMAIN})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == content


async def test_generated_document_round_trips(async_client: AsyncClient, make_shop, auth_headers, store):
    shop = await make_shop()
    await async_client.get("/api/generate", headers=auth_headers)

    response = await async_client.get("/llms", params={"shop": SHOP_DOMAIN})

    assert response.status_code == 200
    assert response.text == store.get(artifact_key(shop.id))
    assert "- [Blue Mug](https://widgets.myshop.com/products/blue-mug)" in response.text


async def test_missing_shop_parameter_is_400(async_client: AsyncClient):
    response = await async_client.get("/llms")

    assert response.status_code == 400
    assert "shop" in response.text


async def test_unknown_shop_is_404_naming_domain(async_client: AsyncClient):
    response = await async_client.get("/llms", params={"shop": "ghost.myshopify.com"})

    assert response.status_code == 404
    assert "ghost.myshopify.com" in response.text


async def test_not_generated_yet_is_404(async_client: AsyncClient, make_shop):
    await make_shop()

    response = await async_client.get("/llms", params={"shop": SHOP_DOMAIN})

    assert response.status_code == 404
