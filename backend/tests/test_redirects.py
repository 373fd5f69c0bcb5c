"""
Tests for /llms.txt redirect registration.
"""
import httpx

from sellgpt.services.redirects import ensure_redirect, redirect_target

from conftest import FakeShopify

TARGET = "https://widgets.myshop.com/apps/sellgpt/llms"


def test_redirect_target_uses_proxy_path():
    assert redirect_target("widgets.myshop.com") == TARGET


async def test_creates_redirect_when_none_exists():
    shopify = FakeShopify({
        ("GET", "redirects.json"): {"redirects": []},
        ("POST", "redirects.json"): {"redirect": {"id": 7}},
    })
    client = shopify.client_factory("widgets.myshop.com", "token")

    warning = await ensure_redirect(client, "widgets.myshop.com")

    assert warning is None
    lookup = shopify.calls("GET", "redirects.json")[0]
    assert lookup.url.params["path"] == "llms.txt"
    assert lookup.url.params["limit"] == "1"
    created = shopify.calls("POST", "redirects.json")[0]
    assert shopify.json_body(created) == {"redirect": {"path": "/llms.txt", "target": TARGET}}


async def test_updates_existing_redirect():
    shopify = FakeShopify({
        ("GET", "redirects.json"): {"redirects": [{"id": 55, "path": "/llms.txt", "target": "https://old"}]},
        ("PUT", "*"): {"redirect": {"id": 55}},
    })
    client = shopify.client_factory("widgets.myshop.com", "token")

    warning = await ensure_redirect(client, "widgets.myshop.com")

    assert warning is None
    assert shopify.calls("POST", "redirects.json") == []
    updated = shopify.calls("PUT", "redirects/55.json")[0]
    assert shopify.json_body(updated) == {"redirect": {"id": 55, "target": TARGET}}


async def test_failures_become_warnings():
    shopify = FakeShopify({
        ("GET", "redirects.json"): {"redirects": []},
        ("POST", "redirects.json"): httpx.Response(422, json={"errors": {"path": ["has already been taken"]}}),
    })
    client = shopify.client_factory("widgets.myshop.com", "token")

    warning = await ensure_redirect(client, "widgets.myshop.com")

    assert warning is not None
    assert "not registered" in warning


async def test_transport_failures_become_warnings():
    shopify = FakeShopify({
        ("GET", "redirects.json"): httpx.ConnectError("network down"),
    })
    client = shopify.client_factory("widgets.myshop.com", "token")

    warning = await ensure_redirect(client, "widgets.myshop.com")

    assert warning is not None
    assert "network down" in warning
