"""
Shared fixtures: in-memory database, temporary artifact store, mocked
Shopify transport and an async client bound to the app.
"""
import json
import os
import time
from typing import Any, Callable

# Settings are read at import time
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-with-at-least-32-chars")
os.environ.setdefault("SHOPIFY_API_KEY", "test-api-key")
os.environ.setdefault("SHOPIFY_API_SECRET", "test-api-secret")

import httpx
import pytest
from fastapi import Depends
from jose import jwt
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sellgpt.core.config import settings
from sellgpt.core.database import Base, get_db_session
from sellgpt.core.security import encrypt_token
from sellgpt.main import app
from sellgpt.models.shop import Shop
from sellgpt.repositories.shop import ShopRepository
from sellgpt.routers.deps import get_generator, get_shop_repository
from sellgpt.services.generator import LlmsTxtGenerator
from sellgpt.services.shopify_client import ShopifyRestClient
from sellgpt.storage.artifacts import LocalArtifactStore, get_artifact_store

SHOP_DOMAIN = "widgets.myshop.com"
ACCESS_TOKEN = "shpat_test_123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(tmp_path) -> LocalArtifactStore:
    return LocalArtifactStore(tmp_path / "storage")


@pytest.fixture
def make_shop(session_factory) -> Callable:
    """Persist a shop in its own committed transaction."""

    async def _make_shop(
        domain: str = SHOP_DOMAIN,
        access_token: str | None = ACCESS_TOKEN,
        **fields: Any,
    ) -> Shop:
        async with session_factory() as session:
            shop = Shop(
                domain=domain,
                access_token_encrypted=encrypt_token(access_token) if access_token else None,
                scopes="read_products",
                **fields,
            )
            session.add(shop)
            await session.commit()
            await session.refresh(shop)
            return shop

    return _make_shop


@pytest.fixture
def shop_lookup(session_factory) -> Callable:
    """Read a shop back through a fresh session."""

    async def _lookup(domain: str = SHOP_DOMAIN) -> Shop | None:
        async with session_factory() as session:
            return await ShopRepository(session).get_by_domain(domain)

    return _lookup


# ============================================
# Shopify fakes
# ============================================

@pytest.fixture
def shop_payload() -> dict:
    return {
        "shop": {
            "id": 1,
            "name": "Widgets",
            "domain": SHOP_DOMAIN,
            "primary_locale": "en",
            "currency": "USD",
            "iana_timezone": "America/New_York",
            "created_at": "2024-01-01T00:00:00-05:00",
            "customer_email": "help@widgets.example",
            "updated_at": "2024-06-01T00:00:00-05:00",
        }
    }


@pytest.fixture
def products_payload() -> dict:
    return {
        "products": [
            {
                "id": 101,
                "title": "Blue Mug",
                "handle": "blue-mug",
                "body_html": "<p>A <strong>sturdy</strong> mug.</p>",
                "vendor": "Widgets Co",
                "product_type": "Mugs",
                "updated_at": "2024-05-01T10:00:00-05:00",
                "status": "active",
                "variants": [
                    {
                        "id": 1001,
                        "title": "Default Title",
                        "price": "9.99",
                        "inventory_policy": "deny",
                        "inventory_quantity": 5,
                    }
                ],
                "images": [{"src": "https://cdn.example/blue-mug.png"}],
            }
        ]
    }


class FakeShopify:
    """Routes REST Admin requests to canned responses and records them."""

    def __init__(self, routes: dict[tuple[str, str], Any]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path.rsplit("/", 1)[-1])
        route = self.routes.get(key)
        if route is None and request.method == "PUT":
            route = self.routes.get(("PUT", "*"))
        if route is None:
            return httpx.Response(404, json={"errors": "Not Found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def calls(self, method: str, name: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.endswith(name)
        ]

    def json_body(self, request: httpx.Request) -> dict:
        return json.loads(request.content)

    def client_factory(self, domain: str, token: str) -> ShopifyRestClient:
        return ShopifyRestClient(domain, token, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_shopify(shop_payload, products_payload) -> FakeShopify:
    return FakeShopify({
        ("GET", "shop.json"): shop_payload,
        ("GET", "products.json"): products_payload,
        ("GET", "redirects.json"): {"redirects": []},
        ("POST", "redirects.json"): {"redirect": {"id": 7, "path": "/llms.txt"}},
    })


# ============================================
# App client
# ============================================

@pytest.fixture
async def async_client(session_factory, store, fake_shopify):
    async def override_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def override_generator(
        repo: ShopRepository = Depends(get_shop_repository),
    ) -> LlmsTxtGenerator:
        return LlmsTxtGenerator(repo, store, fake_shopify.client_factory)

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_artifact_store] = lambda: store
    app.dependency_overrides[get_generator] = override_generator

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def session_token(domain: str = SHOP_DOMAIN, **claims: Any) -> str:
    now = int(time.time())
    payload = {
        "iss": f"https://{domain}/admin",
        "dest": f"https://{domain}",
        "aud": settings.shopify_api_key,
        "sub": "42",
        "nbf": now - 10,
        "iat": now - 10,
        "exp": now + 60,
        **claims,
    }
    return jwt.encode(payload, settings.shopify_api_secret, algorithm="HS256")


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {session_token()}"}
