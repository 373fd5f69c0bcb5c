"""
Shopify REST Admin API client.

`ShopifyRestClient` is the generic request primitive: it returns
`RestResponse(status, body, errors)` and only raises for transport-level
failures. `CatalogClient` builds the shop and product reads on top of it
and classifies upstream errors into the domain taxonomy.
"""
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from sellgpt.core.config import settings
from sellgpt.core.exceptions import (
    AuthenticationInvalid,
    AuthenticationMissing,
    TransportError,
    UpstreamError,
)
from sellgpt.core.logging import get_logger

logger = get_logger(__name__)


def to_plain(value: Any) -> Any:
    """
    Recursively convert mapping/sequence wrappers into plain dicts and lists.

    Callers downstream of the client only ever see builtin containers.
    """
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [to_plain(v) for v in value]
    return value


@dataclass
class RestResponse:
    """Outcome of a REST call that reached Shopify."""

    status: int
    body: Any
    errors: bool


class ShopifyRestClient:
    """
    Async REST Admin API client bound to one shop and one access token.

    No retries: failures surface immediately to the caller.
    """

    BASE_URL = "https://{domain}/admin/api/{version}"

    def __init__(
        self,
        shop_domain: str,
        access_token: Optional[str],
        *,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not access_token:
            raise AuthenticationMissing()

        self.shop_domain = shop_domain
        self.access_token = access_token
        self.api_version = api_version or settings.shopify_api_version
        self.timeout = timeout or settings.shopify_request_timeout
        self.base_url = self.BASE_URL.format(domain=shop_domain, version=self.api_version)
        self._transport = transport

    def _url(self, path: str) -> str:
        path = path.lstrip("/")
        # Accept legacy "/admin/products.json" style paths
        if path.startswith("admin/"):
            path = path[len("admin/"):]
        return f"{self.base_url}/{path}"

    async def rest(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> RestResponse:
        """
        Issue a REST request.

        Args:
            method: HTTP verb
            path: Path relative to /admin/api/{version}/, e.g. "products.json"
            params: Query string parameters
            payload: JSON body

        Returns:
            RestResponse with a plain dict/list body

        Raises:
            TransportError: When Shopify could not be reached
        """
        headers = {
            "Accept": "application/json",
            "X-Shopify-Access-Token": self.access_token,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method.upper(),
                    self._url(path),
                    params=params,
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(
                "Shopify request failed",
                shop=self.shop_domain,
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        body = to_plain(body)
        errors = not response.is_success or (isinstance(body, dict) and "errors" in body)

        logger.info(
            "Shopify API response",
            shop=self.shop_domain,
            method=method,
            path=path,
            status=response.status_code,
            has_errors=errors,
        )
        return RestResponse(status=response.status_code, body=body, errors=errors)


class CatalogClient:
    """Reads shop metadata and the product catalog for llms.txt generation."""

    PRODUCT_FIELDS = (
        "id",
        "title",
        "handle",
        "body_html",
        "vendor",
        "product_type",
        "updated_at",
        "status",
        "variants",
        "images",
    )

    def __init__(self, rest_client: ShopifyRestClient) -> None:
        self.rest_client = rest_client

    @property
    def shop_domain(self) -> str:
        return self.rest_client.shop_domain

    def _raise_for_errors(self, response: RestResponse, context: str) -> None:
        if not response.errors:
            return

        detail = response.body
        if isinstance(detail, dict) and "errors" in detail:
            detail = detail["errors"]

        if response.status == 401:
            logger.error(
                "Shopify API authentication failed",
                shop=self.shop_domain,
                api_version=self.rest_client.api_version,
                error=detail,
            )
            raise AuthenticationInvalid(detail)

        logger.error(
            context,
            shop=self.shop_domain,
            status=response.status,
            body=detail,
        )
        raise UpstreamError(response.status, detail, context=context)

    async def fetch_shop(self) -> dict[str, Any]:
        """Get shop metadata (name, locale, currency, timezone, ...)."""
        response = await self.rest_client.rest("GET", "shop.json")
        self._raise_for_errors(response, "Error fetching shop")

        body = response.body if isinstance(response.body, dict) else {}
        shop = body.get("shop")
        return shop if isinstance(shop, dict) else {}

    async def fetch_products(self) -> list[dict[str, Any]]:
        """Get up to `shopify_products_limit` products with the fields the renderer needs."""
        response = await self.rest_client.rest(
            "GET",
            "products.json",
            params={
                "limit": settings.shopify_products_limit,
                "fields": ",".join(self.PRODUCT_FIELDS),
            },
        )
        self._raise_for_errors(response, "Error fetching products")

        body = response.body if isinstance(response.body, dict) else {}
        products = body.get("products") or []
        if not products:
            logger.info("Shop has no products", shop=self.shop_domain)
        return [p for p in products if isinstance(p, dict)]
