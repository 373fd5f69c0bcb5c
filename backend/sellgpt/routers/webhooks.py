"""
Shopify webhook endpoints: app uninstall and the mandatory GDPR topics.

Every delivery is HMAC-verified. Once verified, the response is always a
200 acknowledgment; reactor failures are logged, not returned.
"""
import json
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from sellgpt.core.logging import get_logger
from sellgpt.core.security import verify_shopify_hmac
from sellgpt.routers.deps import ShopRepo, Store
from sellgpt.schemas.llms import WebhookAck
from sellgpt.services import lifecycle

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@dataclass
class WebhookDelivery:
    domain: str
    payload: dict[str, Any]


async def verified_webhook(
    request: Request,
    x_shopify_hmac_sha256: Annotated[Optional[str], Header()] = None,
    x_shopify_shop_domain: Annotated[Optional[str], Header()] = None,
) -> WebhookDelivery:
    """Check the signature and decode the body of a webhook delivery."""
    body = await request.body()

    if not verify_shopify_hmac(x_shopify_hmac_sha256, body):
        logger.warning("Rejected webhook with invalid HMAC", path=request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook signature")

    try:
        payload = json.loads(body or b"{}")
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    domain = x_shopify_shop_domain or payload.get("shop_domain") or payload.get("myshopify_domain") or ""
    return WebhookDelivery(domain=str(domain).strip().lower(), payload=payload)


Delivery = Annotated[WebhookDelivery, Depends(verified_webhook)]


@router.post("/app/uninstalled", response_model=WebhookAck)
async def app_uninstalled(delivery: Delivery, repo: ShopRepo, store: Store) -> WebhookAck:
    try:
        shop = await repo.get_by_domain(delivery.domain)
    except Exception as e:
        logger.error("Error resolving shop on uninstall", shop=delivery.domain, error=str(e))
        return WebhookAck()

    if shop is None:
        logger.warning("Uninstall received for unknown shop", shop=delivery.domain)
        return WebhookAck()

    await lifecycle.handle_app_uninstalled(repo, store, shop)
    return WebhookAck()


@router.post("/customers/data_request", response_model=WebhookAck)
async def customers_data_request(delivery: Delivery) -> WebhookAck:
    await lifecycle.handle_customers_data_request(delivery.domain, delivery.payload)
    return WebhookAck()


@router.post("/customers/redact", response_model=WebhookAck)
async def customers_redact(delivery: Delivery) -> WebhookAck:
    await lifecycle.handle_customers_redact(delivery.domain, delivery.payload)
    return WebhookAck()


@router.post("/shop/redact", response_model=WebhookAck)
async def shop_redact(delivery: Delivery, repo: ShopRepo, store: Store) -> WebhookAck:
    await lifecycle.handle_shop_redact(repo, store, delivery.domain, delivery.payload)
    return WebhookAck()
