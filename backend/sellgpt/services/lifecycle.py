"""
Shop lifecycle reactors: install, uninstall and the mandatory GDPR webhooks.

Reactors never raise. Failures are logged and the webhook is still
acknowledged.
"""
import asyncio
from typing import Any, Optional

from sellgpt.core.logging import get_logger, token_fingerprint
from sellgpt.models.shop import Shop
from sellgpt.repositories.shop import ShopRepository
from sellgpt.storage.artifacts import ArtifactStore, artifact_key

logger = get_logger(__name__)


def _customer_fields(payload: dict[str, Any]) -> dict[str, Any]:
    customer = payload.get("customer") or {}
    return {
        "customer_id": customer.get("id"),
        "orders_requested": payload.get("orders_requested") or payload.get("orders_to_redact"),
    }


def delete_artifact(store: ArtifactStore, shop_id: str, domain: str, reason: str) -> bool:
    """Delete a shop's llms.txt if present. Returns True when a file was removed."""
    key = artifact_key(shop_id)
    log = logger.bind(shop_id=shop_id, shop=domain, key=key, reason=reason)
    try:
        if not store.exists(key):
            log.info("llms.txt not found (may have been deleted already)")
            return False
        store.delete(key)
    except Exception as e:
        log.error("Error deleting llms.txt", error=str(e))
        return False

    log.info("Deleted llms.txt")
    return True


async def handle_app_installed(shop: Optional[Shop]) -> None:
    """Log what the install left behind. Generation stays an explicit action."""
    if shop is None:
        logger.error("Shop not found after installation")
        return

    logger.info(
        "App installed",
        shop_id=str(shop.id),
        shop=shop.domain,
        shop_name=shop.name,
        scopes=shop.scopes,
        **token_fingerprint(shop.access_token_encrypted),
    )


async def handle_app_uninstalled(
    repo: ShopRepository,
    store: ArtifactStore,
    shop: Shop,
) -> None:
    """
    Forget a shop: clear its timestamp, delete its record and its llms.txt.

    Each step is attempted even when an earlier one failed.
    """
    shop_id = str(shop.id)
    domain = shop.domain

    try:
        await repo.clear_llms_generated(shop)
        await repo.delete(shop)
        logger.info("Deleted shop record on uninstall", shop_id=shop_id, shop=domain)
    except Exception as e:
        logger.error("Error deleting shop record on uninstall", shop_id=shop_id, shop=domain, error=str(e))
        await repo.session.rollback()

    await asyncio.to_thread(delete_artifact, store, shop_id, domain, "app_uninstalled")


async def handle_customers_data_request(domain: str, payload: dict[str, Any]) -> None:
    # No customer-level data is stored, so there is nothing to export
    logger.info(
        "Customer data request received (GDPR compliance)",
        shop=domain,
        **_customer_fields(payload),
    )


async def handle_customers_redact(domain: str, payload: dict[str, Any]) -> None:
    # No customer-level data is stored, so there is nothing to delete
    logger.info(
        "Customer data redaction request received (GDPR compliance)",
        shop=domain,
        **_customer_fields(payload),
    )


async def handle_shop_redact(
    repo: ShopRepository,
    store: ArtifactStore,
    domain: str,
    payload: dict[str, Any],
) -> None:
    """Delete the shop's llms.txt after a shop/redact request."""
    logger.info(
        "Shop data redaction request received (GDPR compliance)",
        shop=domain,
        payload_shop_id=payload.get("shop_id"),
        payload_shop_domain=payload.get("shop_domain"),
    )

    try:
        shop = await repo.get_by_domain(domain)
    except Exception as e:
        logger.error("Error processing shop redaction request", shop=domain, error=str(e))
        return

    if shop is None:
        logger.warning("Shop not found for redaction request", shop=domain)
        return

    await asyncio.to_thread(delete_artifact, store, str(shop.id), shop.domain, "shop_redact")
