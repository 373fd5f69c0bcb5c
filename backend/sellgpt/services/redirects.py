"""
Storefront redirect registration.

Points the public /llms.txt path of a shop at this app's proxy endpoint.
Best-effort: callers receive a warning string instead of an exception.
"""
from typing import Any, Optional

from sellgpt.core.config import settings
from sellgpt.core.exceptions import SellGPTError
from sellgpt.core.logging import get_logger
from sellgpt.services.shopify_client import RestResponse, ShopifyRestClient

logger = get_logger(__name__)

REDIRECT_PATH = "/llms.txt"


def redirect_target(shop_domain: str) -> str:
    return f"https://{shop_domain}{settings.app_proxy_path}/llms"


def _first_redirect(response: RestResponse) -> Optional[dict[str, Any]]:
    body = response.body if isinstance(response.body, dict) else {}
    redirects = body.get("redirects") or []
    if redirects and isinstance(redirects[0], dict):
        return redirects[0]
    return None


async def ensure_redirect(client: ShopifyRestClient, shop_domain: str) -> Optional[str]:
    """
    Create or update the /llms.txt redirect for a shop.

    Returns:
        None on success, otherwise a human-readable warning
    """
    target = redirect_target(shop_domain)

    try:
        lookup = await client.rest(
            "GET",
            "redirects.json",
            params={"path": REDIRECT_PATH.lstrip("/"), "limit": 1},
        )
        if lookup.errors:
            raise SellGPTError(f"redirect lookup failed ({lookup.status}): {lookup.body}")

        existing = _first_redirect(lookup)
        if existing:
            response = await client.rest(
                "PUT",
                f"redirects/{existing['id']}.json",
                payload={"redirect": {"id": existing["id"], "target": target}},
            )
            action = "update"
        else:
            response = await client.rest(
                "POST",
                "redirects.json",
                payload={"redirect": {"path": REDIRECT_PATH, "target": target}},
            )
            action = "create"

        if response.errors:
            raise SellGPTError(f"redirect {action} request failed ({response.status}): {response.body}")

    except Exception as e:
        logger.warning(
            "Could not register llms.txt redirect",
            shop=shop_domain,
            target=target,
            error=str(e),
        )
        return f"Redirect for {REDIRECT_PATH} was not registered: {e}"

    logger.info("llms.txt redirect registered", shop=shop_domain, target=target, action=action)
    return None
