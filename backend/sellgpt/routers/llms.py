"""
Public llms.txt retrieval, reached through the Shopify app proxy.
"""
import asyncio
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from sellgpt.core.exceptions import ArtifactNotFound, BadRequest, ShopNotFound
from sellgpt.core.logging import get_logger
from sellgpt.routers.deps import ShopRepo, Store
from sellgpt.storage.artifacts import artifact_key

logger = get_logger(__name__)

router = APIRouter(tags=["llms"])


@router.get("/llms", response_class=PlainTextResponse)
@router.get("/app/sellgpt/llms", response_class=PlainTextResponse)
@router.get("/apps/sellgpt/llms", response_class=PlainTextResponse)
async def show(
    repo: ShopRepo,
    store: Store,
    shop: Optional[str] = None,
) -> PlainTextResponse:
    """Return the stored llms.txt for ?shop={domain} byte for byte."""
    if not shop or not shop.strip():
        raise BadRequest("Missing required query parameter: shop")

    record = await repo.get_by_domain(shop)
    if record is None:
        raise ShopNotFound(shop)

    key = artifact_key(record.id)
    try:
        content = await asyncio.to_thread(store.get, key)
    except ArtifactNotFound:
        logger.info("llms.txt requested before generation", shop=shop)
        raise

    return PlainTextResponse(content)
