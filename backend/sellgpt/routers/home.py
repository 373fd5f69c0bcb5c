"""
Embedded app home: llms.txt status for the authenticated shop.
"""
import asyncio

from fastapi import APIRouter

from sellgpt.core.config import settings
from sellgpt.routers.deps import CurrentShop, Store
from sellgpt.schemas.llms import StatusResponse
from sellgpt.storage.artifacts import artifact_key

router = APIRouter(tags=["home"])


@router.get("/", response_model=StatusResponse)
async def home(shop: CurrentShop, store: Store) -> StatusResponse:
    """Report whether an llms.txt exists for the current shop."""
    return StatusResponse(
        shop=shop.domain,
        has_artifact=await asyncio.to_thread(store.exists, artifact_key(shop.id)),
        llms_generated_at=shop.llms_generated_at,
        llms_url=f"https://{shop.domain}/llms.txt",
    )
