"""
llms.txt generation trigger.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from sellgpt.core.logging import get_logger
from sellgpt.routers.deps import CurrentShop, get_generator
from sellgpt.schemas.llms import GenerateResponse
from sellgpt.services.generator import LlmsTxtGenerator

logger = get_logger(__name__)

router = APIRouter(tags=["llms"])


@router.get("/generate", response_model=GenerateResponse)
async def generate(
    shop: CurrentShop,
    generator: Annotated[LlmsTxtGenerator, Depends(get_generator)],
) -> GenerateResponse:
    """
    Regenerate llms.txt for the current shop.

    Failures are rendered as plain text by the SellGPTError handler
    (401 invalid token, 403 missing token, 500 upstream or storage).
    """
    result = await generator.generate(shop)

    if result.warnings:
        logger.warning("Generation finished with warnings", shop=shop.domain, warnings=result.warnings)

    return GenerateResponse(
        success=result.success,
        message=result.message,
        filename=result.filename,
        path=result.path,
        redirect_url=result.redirect_url,
        warnings=result.warnings,
    )
