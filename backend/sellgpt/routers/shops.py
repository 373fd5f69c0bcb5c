"""
Shop registration API routes.
"""
from fastapi import APIRouter, status

from sellgpt.core.logging import get_logger
from sellgpt.core.security import encrypt_token
from sellgpt.routers.deps import ShopRepo
from sellgpt.schemas.shop import ShopCreate, ShopResponse
from sellgpt.services.lifecycle import handle_app_installed

logger = get_logger(__name__)

router = APIRouter(prefix="/shops", tags=["shops"])


@router.post("", response_model=ShopResponse, status_code=status.HTTP_201_CREATED)
async def create_shop(
    shop_data: ShopCreate,
    repo: ShopRepo,
) -> ShopResponse:
    """
    Register a shop after OAuth completion.

    Called by the auth-proxy after a successful install or re-install.
    Encrypts and stores the access token, then runs the install reactor.
    """
    encrypted_token = encrypt_token(shop_data.access_token) if shop_data.access_token else None

    shop, created = await repo.create_or_update(
        domain=shop_data.domain,
        access_token_encrypted=encrypted_token,
        scopes=shop_data.scopes,
        name=shop_data.name,
        email=shop_data.email,
    )

    action = "Created" if created else "Updated"
    logger.info(f"{action} shop", domain=shop.domain)

    await handle_app_installed(shop)

    return ShopResponse.model_validate(shop)

