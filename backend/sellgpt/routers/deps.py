"""
Shared router dependencies.
"""
from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from sellgpt.core.database import get_db_session
from sellgpt.core.exceptions import Unauthenticated
from sellgpt.core.security import decode_session_token, shop_domain_from_claims
from sellgpt.models.shop import Shop
from sellgpt.repositories.shop import ShopRepository
from sellgpt.services.generator import LlmsTxtGenerator
from sellgpt.storage.artifacts import ArtifactStore, get_artifact_store


async def get_shop_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ShopRepository:
    """Dependency to get shop repository."""
    return ShopRepository(session)


ShopRepo = Annotated[ShopRepository, Depends(get_shop_repository)]
Store = Annotated[ArtifactStore, Depends(get_artifact_store)]


async def get_current_shop(
    repo: ShopRepo,
    authorization: Annotated[Optional[str], Header()] = None,
) -> Shop:
    """
    Resolve the shop behind an App Bridge session token.

    Raises Unauthenticated when the header is missing, the token is invalid
    or the shop never installed the app.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthenticated()

    claims = decode_session_token(authorization.split(" ", 1)[1].strip())
    if claims is None:
        raise Unauthenticated()

    domain = shop_domain_from_claims(claims)
    if not domain:
        raise Unauthenticated()

    shop = await repo.get_by_domain(domain)
    if shop is None:
        raise Unauthenticated()
    return shop


CurrentShop = Annotated[Shop, Depends(get_current_shop)]


async def get_generator(repo: ShopRepo, store: Store) -> LlmsTxtGenerator:
    return LlmsTxtGenerator(repo, store)
