"""
Shop repository for data access operations.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select

from sellgpt.models.shop import Shop
from sellgpt.repositories.base import BaseRepository


class ShopRepository(BaseRepository[Shop]):
    """Repository for Shop model operations."""

    model = Shop

    async def get_by_domain(self, domain: str) -> Optional[Shop]:
        """Get a shop by its Shopify domain."""
        stmt = select(Shop).where(Shop.domain == domain.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_or_update(
        self,
        domain: str,
        access_token_encrypted: Optional[str],
        scopes: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> tuple[Shop, bool]:
        """
        Create a new shop or rotate the credential of an existing one.
        Returns (shop, created) tuple.
        """
        domain = domain.strip().lower()
        existing = await self.get_by_domain(domain)

        if existing:
            existing.access_token_encrypted = access_token_encrypted
            existing.scopes = scopes
            if name is not None:
                existing.name = name
            if email is not None:
                existing.email = email
            await self.session.flush()
            await self.session.refresh(existing)
            return existing, False

        shop = Shop(
            domain=domain,
            access_token_encrypted=access_token_encrypted,
            scopes=scopes,
            name=name,
            email=email,
        )
        self.session.add(shop)
        await self.session.flush()
        await self.session.refresh(shop)
        return shop, True

    async def mark_llms_generated(
        self,
        shop: Shop,
        generated_at: Optional[datetime] = None,
    ) -> Shop:
        """Record when the shop's llms.txt was last written."""
        shop.llms_generated_at = generated_at or datetime.now(timezone.utc)
        await self.session.flush()
        await self.session.refresh(shop)
        return shop

    async def clear_llms_generated(self, shop: Shop) -> Shop:
        shop.llms_generated_at = None
        await self.session.flush()
        return shop
