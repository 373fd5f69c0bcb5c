"""
llms.txt generation pipeline.

validate shop -> open API session -> fetch shop -> fetch products -> render
-> write artifact -> stamp shop -> register redirect (best-effort).

Every failure before the write aborts the run and leaves any previous
artifact untouched. The shop timestamp is only stamped after the write
succeeded; redirect problems are reported as warnings, never as failure.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Callable, Optional

from sellgpt.core.exceptions import AuthenticationInvalid, AuthenticationMissing, Unauthenticated
from sellgpt.core.logging import get_logger, token_fingerprint
from sellgpt.core.security import decrypt_token
from sellgpt.models.shop import Shop
from sellgpt.repositories.shop import ShopRepository
from sellgpt.services.llms_renderer import render_llms_txt
from sellgpt.services.redirects import ensure_redirect, redirect_target
from sellgpt.services.shopify_client import CatalogClient, ShopifyRestClient
from sellgpt.storage.artifacts import ArtifactStore, artifact_key

logger = get_logger(__name__)

ClientFactory = Callable[[str, str], ShopifyRestClient]


@dataclass
class GenerationResult:
    """Primary outcome plus auxiliary warnings from best-effort steps."""

    success: bool
    message: str
    filename: str
    path: str
    redirect_url: str
    product_count: int = 0
    warnings: list[str] = field(default_factory=list)


class LlmsTxtGenerator:
    """Generates and stores the llms.txt document for one shop at a time."""

    def __init__(
        self,
        repo: ShopRepository,
        store: ArtifactStore,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.repo = repo
        self.store = store
        self.client_factory = client_factory or ShopifyRestClient

    def _open_session(self, shop: Shop) -> ShopifyRestClient:
        try:
            access_token = decrypt_token(shop.access_token_encrypted or "")
        except ValueError:
            raise AuthenticationInvalid("stored access token could not be decrypted") from None
        return self.client_factory(shop.domain, access_token)

    async def generate(self, shop: Optional[Shop]) -> GenerationResult:
        """
        Run the pipeline for a shop.

        Raises:
            Unauthenticated: No shop resolved for the request
            AuthenticationMissing: Shop has no access token
            AuthenticationInvalid: Shopify rejected the token
            UpstreamError / TransportError: Catalog could not be fetched
            StorageError: Artifact could not be written
        """
        if shop is None:
            raise Unauthenticated()
        if not shop.has_access_token:
            logger.warning("Generation refused, shop has no access token", shop=shop.domain)
            raise AuthenticationMissing()

        log = logger.bind(shop=shop.domain, shop_id=str(shop.id))
        log.info("Generating llms.txt", **token_fingerprint(shop.access_token_encrypted))

        client = self._open_session(shop)
        catalog = CatalogClient(client)

        shop_info = await catalog.fetch_shop()
        products = await catalog.fetch_products()

        document = render_llms_txt(shop_info, products, f"https://{shop.domain}")

        key = artifact_key(shop.id)
        await asyncio.to_thread(self.store.put, key, document)
        await self.repo.mark_llms_generated(shop)
        log.info("llms.txt stored", key=key, products=len(products), size=len(document))

        warnings: list[str] = []
        warning = await ensure_redirect(client, shop.domain)
        if warning:
            warnings.append(warning)

        return GenerationResult(
            success=True,
            message=f"llms.txt generated successfully with {len(products)} products",
            filename=key,
            path=self.store.location(key),
            redirect_url=redirect_target(shop.domain),
            product_count=len(products),
            warnings=warnings,
        )
