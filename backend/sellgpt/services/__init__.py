"""
Services package for business logic layer.
"""
from sellgpt.services.generator import GenerationResult, LlmsTxtGenerator
from sellgpt.services.llms_renderer import render_llms_txt
from sellgpt.services.redirects import ensure_redirect
from sellgpt.services.shopify_client import CatalogClient, RestResponse, ShopifyRestClient

__all__ = [
    "ShopifyRestClient",
    "RestResponse",
    "CatalogClient",
    "render_llms_txt",
    "ensure_redirect",
    "LlmsTxtGenerator",
    "GenerationResult",
]
