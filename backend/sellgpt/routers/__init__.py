"""
API routers package.
"""
from sellgpt.routers.generate import router as generate_router
from sellgpt.routers.health import router as health_router
from sellgpt.routers.home import router as home_router
from sellgpt.routers.llms import router as llms_router
from sellgpt.routers.shops import router as shops_router
from sellgpt.routers.webhooks import router as webhooks_router

__all__ = [
    "health_router",
    "home_router",
    "generate_router",
    "llms_router",
    "shops_router",
    "webhooks_router",
]
