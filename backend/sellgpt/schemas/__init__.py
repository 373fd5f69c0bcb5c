"""
Pydantic schemas package.
"""
from sellgpt.schemas.llms import GenerateResponse, StatusResponse, WebhookAck
from sellgpt.schemas.shop import ShopBase, ShopCreate, ShopResponse

__all__ = [
    # Shop
    "ShopBase",
    "ShopCreate",
    "ShopResponse",
    # llms.txt
    "GenerateResponse",
    "StatusResponse",
    "WebhookAck",
]
