"""
Shop Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ShopBase(BaseModel):
    """Base shop schema with common fields."""

    domain: str = Field(..., min_length=1, max_length=255)


class ShopCreate(ShopBase):
    """Schema for registering a shop after OAuth."""

    access_token: Optional[str] = Field(None, alias="accessToken")
    scopes: str = ""
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ShopResponse(ShopBase):
    """Schema for shop API responses. The credential is never echoed back."""

    id: UUID
    name: Optional[str] = None
    scopes: str
    has_access_token: bool = Field(alias="hasAccessToken")
    llms_generated_at: Optional[datetime] = Field(None, alias="llmsGeneratedAt")
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
