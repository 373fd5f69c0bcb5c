"""
Schemas for llms.txt generation, the status page and webhook acknowledgments.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerateResponse(BaseModel):
    """Successful /api/generate response."""

    success: bool
    message: str
    filename: str
    path: str
    redirect_url: str
    warnings: list[str] = Field(default_factory=list)


class StatusResponse(BaseModel):
    """What the embedded app home shows for the current shop."""

    shop: str
    has_artifact: bool
    llms_generated_at: Optional[datetime] = None
    llms_url: str


class WebhookAck(BaseModel):
    success: bool = True
