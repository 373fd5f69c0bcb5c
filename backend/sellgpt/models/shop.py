"""
Shop model - represents a Shopify store that installed the app.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from sellgpt.core.database import Base


class Shop(Base):
    """Installed shop with its encrypted offline access token."""

    __tablename__ = "shops"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    domain: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Empty until OAuth completes; rotated on every re-install
    access_token_encrypted: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    scopes: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )

    # Set after every successful llms.txt write, cleared on uninstall
    llms_generated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def has_access_token(self) -> bool:
        return bool(self.access_token_encrypted)

    def __repr__(self) -> str:
        return f"<Shop {self.domain}>"
