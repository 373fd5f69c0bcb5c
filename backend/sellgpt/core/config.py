"""
Centralized configuration management with Pydantic Settings.
All environment variables are validated and typed.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SellGPT"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern="^(development|staging|production|test)$")

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database (postgresql:// is rewritten to the asyncpg driver)
    database_url: str = "sqlite+aiosqlite:///./sellgpt.db"
    database_pool_size: int = 10
    database_max_overflow: int = 5
    database_echo: bool = False

    # Security
    secret_key: str = Field(min_length=32)
    encryption_key: str = Field(min_length=32)

    # CORS - stored as comma-separated string to avoid JSON parsing issues
    allowed_origins_str: str = Field(default="https://admin.shopify.com", alias="ALLOWED_ORIGINS")

    @property
    def allowed_origins(self) -> List[str]:
        """Parse allowed origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    # Shopify
    shopify_api_key: Optional[str] = None
    shopify_api_secret: Optional[str] = None
    shopify_scopes: str = "read_products,read_online_store_navigation,write_online_store_navigation"
    shopify_api_version: str = "2024-10"
    shopify_request_timeout: float = 30.0
    shopify_products_limit: int = Field(default=250, ge=1, le=250)

    # Storefront sub-path that Shopify's app proxy forwards to /app/sellgpt
    app_proxy_path: str = "/apps/sellgpt"

    # Artifact storage
    storage_root: str = "storage/app"

    # Observability
    sentry_dsn: Optional[str] = None
    log_level: str = "INFO"

    @field_validator("app_proxy_path")
    @classmethod
    def normalize_proxy_path(cls, value: str) -> str:
        """Ensure the proxy path has a leading slash and no trailing one."""
        return "/" + value.strip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
