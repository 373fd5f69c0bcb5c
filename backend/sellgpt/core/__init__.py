"""
Core package containing configuration, database, security, logging and errors.
"""
from sellgpt.core.config import settings
from sellgpt.core.database import Base, DbSession, get_db_session
from sellgpt.core.logging import configure_logging, get_logger
from sellgpt.core.security import (
    decode_session_token,
    decrypt_token,
    encrypt_token,
    verify_shopify_hmac,
)

__all__ = [
    "settings",
    "Base",
    "DbSession",
    "get_db_session",
    "configure_logging",
    "get_logger",
    "encrypt_token",
    "decrypt_token",
    "decode_session_token",
    "verify_shopify_hmac",
]
