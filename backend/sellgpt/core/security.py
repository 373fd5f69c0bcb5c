"""
Security utilities: access token encryption, Shopify session tokens and
webhook signatures.
"""
import base64
import hashlib
import hmac as hmac_lib
from typing import Any
from urllib.parse import urlparse

from cryptography.fernet import Fernet, InvalidToken
from jose import JWTError, jwt

from sellgpt.core.config import settings
from sellgpt.core.logging import get_logger

logger = get_logger(__name__)

SESSION_TOKEN_ALGORITHM = "HS256"


def derive_fernet_key(secret: str) -> bytes:
    """Derive a Fernet-compatible key from the encryption key."""
    key = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(key)


# Token encryption
_fernet = Fernet(derive_fernet_key(settings.encryption_key))


def encrypt_token(token: str) -> str:
    """Encrypt a token for secure storage."""
    return _fernet.encrypt(token.encode()).decode()


def decrypt_token(encrypted_token: str) -> str:
    """Decrypt a stored token."""
    try:
        return _fernet.decrypt(encrypted_token.encode()).decode()
    except (InvalidToken, ValueError) as e:
        logger.error("Failed to decrypt token", error=str(e) or type(e).__name__)
        raise ValueError("Invalid encrypted token") from e


def decode_session_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate an App Bridge session token.

    Session tokens are HS256 JWTs signed with the app's API secret. The
    audience is checked only when an API key is configured.
    """
    if not settings.shopify_api_secret:
        logger.warning("Shopify API secret not configured, session tokens rejected")
        return None

    try:
        return jwt.decode(
            token,
            settings.shopify_api_secret,
            algorithms=[SESSION_TOKEN_ALGORITHM],
            audience=settings.shopify_api_key,
            options={"verify_aud": bool(settings.shopify_api_key)},
        )
    except JWTError as e:
        logger.warning("Invalid session token", error=str(e))
        return None


def shop_domain_from_claims(claims: dict[str, Any]) -> str | None:
    """Extract the shop hostname from the `dest` claim (https://{shop})."""
    dest = claims.get("dest")
    if not dest:
        return None
    return urlparse(dest).hostname or None


def verify_shopify_hmac(hmac_header: str | None, body: bytes) -> bool:
    """Verify Shopify webhook HMAC signature."""
    if not settings.shopify_api_secret:
        logger.warning("Shopify API secret not configured, HMAC verification skipped")
        return False
    if not hmac_header:
        return False

    computed_hmac = base64.b64encode(
        hmac_lib.new(
            settings.shopify_api_secret.encode(),
            body,
            hashlib.sha256,
        ).digest()
    ).decode()
    return hmac_lib.compare_digest(computed_hmac, hmac_header)
