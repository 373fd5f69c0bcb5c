"""
Error taxonomy shared by the generation pipeline, the retrieval endpoint
and the Shopify client.

Every error carries the HTTP status it maps to at the API boundary, where
it is rendered as a plain-text response.
"""
from typing import Any, Optional


class SellGPTError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(SellGPTError):
    status_code = 400


class Unauthenticated(SellGPTError):
    """No shop or session could be resolved for the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AuthenticationMissing(SellGPTError):
    """The shop record carries no access token."""

    status_code = 403

    def __init__(
        self,
        message: str = (
            "Shop is not properly authenticated. Missing access token. "
            "Please re-install the app."
        ),
    ) -> None:
        super().__init__(message)


class AuthenticationInvalid(SellGPTError):
    """Shopify rejected the access token (HTTP 401)."""

    status_code = 401

    def __init__(self, detail: Any = None) -> None:
        message = (
            "Authentication failed. The access token might be invalid or expired. "
            "Please ensure: 1) The app was properly installed, "
            "2) The API key/secret in .env matches the app credentials."
        )
        if detail:
            message = f"{message} Error: {detail}"
        super().__init__(message)
        self.detail = detail


class UpstreamError(SellGPTError):
    """Shopify answered with an error status or an error payload."""

    status_code = 500

    def __init__(self, status: Optional[int], body: Any, context: str = "Shopify API error") -> None:
        super().__init__(f"{context}: {body}")
        self.status = status
        self.body = body


class TransportError(SellGPTError):
    """Shopify could not be reached at all."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(f"Error connecting to Shopify API: {detail}")


class NotFoundError(SellGPTError):
    status_code = 404


class ShopNotFound(NotFoundError):
    def __init__(self, domain: str) -> None:
        super().__init__(f"Shop not found: {domain}")
        self.domain = domain


class ArtifactNotFound(NotFoundError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Artifact not found: {key}")
        self.key = key


class StorageError(SellGPTError):
    """Reading, writing or deleting a blob failed."""

    status_code = 500
