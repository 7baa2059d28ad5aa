"""
HTTP layer: transport, request core, OAuth flows and the client builder.
"""

from .transport import Transport, HttpxTransport, classify_httpx_error
from .request_core import RequestCore, build_headers, encode_body, IDEMPOTENCY_HEADER
from .oauth import (
    OAuthManager,
    TokenLifecycle,
    calculate_expiry,
    is_expired,
    token_state,
)
from .app_token import ClientCredentialsSource
from .builder import MercadoPagoClient, build_client

__all__ = [
    "Transport",
    "HttpxTransport",
    "classify_httpx_error",
    "RequestCore",
    "build_headers",
    "encode_body",
    "IDEMPOTENCY_HEADER",
    "OAuthManager",
    "TokenLifecycle",
    "calculate_expiry",
    "is_expired",
    "token_state",
    "ClientCredentialsSource",
    "MercadoPagoClient",
    "build_client",
]
