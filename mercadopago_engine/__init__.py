"""
Mercado Pago API client.

Most integrations only need ``build_client``; the request core, the OAuth
manager and the outcome types are re-exported for callers that wire things
up themselves.
"""

from .core import (
    HttpMethod,
    Credentials,
    Settings,
    RequestSpec,
    OAuthConfig,
    TokenSet,
    MercadoPagoError,
    ConfigError,
    PayloadEncodingError,
    ResponseDecodeError,
    AppTokenError,
    Outcome,
    Success,
    NoContent,
    NotFound,
    Unauthorised,
    BadRequest,
    RawError,
    TransportFailure,
    TransportErrorKind,
    OAuthError,
    OAuthErrorKind,
    CredentialSource,
    StaticCredentialSource,
    classify,
)
from .client import (
    HttpxTransport,
    RequestCore,
    OAuthManager,
    TokenLifecycle,
    ClientCredentialsSource,
    MercadoPagoClient,
    build_client,
    calculate_expiry,
    is_expired,
    token_state,
)

__all__ = [
    "HttpMethod",
    "Credentials",
    "Settings",
    "RequestSpec",
    "OAuthConfig",
    "TokenSet",
    "MercadoPagoError",
    "ConfigError",
    "PayloadEncodingError",
    "ResponseDecodeError",
    "AppTokenError",
    "Outcome",
    "Success",
    "NoContent",
    "NotFound",
    "Unauthorised",
    "BadRequest",
    "RawError",
    "TransportFailure",
    "TransportErrorKind",
    "OAuthError",
    "OAuthErrorKind",
    "CredentialSource",
    "StaticCredentialSource",
    "classify",
    "HttpxTransport",
    "RequestCore",
    "OAuthManager",
    "TokenLifecycle",
    "ClientCredentialsSource",
    "MercadoPagoClient",
    "build_client",
    "calculate_expiry",
    "is_expired",
    "token_state",
]
