"""Core components for the Mercado Pago engine."""

from .models import (
    HttpMethod,
    GrantType,
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
)
from .outcomes import (
    Outcome,
    Success,
    NoContent,
    NotFound,
    Unauthorised,
    BadRequest,
    RawError,
    TransportFailure,
    TransportResponse,
    TransportError,
    TransportErrorKind,
    OAuthError,
    OAuthErrorKind,
)
from .classifier import classify, decode_body
from .credentials import CredentialSource, StaticCredentialSource
from .config_store import (
    get_base_dir,
    profile_config_path,
    save_json,
    load_json,
    save_credentials,
    load_credentials,
    load_settings,
)

__all__ = [
    "HttpMethod",
    "GrantType",
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
    "TransportResponse",
    "TransportError",
    "TransportErrorKind",
    "OAuthError",
    "OAuthErrorKind",
    "classify",
    "decode_body",
    "CredentialSource",
    "StaticCredentialSource",
    "get_base_dir",
    "profile_config_path",
    "save_json",
    "load_json",
    "save_credentials",
    "load_credentials",
    "load_settings",
]
