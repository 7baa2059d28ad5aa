"""Core data models for the Mercado Pago engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


DEFAULT_API_BASE_URL = "https://api.mercadopago.com"
DEFAULT_AUTH_URL = "https://auth.mercadopago.com/authorization"


class HttpMethod(Enum):
    """HTTP verbs understood by the request core."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class GrantType(Enum):
    """OAuth 2.0 grant types accepted by the token endpoint."""
    CLIENT_CREDENTIALS = "client_credentials"
    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"


@dataclass(frozen=True)
class Credentials:
    """Application credentials issued by Mercado Pago."""
    client_id: str
    client_secret: str
    access_token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert Credentials to a dictionary."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "access_token": self.access_token,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Credentials":
        """Create Credentials from a dictionary."""
        return cls(
            client_id=data["client_id"],
            client_secret=data["client_secret"],
            access_token=data.get("access_token"),
        )


@dataclass(frozen=True)
class Settings:
    """Endpoint and transport settings."""
    api_base_url: str = DEFAULT_API_BASE_URL
    auth_url: str = DEFAULT_AUTH_URL
    timeout_seconds: float = 30.0

    @property
    def token_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/oauth/token"


@dataclass(frozen=True)
class RequestSpec:
    """
    Description of one outbound API call.

    The body is only allowed on POST/PUT and the idempotency key only on POST.
    """
    method: HttpMethod
    path: str
    body: Any = None
    bearer_override: str | None = None
    idempotency_key: str | None = None

    def __post_init__(self):
        if self.body is not None and self.method not in (HttpMethod.POST, HttpMethod.PUT):
            raise ValueError(f"{self.method.value} requests cannot carry a body")
        if self.idempotency_key is not None and self.method != HttpMethod.POST:
            raise ValueError("Idempotency keys are only supported on POST requests")


@dataclass(frozen=True)
class OAuthConfig:
    """Parameters used to build an authorization URL."""
    redirect_uri: str
    state: str | None = None
    response_type: str = "code"


@dataclass(frozen=True)
class TokenSet:
    """
    Tokens returned by the OAuth token endpoint.

    ``expires_in`` is relative to the moment the token was issued; convert it
    with ``calculate_expiry`` as soon as the token set is received.
    """
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    user_id: int | str | None = None
    public_key: str | None = None
    token_type: str | None = None
    scope: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenSet":
        """Create a TokenSet from a token endpoint response."""
        expires_in = data.get("expires_in")
        if expires_in is not None:
            try:
                expires_in = int(expires_in)
            except (TypeError, ValueError) as e:
                raise ResponseDecodeError(f"Invalid expires_in in token response: {expires_in!r}") from e

        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=expires_in,
            user_id=data.get("user_id"),
            public_key=data.get("public_key"),
            token_type=data.get("token_type"),
            scope=data.get("scope"),
            raw=dict(data),
        )


class MercadoPagoError(Exception):
    """Base class for errors raised by the engine."""
    pass


class ConfigError(MercadoPagoError):
    """Raised when there is an error loading or saving configuration."""
    pass


class PayloadEncodingError(MercadoPagoError):
    """Raised when a request body cannot be serialized to JSON."""
    pass


class ResponseDecodeError(MercadoPagoError):
    """Raised when a successful response does not carry valid JSON."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AppTokenError(MercadoPagoError):
    """Raised when the application token cannot be obtained."""
    pass
