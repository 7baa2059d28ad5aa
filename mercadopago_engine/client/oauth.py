"""
OAuth 2.0 flows for Mercado Pago.

Marketplace integrations act on behalf of other Mercado Pago users (sellers).
The flow is:

1. Build the authorization URL and redirect the user to it
2. The user authorizes the application
3. Mercado Pago redirects back with ``?code=...``
4. Exchange the code for an access token and a refresh token
5. Store the tokens (caller's responsibility) along with
   ``calculate_expiry(tokens.expires_in)``
6. Pass ``tokens.access_token`` to resource calls
7. When ``is_expired(expires_at)`` turns true, call ``refresh_token``

The manager never persists tokens and never raises for protocol or network
failures; those come back as OAuthError values.
"""

import logging
import threading
import urllib.parse
from concurrent.futures import Future
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from ..core.classifier import decode_body
from ..core.credentials import CredentialSource
from ..core.models import (
    GrantType,
    HttpMethod,
    OAuthConfig,
    ResponseDecodeError,
    Settings,
    TokenSet,
)
from ..core.outcomes import OAuthError, OAuthErrorKind, TransportError
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_BUFFER_SECONDS = 300

TokenResult = TokenSet | OAuthError


class TokenLifecycle(Enum):
    """Life stage of a stored access token."""
    UNISSUED = "unissued"
    ACTIVE = "active"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def calculate_expiry(expires_in: int, now: datetime | None = None) -> datetime:
    """
    Convert a relative ``expires_in`` into an absolute UTC expiry time.

    Call this as soon as a TokenSet is received.

    Args:
        expires_in: Seconds until expiration, from the token response
        now: Reference time (defaults to the current UTC time)

    Returns:
        Timezone-aware datetime when the token expires
    """
    now = _utc(now) if now is not None else datetime.now(timezone.utc)
    return now + timedelta(seconds=expires_in)


def is_expired(
    expires_at: datetime,
    buffer_seconds: int = DEFAULT_EXPIRY_BUFFER_SECONDS,
    now: datetime | None = None,
) -> bool:
    """
    Check whether a token is expired or will expire within the buffer.

    Naive datetimes are treated as UTC.

    Args:
        expires_at: When the token expires
        buffer_seconds: Safety margin in seconds (default 5 minutes)
        now: Reference time (defaults to the current UTC time)

    Returns:
        True if ``expires_at`` falls before ``now + buffer_seconds``
    """
    now = _utc(now) if now is not None else datetime.now(timezone.utc)
    return _utc(expires_at) < now + timedelta(seconds=buffer_seconds)


def token_state(
    expires_at: datetime | None,
    buffer_seconds: int = DEFAULT_EXPIRY_BUFFER_SECONDS,
    now: datetime | None = None,
) -> TokenLifecycle:
    """
    Evaluate where a stored token sits in its lifecycle.

    Args:
        expires_at: Stored expiry, or None if no token was issued yet
        buffer_seconds: Window before expiry considered "near expiry"
        now: Reference time (defaults to the current UTC time)

    Returns:
        The TokenLifecycle stage
    """
    if expires_at is None:
        return TokenLifecycle.UNISSUED

    now = _utc(now) if now is not None else datetime.now(timezone.utc)
    if _utc(expires_at) <= now:
        return TokenLifecycle.EXPIRED
    if is_expired(expires_at, buffer_seconds, now=now):
        return TokenLifecycle.NEAR_EXPIRY
    return TokenLifecycle.ACTIVE


def _decode_error_body(body: bytes) -> dict[str, Any] | None:
    try:
        data = decode_body(body)
    except ResponseDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


class OAuthManager:
    """
    Mercado Pago OAuth 2.0 authorization code flow + token refresh.

    Supports:
    - Authorization URL generation
    - Code exchange for tokens
    - Token refresh, with concurrent refreshes of the same token coalesced
    - Application token via client credentials
    """

    def __init__(
        self,
        credential_source: CredentialSource,
        transport: Transport,
        settings: Settings | None = None,
        single_flight: bool = True,
    ):
        """
        Initialize the manager.

        Args:
            credential_source: Supplies client ID and secret
            transport: Transport used for token requests
            settings: Endpoint settings (defaults used if None)
            single_flight: Share one upstream call between concurrent
                refreshes of the same refresh token
        """
        self.credential_source = credential_source
        self.transport = transport
        self.settings = settings or Settings()
        self.single_flight = single_flight

        self._inflight: dict[str, Future] = {}
        self._inflight_lock = threading.Lock()

    def authorization_url(
        self,
        redirect_uri: str,
        state: str | None = None,
        response_type: str = "code",
    ) -> str:
        """
        Generate the URL that sends the user to Mercado Pago for authorization.

        Args:
            redirect_uri: Where Mercado Pago redirects after authorization.
                Must match the URL configured in the application settings.
            state: Optional random string to prevent CSRF; echoed in the callback
            response_type: Defaults to "code"

        Returns:
            Authorization URL to redirect the user to
        """
        params = {
            "client_id": self.credential_source.get_client_id(),
            "redirect_uri": redirect_uri,
            "response_type": response_type,
        }
        if state is not None:
            params["state"] = state

        return f"{self.settings.auth_url}?{urllib.parse.urlencode(params)}"

    def authorization_url_for(self, config: OAuthConfig) -> str:
        """Generate the authorization URL from an OAuthConfig."""
        return self.authorization_url(
            config.redirect_uri,
            state=config.state,
            response_type=config.response_type,
        )

    def exchange_code(self, code: str, redirect_uri: str) -> TokenResult:
        """
        Exchange an authorization code for access and refresh tokens.

        Args:
            code: Authorization code received in the callback
            redirect_uri: The same redirect URI used for the authorization URL

        Returns:
            TokenSet on success, OAuthError otherwise
        """
        return self._request_token(
            GrantType.AUTHORIZATION_CODE,
            {"code": code, "redirect_uri": redirect_uri},
            action="exchange code",
        )

    def refresh_token(self, refresh_token: str) -> TokenResult:
        """
        Obtain a new access token using a refresh token.

        The refresh token itself expires after about six months, after which
        the user must authorize again.

        Args:
            refresh_token: Refresh token from exchange_code or a previous refresh

        Returns:
            TokenSet on success, OAuthError otherwise
        """
        if not self.single_flight:
            return self._refresh(refresh_token)

        with self._inflight_lock:
            future = self._inflight.get(refresh_token)
            leader = future is None
            if leader:
                future = Future()
                self._inflight[refresh_token] = future

        if not leader:
            logger.debug("Joining in-flight token refresh")
            return future.result()

        try:
            result = self._refresh(refresh_token)
        except BaseException as e:
            self._finish_inflight(refresh_token)
            future.set_exception(e)
            raise

        self._finish_inflight(refresh_token)
        future.set_result(result)
        return result

    def _finish_inflight(self, refresh_token: str) -> None:
        # Unregister before resolving so no caller can join a finished refresh.
        with self._inflight_lock:
            self._inflight.pop(refresh_token, None)

    def client_credentials_token(self) -> TokenResult:
        """
        Request the application's own access token.

        Returns:
            TokenSet on success, OAuthError otherwise
        """
        return self._request_token(GrantType.CLIENT_CREDENTIALS, {}, action="obtain app token")

    def _refresh(self, refresh_token: str) -> TokenResult:
        return self._request_token(
            GrantType.REFRESH_TOKEN,
            {"refresh_token": refresh_token},
            action="refresh token",
        )

    def _request_token(
        self,
        grant_type: GrantType,
        params: dict[str, str],
        action: str,
    ) -> TokenResult:
        """
        POST a form-encoded grant to the token endpoint.

        No bearer header is sent. Only a malformed 200 body raises.
        """
        form = {
            "client_id": self.credential_source.get_client_id(),
            "client_secret": self.credential_source.get_client_secret(),
            "grant_type": grant_type.value,
        }
        form.update(params)

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        body = urllib.parse.urlencode(form).encode("utf-8")

        try:
            response = self.transport.send(HttpMethod.POST, self.settings.token_url, headers, body)
        except TransportError as e:
            logger.error(f"OAuth HTTP error during {action}: {e.kind.value} {e.detail}")
            return OAuthError(
                kind=OAuthErrorKind.TRANSPORT_FAILURE,
                detail=e.detail,
                transport_kind=e.kind,
            )

        status = response.status_code

        if status == 200:
            data = decode_body(response.body, status)
            if not isinstance(data, dict) or "access_token" not in data:
                raise ResponseDecodeError(
                    f"Token response is missing 'access_token' during {action}",
                    status_code=status,
                )
            logger.info(f"OAuth {action} succeeded")
            return TokenSet.from_dict(data)

        text = _body_text(response.body)

        if status == 400:
            error_data = _decode_error_body(response.body) or {}
            error_code = error_data.get("error")
            logger.error(f"OAuth bad request during {action}: {text}")
            return OAuthError(
                kind=OAuthErrorKind.BAD_REQUEST,
                error=error_code if isinstance(error_code, str) else None,
                status_code=status,
                detail=text,
            )

        if status == 401:
            logger.error(f"OAuth unauthorized during {action}: {text}")
            return OAuthError(kind=OAuthErrorKind.UNAUTHORIZED, status_code=status, detail=text)

        logger.error(f"OAuth unexpected status {status} during {action}: {text}")
        return OAuthError(kind=OAuthErrorKind.UNEXPECTED_RESPONSE, status_code=status, detail=text)
