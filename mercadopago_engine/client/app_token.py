"""Credential source that obtains the app token through client credentials."""

import logging
import threading
from datetime import datetime

from ..core.credentials import CredentialSource
from ..core.models import AppTokenError, Credentials, Settings
from ..core.outcomes import OAuthError, TransportError
from .oauth import OAuthManager, calculate_expiry, is_expired
from .transport import Transport

logger = logging.getLogger(__name__)


class ClientCredentialsSource(CredentialSource):
    """
    Credential source that fetches and caches the application token.

    The token is requested on first use and again once it is within
    ``buffer_seconds`` of expiring. Concurrent callers wait on one request.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Transport,
        settings: Settings | None = None,
        buffer_seconds: int = 300,
    ):
        self.credentials = credentials
        self.buffer_seconds = buffer_seconds
        self._oauth = OAuthManager(self, transport, settings, single_flight=False)

        self._token: str | None = None
        self._expires_at: datetime | None = None
        self._lock = threading.Lock()

    def get_client_id(self) -> str:
        return self.credentials.client_id

    def get_client_secret(self) -> str:
        return self.credentials.client_secret

    def get_app_token(self) -> str:
        with self._lock:
            if self._token and not self._needs_refresh():
                return self._token

            result = self._oauth.client_credentials_token()
            if isinstance(result, OAuthError):
                if result.is_transport_failure:
                    raise TransportError(result.transport_kind, result.detail)
                raise AppTokenError(f"Error getting access token: {result.reason} {result.detail}".strip())

            self._token = result.access_token
            self._expires_at = (
                calculate_expiry(result.expires_in) if result.expires_in is not None else None
            )
            logger.info("Access token obtained successfully.")
            return self._token

    def _needs_refresh(self) -> bool:
        if self._expires_at is None:
            return False
        return is_expired(self._expires_at, self.buffer_seconds)

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        with self._lock:
            self._token = None
            self._expires_at = None
