"""
Builder module for assembling a ready-to-use Mercado Pago client.

``build_client`` ties together configuration, the credential source, the
transport, the request core, the OAuth manager and the resource wrappers.
"""

import logging

from ..core.config_store import load_credentials, load_settings
from ..core.credentials import CredentialSource, StaticCredentialSource
from ..core.models import Credentials, Settings
from ..resources import (
    IdentificationTypes,
    MerchantOrders,
    Payments,
    PointOfSale,
    Preferences,
)
from .app_token import ClientCredentialsSource
from .oauth import OAuthManager
from .request_core import RequestCore
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class MercadoPagoClient:
    """Facade exposing the request core, OAuth flows and resource wrappers."""

    def __init__(
        self,
        credential_source: CredentialSource,
        transport: Transport,
        settings: Settings | None = None,
    ):
        self.settings = settings or Settings()
        self.credential_source = credential_source
        self.transport = transport

        self.core = RequestCore(credential_source, transport, self.settings)
        self.oauth = OAuthManager(credential_source, transport, self.settings)

        self.preferences = Preferences(self.core)
        self.merchant_orders = MerchantOrders(self.core)
        self.point_of_sale = PointOfSale(self.core)
        self.payments = Payments(self.core)
        self.identification_types = IdentificationTypes(self.core)

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def build_client(
    credentials: Credentials | None = None,
    settings: Settings | None = None,
    transport: Transport | None = None,
    profile: str = "default",
) -> MercadoPagoClient:
    """
    Build a MercadoPagoClient.

    Args:
        credentials: Application credentials (loaded from config if None)
        settings: Endpoint settings (loaded from the environment if None)
        transport: Transport to use (an HttpxTransport is created if None)
        profile: Config profile used when credentials are loaded

    Returns:
        Configured MercadoPagoClient

    Raises:
        ConfigError: If credentials or settings cannot be loaded

    Example:
        >>> with build_client() as client:
        ...     outcome = client.payments.show("123")
    """
    if credentials is None:
        credentials = load_credentials(profile)
    if settings is None:
        settings = load_settings()
    if transport is None:
        transport = HttpxTransport(timeout_seconds=settings.timeout_seconds)

    if credentials.access_token:
        source: CredentialSource = StaticCredentialSource(credentials)
    else:
        logger.debug("No access token configured, using client credentials")
        source = ClientCredentialsSource(credentials, transport, settings)

    return MercadoPagoClient(source, transport, settings)
