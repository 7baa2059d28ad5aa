"""Base class for credential sources."""

from abc import ABC, abstractmethod

from .models import ConfigError, Credentials


class CredentialSource(ABC):
    """
    Abstract supplier of application credentials.

    The request core and the OAuth manager receive a source at construction
    time and only ever read from it.
    """

    @abstractmethod
    def get_client_id(self) -> str:
        """
        Return the application's client ID.

        Returns:
            Client ID string
        """
        pass

    @abstractmethod
    def get_client_secret(self) -> str:
        """
        Return the application's client secret.

        Returns:
            Client secret string
        """
        pass

    @abstractmethod
    def get_app_token(self) -> str:
        """
        Return the application's own bearer token.

        Returns:
            Access token string

        Raises:
            ConfigError: If no token is available
            AppTokenError: If the token endpoint refused the request
            TransportError: If the token endpoint could not be reached
        """
        pass


class StaticCredentialSource(CredentialSource):
    """Credential source backed by a fixed Credentials value."""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def get_client_id(self) -> str:
        return self.credentials.client_id

    def get_client_secret(self) -> str:
        return self.credentials.client_secret

    def get_app_token(self) -> str:
        if not self.credentials.access_token:
            raise ConfigError(
                "No application access token configured. "
                "Set MERCADOPAGO_ACCESS_TOKEN or use client credentials."
            )
        return self.credentials.access_token
