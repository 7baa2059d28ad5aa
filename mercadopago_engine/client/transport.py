"""
HTTP transport abstraction.

A transport sends one request and returns the raw status code and body, or
raises TransportError when no HTTP response was received.
"""

import logging
import socket
from abc import ABC, abstractmethod

import httpx

from ..core.models import HttpMethod
from ..core.outcomes import TransportError, TransportErrorKind, TransportResponse

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract HTTP transport. Implementations must allow concurrent sends."""

    @abstractmethod
    def send(
        self,
        method: HttpMethod,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        """
        Send a request.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers
            body: Encoded request body, if any

        Returns:
            TransportResponse with status code and raw body

        Raises:
            TransportError: On connection, DNS, timeout or protocol failures
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass


def _is_dns_failure(error: BaseException) -> bool:
    """Walk the exception chain looking for a resolver error."""
    seen = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, socket.gaierror):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_httpx_error(error: httpx.RequestError) -> TransportErrorKind:
    """
    Map an httpx request error onto a TransportErrorKind.

    Args:
        error: The httpx exception

    Returns:
        The matching kind
    """
    if isinstance(error, httpx.TimeoutException):
        return TransportErrorKind.TIMEOUT
    if isinstance(error, httpx.ConnectError):
        if _is_dns_failure(error):
            return TransportErrorKind.DNS
        return TransportErrorKind.CONNECT
    if isinstance(error, httpx.NetworkError):
        return TransportErrorKind.CONNECT
    if isinstance(error, (httpx.ProtocolError, httpx.DecodingError)):
        return TransportErrorKind.PROTOCOL
    return TransportErrorKind.UNKNOWN


class HttpxTransport(Transport):
    """
    Transport backed by an httpx.Client.

    One httpx.Client is shared by all calls; it is safe for concurrent use
    from multiple threads and pools connections.
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the transport.

        Args:
            http_client: Optional httpx client (created if None)
            timeout_seconds: Request timeout in seconds
        """
        self.timeout_seconds = timeout_seconds

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client(timeout=timeout_seconds)
        else:
            self.http_client = http_client

    def send(
        self,
        method: HttpMethod,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        try:
            response = self.http_client.request(
                method=method.value,
                url=url,
                headers=headers,
                content=body,
            )
        except httpx.RequestError as e:
            kind = classify_httpx_error(e)
            logger.debug(f"{method.value} {url} failed at transport level: {kind.value}")
            raise TransportError(kind, str(e)) from e

        return TransportResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
