"""
Typed results for API calls.

Every request made through the core produces exactly one ``Outcome``.
OAuth token calls produce either a ``TokenSet`` or an ``OAuthError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TransportErrorKind(Enum):
    """Category of a failure below the HTTP layer."""
    CONNECT = "connect"
    TIMEOUT = "timeout"
    DNS = "dns"
    PROTOCOL = "protocol"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransportResponse:
    """Raw status code and body returned by a transport."""
    status_code: int
    body: bytes = b""


class TransportError(Exception):
    """Raised by a transport when no HTTP response was received."""

    def __init__(self, kind: TransportErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class Outcome:
    """Base class for request outcomes."""

    ok: bool = False

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Success(Outcome):
    """2xx response with a decoded JSON body."""
    body: Any
    ok = True


@dataclass(frozen=True)
class NoContent(Outcome):
    """HTTP 204."""
    ok = True


@dataclass(frozen=True)
class NotFound(Outcome):
    """HTTP 404, and HTTP 400 on GET/DELETE."""
    pass


@dataclass(frozen=True)
class Unauthorised(Outcome):
    """HTTP 401."""
    pass


@dataclass(frozen=True)
class BadRequest(Outcome):
    """HTTP 400 on POST/PUT."""
    pass


@dataclass(frozen=True)
class RawError(Outcome):
    """Any other status, carrying the undecoded body."""
    status_code: int
    body: bytes


@dataclass(frozen=True)
class TransportFailure(Outcome):
    """No usable HTTP response was received."""
    kind: TransportErrorKind
    detail: str = ""


class OAuthErrorKind(Enum):
    """Failure categories for OAuth token calls."""
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    UNEXPECTED_RESPONSE = "unexpected_response"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class OAuthError:
    """
    Typed failure of an OAuth token call.

    Attributes:
        kind: Failure category
        error: Upstream ``error`` code (e.g. "invalid_grant") for 400 responses
        status_code: HTTP status, None for transport failures
        detail: Upstream body or transport detail
    """
    kind: OAuthErrorKind
    error: str | None = None
    status_code: int | None = None
    detail: str = ""
    transport_kind: TransportErrorKind | None = None

    ok = False

    @property
    def reason(self) -> str:
        """Upstream error code when present, else the failure category."""
        return self.error or self.kind.value

    @property
    def is_transport_failure(self) -> bool:
        return self.kind == OAuthErrorKind.TRANSPORT_FAILURE
