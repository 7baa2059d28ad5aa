"""
Request Core

Builds authenticated requests against the Mercado Pago API and turns every
response into a typed Outcome.
"""

import json
import logging
from typing import Any

from ..core.classifier import classify
from ..core.credentials import CredentialSource
from ..core.models import HttpMethod, PayloadEncodingError, RequestSpec, Settings
from ..core.outcomes import (
    NotFound,
    Outcome,
    RawError,
    TransportError,
    TransportFailure,
    Unauthorised,
)
from .transport import Transport

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "X-Idempotency-Key"


def build_headers(access_token: str, idempotency_key: str | None = None) -> dict[str, str]:
    """
    Build request headers for an authenticated call.

    Args:
        access_token: Bearer token to send
        idempotency_key: Optional idempotency key; the header is left out when None

    Returns:
        A new header dict
    """
    headers = {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
    }
    if idempotency_key is not None:
        headers[IDEMPOTENCY_HEADER] = idempotency_key
    return headers


def encode_body(body: Any) -> bytes:
    """
    Serialize a request body to JSON.

    Raises:
        PayloadEncodingError: If the body is not JSON serializable
    """
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PayloadEncodingError(f"Request body is not JSON serializable: {e}") from e


class RequestCore:
    """
    Generic authenticated request layer.

    Features:
    - Bearer token resolution (per-call override or the app token)
    - Idempotency header for POST requests
    - Total classification of responses into Outcome values
    - No retries; callers own retry policy
    """

    def __init__(
        self,
        credential_source: CredentialSource,
        transport: Transport,
        settings: Settings | None = None,
    ):
        """
        Initialize the request core.

        Args:
            credential_source: Supplies the app token when no override is given
            transport: Transport used to send requests
            settings: Endpoint settings (defaults used if None)
        """
        self.credential_source = credential_source
        self.transport = transport
        self.settings = settings or Settings()

    def _build_url(self, path: str) -> str:
        """
        Build full URL from base URL and path.

        Args:
            path: API path (e.g., "/v1/payments/123")

        Returns:
            Full URL
        """
        base_url = self.settings.api_base_url.rstrip("/")
        path = path.lstrip("/")
        return f"{base_url}/{path}"

    def _resolve_token(self, spec: RequestSpec) -> str:
        if spec.bearer_override is not None:
            return spec.bearer_override
        return self.credential_source.get_app_token()

    def execute(self, spec: RequestSpec) -> Outcome:
        """
        Execute one API call.

        Args:
            spec: The request to send

        Returns:
            Exactly one Outcome describing the result

        Raises:
            PayloadEncodingError: If the body cannot be serialized
            ResponseDecodeError: If a 200/201 response is not valid JSON
        """
        body = encode_body(spec.body) if spec.method in (HttpMethod.POST, HttpMethod.PUT) else None

        idempotency_key = spec.idempotency_key if spec.method == HttpMethod.POST else None
        url = self._build_url(spec.path)

        try:
            # A lazily fetched app token may itself fail on the network.
            headers = build_headers(self._resolve_token(spec), idempotency_key)
            result = self.transport.send(spec.method, url, headers, body)
        except TransportError as e:
            result = e

        outcome = classify(spec.method, result)
        self._log_outcome(spec, result, outcome)
        return outcome

    def _log_outcome(self, spec: RequestSpec, result: Any, outcome: Outcome) -> None:
        status_code = getattr(result, "status_code", None)
        extra = {
            "method": spec.method.value,
            "path": spec.path,
            "status_code": status_code,
            "outcome": outcome.name,
        }
        message = f"{spec.method.value} {spec.path} returned {status_code}: {outcome.name}"

        try:
            if outcome.ok:
                logger.info(message, extra=extra)
            elif isinstance(outcome, (NotFound, Unauthorised)):
                logger.warning(message, extra=extra)
            elif isinstance(outcome, TransportFailure):
                logger.error(
                    f"{spec.method.value} {spec.path} failed: {outcome.kind.value} {outcome.detail}",
                    extra=extra,
                )
            elif isinstance(outcome, RawError):
                logger.error(f"{message} {outcome.body!r}", extra=extra)
            else:
                logger.error(message, extra=extra)
        except Exception:  # logging must never change the outcome
            pass

    # ===== VERB HELPERS =====

    def get(self, path: str, access_token: str | None = None) -> Outcome:
        """Make a GET request, optionally on behalf of another user."""
        return self.execute(RequestSpec(HttpMethod.GET, path, bearer_override=access_token))

    def post(
        self,
        path: str,
        data: Any,
        access_token: str | None = None,
        idempotency_key: str | None = None,
    ) -> Outcome:
        """
        Make a POST request.

        Args:
            path: API path (e.g., "/v1/payments")
            data: Request body as a dict or list
            access_token: Optional OAuth token to act on behalf of another user
            idempotency_key: Optional key sent as X-Idempotency-Key for safe retries
        """
        return self.execute(
            RequestSpec(
                HttpMethod.POST,
                path,
                body=data,
                bearer_override=access_token,
                idempotency_key=idempotency_key,
            )
        )

    def put(self, path: str, data: Any, access_token: str | None = None) -> Outcome:
        """Make a PUT request, optionally on behalf of another user."""
        return self.execute(
            RequestSpec(HttpMethod.PUT, path, body=data, bearer_override=access_token)
        )

    def delete(self, path: str, access_token: str | None = None) -> Outcome:
        """Make a DELETE request, optionally on behalf of another user."""
        return self.execute(RequestSpec(HttpMethod.DELETE, path, bearer_override=access_token))
