"""Classification of raw transport results into typed outcomes."""

import json
from typing import Any

from .models import HttpMethod, ResponseDecodeError
from .outcomes import (
    BadRequest,
    NoContent,
    NotFound,
    Outcome,
    RawError,
    Success,
    TransportError,
    TransportErrorKind,
    TransportFailure,
    TransportResponse,
    Unauthorised,
)

# Status codes that carry a JSON body, per method
_SUCCESS_STATUSES: dict[HttpMethod, frozenset[int]] = {
    HttpMethod.GET: frozenset({200}),
    HttpMethod.POST: frozenset({200, 201}),
    HttpMethod.PUT: frozenset({200, 201}),
    HttpMethod.DELETE: frozenset({200}),
}

# GET and DELETE report 400 as not found
_BAD_REQUEST_AS_NOT_FOUND = frozenset({HttpMethod.GET, HttpMethod.DELETE})


def decode_body(body: bytes | str, status_code: int | None = None) -> Any:
    """
    Decode a JSON response body.

    Args:
        body: Raw response body
        status_code: Status code, used only for the error message

    Returns:
        The decoded JSON value

    Raises:
        ResponseDecodeError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        raise ResponseDecodeError(
            f"Malformed JSON in {status_code} response: {e}",
            status_code=status_code,
        ) from e


def classify(method: HttpMethod, result: Any) -> Outcome:
    """
    Map a transport result onto exactly one Outcome.

    Args:
        method: HTTP method of the request
        result: TransportResponse, or the TransportError raised by the transport

    Returns:
        The matching Outcome

    Raises:
        ResponseDecodeError: If a 200/201 body is not valid JSON
    """
    if isinstance(result, TransportError):
        return TransportFailure(kind=result.kind, detail=result.detail)

    if not isinstance(result, TransportResponse):
        return TransportFailure(
            kind=TransportErrorKind.UNKNOWN,
            detail=f"Unrecognised transport result: {type(result).__name__}",
        )

    status = result.status_code

    if status in _SUCCESS_STATUSES[method]:
        return Success(body=decode_body(result.body, status))
    if status == 204:
        return NoContent()
    if status == 404:
        return NotFound()
    if status == 401:
        return Unauthorised()
    if status == 400:
        if method in _BAD_REQUEST_AS_NOT_FOUND:
            return NotFound()
        return BadRequest()

    return RawError(status_code=status, body=result.body)
