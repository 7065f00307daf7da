"""
Standardized error handling for the Apps Script client.
Classifies failures and builds failure responses.
"""
import traceback
from typing import Any

import httpx

from config import ERROR_BODY_PREVIEW_CHARS
from lib.common import is_blank, log, ng
from lib.types import AppsScriptResponse

FETCH_FAILED_MESSAGE = (
    "Network error: Failed to fetch. Check network connection, "
    "CORS setup on Apps Script, or Apps Script URL."
)
UNKNOWN_ERROR_MESSAGE = "An unknown network or client-side error occurred while sending data."

# Fields a server error body may override, with the type each must have
_SERVER_FIELDS: dict[str, type | None] = {
    "message": str,
    "data": None,
    "updates": int,
    "sheet": str,
    "errorDetails": None,
    "receivedPayload": None,
}

_FETCH_FAILURE_TYPES = (
    httpx.NetworkError,
    httpx.ConnectTimeout,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
    httpx.UnsupportedProtocol,
    httpx.InvalidURL,
)


def http_error(status: int, reason: str) -> AppsScriptResponse:
    """Create the default response for a non-2xx HTTP status."""
    return ng(f"HTTP error {status}: {reason}")


def _accepts(field: str, value: Any) -> bool:
    expected = _SERVER_FIELDS[field]
    if expected is None:
        return True
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


def merge_server_error(default: AppsScriptResponse, body: Any) -> AppsScriptResponse:
    """
    Override a default error response with fields from a server error body.

    A server field wins only when it is known, non-blank and well-typed.
    `success` is never taken from the body: the HTTP status decides it.

    Args:
        default: Response built from the HTTP status
        body: Parsed JSON error body (any shape)

    Returns:
        A new response; `default` is not modified.
    """
    merged: dict[str, Any] = dict(default)
    if not isinstance(body, dict):
        return merged  # type: ignore[return-value]

    for field in _SERVER_FIELDS:
        value = body.get(field)
        if is_blank(value):
            continue
        if not _accepts(field, value):
            log(f"Ignoring ill-typed '{field}' in Apps Script error body:", repr(value))
            continue
        merged[field] = value
    return merged  # type: ignore[return-value]


def is_fetch_failure(exc: BaseException) -> bool:
    """Check whether an exception means the endpoint could not be reached at all."""
    if isinstance(exc, _FETCH_FAILURE_TYPES):
        return True
    text = str(exc).lower()
    return "failed to fetch" in text or "fetch failed" in text


def exception_details(exc: BaseException) -> dict[str, str]:
    """Describe an exception as name/message/stack."""
    return {
        "name": type(exc).__name__,
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }


def client_error(exc: BaseException) -> AppsScriptResponse:
    """Create a response for an exception raised while building or sending a request."""
    if is_fetch_failure(exc):
        message = FETCH_FAILED_MESSAGE
    elif str(exc):
        message = str(exc)
    else:
        message = UNKNOWN_ERROR_MESSAGE
    return ng(message, errorDetails=exception_details(exc))


def protocol_error(status: int, body_text: str, exc: BaseException) -> AppsScriptResponse:
    """Create a response for a 2xx reply whose body is not a JSON object."""
    details: dict[str, Any] = exception_details(exc)
    details["status"] = status
    details["body"] = body_text[:ERROR_BODY_PREVIEW_CHARS]
    return ng(f"Invalid response from Apps Script (HTTP {status}): {exc}", errorDetails=details)


def bad_request(message: str) -> AppsScriptResponse:
    """Create a response for invalid tool input."""
    return ng(message)
