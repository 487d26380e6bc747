"""
Error contract for the Xenfo API client.

Every failed request, whatever endpoint it hit and however it failed,
surfaces to the caller as a single APIError. Callers branch on its fields
rather than on exception subclasses:

    try:
        await client.login("alice", "hunter2")
    except APIError as e:
        if e.requires_mfa:
            code = input("2FA code: ")
            await client.do_2fa("alice", "hunter2", code, e.mfa_continuation)
        else:
            print(e.message)

The helpers in this module turn transport exceptions and failed responses
into APIError values. They return the error; the dispatcher raises it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Classification of a failed request."""

    # Backend rejected the request with a well-formed {"error": ...} body.
    BACKEND = "backend"
    # No response was received (connection refused, DNS failure, timeout).
    TRANSPORT = "transport"
    # Backend answered with an error whose body does not follow the contract.
    UNEXPECTED = "unexpected"
    # Backend answered 2xx but the payload could not be decoded or validated.
    INVALID_RESPONSE = "invalid_response"


@dataclass
class APIError(Exception):
    """
    Exception raised when an API request fails.

    Attributes:
        message: Human-readable, sentence-cased, period-terminated message.
        kind: What went wrong, see ErrorKind.
        status_code: HTTP status code, 0 when no response was received.
        mfa_continuation: Opaque token the backend returns when a login must
            continue through a second factor. Pass it as the ``id`` of
            do_2fa().

    Example:
        try:
            await client.get_user_profile("42")
        except APIError as e:
            print(f"{e.kind.value} error {e.status_code}: {e.message}")
    """

    message: str
    kind: ErrorKind = ErrorKind.BACKEND
    status_code: int = 0
    mfa_continuation: str | None = None

    def __str__(self) -> str:
        """Return the user-facing message."""
        return self.message

    @property
    def requires_mfa(self) -> bool:
        """True if the login flow must continue with a 2FA code."""
        return self.mfa_continuation is not None


# =============================================================================
# NORMALIZATION
# =============================================================================


def format_error_message(raw: str) -> str:
    """
    Turn a backend error description into a display sentence.

    The first character is upper-cased and a trailing period is added
    unless one is already present.

    Example:
        >>> format_error_message("invalid credentials")
        'Invalid credentials.'
    """
    text = raw.strip()
    message = text[:1].upper() + text[1:]
    if not message.endswith("."):
        message += "."
    return message


def _extract_mfa(body: dict[str, Any]) -> str | None:
    mfa = body.get("mfa")
    if isinstance(mfa, str) and mfa:
        return mfa
    return None


def error_from_response(response: httpx.Response) -> APIError:
    """
    Build an APIError from a non-2xx response.

    A body of the form ``{"error": "...", "mfa"?: "..."}`` yields a BACKEND
    error. Anything else (non-JSON, not an object, missing or blank
    ``error``) yields an UNEXPECTED error carrying only the status code.
    """
    status = response.status_code

    try:
        decoded = response.json()
    except ValueError:
        decoded = None

    body: dict[str, Any] = decoded if isinstance(decoded, dict) else {}
    raw = body.get("error")
    if not isinstance(raw, str) or not raw.strip():
        logger.debug("Error response with status %d did not match the error contract", status)
        return APIError(
            message=f"Unexpected response from the server (status {status}).",
            kind=ErrorKind.UNEXPECTED,
            status_code=status,
        )

    error = APIError(
        message=format_error_message(raw),
        kind=ErrorKind.BACKEND,
        status_code=status,
        mfa_continuation=_extract_mfa(body),
    )
    logger.debug(
        "Backend rejected request with status %d (mfa required: %s)",
        status,
        error.requires_mfa,
    )
    return error


def error_from_transport(exc: httpx.RequestError, base_url: str) -> APIError:
    """
    Build an APIError for a request that never received a response.

    Args:
        exc: The httpx transport exception.
        base_url: Server the request was sent to, used in the message.
    """
    if isinstance(exc, httpx.TimeoutException):
        message = f"Request to {base_url} timed out."
    else:
        message = f"Unable to reach the server at {base_url}."

    logger.warning("Transport failure talking to %s: %s", base_url, exc)
    return APIError(message=message, kind=ErrorKind.TRANSPORT, status_code=0)


def invalid_response(status_code: int) -> APIError:
    """APIError for a 2xx payload that could not be decoded or validated."""
    return APIError(
        message="Received an invalid response from the server.",
        kind=ErrorKind.INVALID_RESPONSE,
        status_code=status_code,
    )
