"""Custom exceptions for the Transport Client."""

from __future__ import annotations

from typing import Any


class DevOpsError(Exception):
    """Base exception for remote service errors."""


class RequestFailedError(DevOpsError):
    """The service answered with a non-200 status.

    The raw body is kept for inspection and is never parsed as ticket data.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class NoResponseError(DevOpsError):
    """Nothing usable came back: connection failure or an empty body."""


class ResponseParseError(DevOpsError):
    """The response body is not well-formed JSON."""

    def __init__(self, diagnostic: str, body: str) -> None:
        super().__init__(f"Could not parse response: {diagnostic}")
        self.diagnostic = diagnostic
        self.body = body


class UnexpectedShapeError(DevOpsError):
    """The JSON parsed but lacks an expected key."""

    def __init__(self, message: str, payload: Any) -> None:
        super().__init__(message)
        self.payload = payload
