"""Transport Client - async access to the work item tracking REST API."""

from adosync.client.client import API_VERSION, DevOpsClient
from adosync.client.exceptions import (
    DevOpsError,
    NoResponseError,
    RequestFailedError,
    ResponseParseError,
    UnexpectedShapeError,
)

__all__ = [
    "API_VERSION",
    "DevOpsClient",
    "DevOpsError",
    "NoResponseError",
    "RequestFailedError",
    "ResponseParseError",
    "UnexpectedShapeError",
]
