"""REST API exposing rendered ticket documents and submissions."""

from adosync.api.app import create_app
from adosync.api.models import (
    APIResponse,
    DocumentResponse,
    TicketCreate,
    TicketUpdate,
)

__all__ = [
    "APIResponse",
    "DocumentResponse",
    "TicketCreate",
    "TicketUpdate",
    "create_app",
]
