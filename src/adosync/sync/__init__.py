"""Sync - the query, batch fetch and render cycle."""

from adosync.sync.models import NO_TICKETS_STATUS, SyncResult
from adosync.sync.service import TicketSync, describe_failure

__all__ = [
    "NO_TICKETS_STATUS",
    "SyncResult",
    "TicketSync",
    "describe_failure",
]
