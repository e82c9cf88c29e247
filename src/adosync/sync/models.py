"""Data models for the Sync service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adosync.tickets import Document, Ticket

NO_TICKETS_STATUS = "No tickets found"


@dataclass
class SyncResult:
    """Result of a fetch cycle.

    Attributes:
        document: Rendered document, or None when nothing matched.
        status: Informational message for the user.
        tickets: Tickets fetched in this cycle, in query order.
    """

    document: Document | None
    status: str
    tickets: list[Ticket] | None = None

    @property
    def found(self) -> bool:
        return self.document is not None
