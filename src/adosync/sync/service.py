"""TicketSync - drives a fetch cycle from query to rendered document."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from adosync.client.exceptions import (
    DevOpsError,
    NoResponseError,
    RequestFailedError,
    ResponseParseError,
    UnexpectedShapeError,
)
from adosync.query import build_search_query_from, build_title_search_query
from adosync.sync.models import NO_TICKETS_STATUS, SyncResult
from adosync.tickets import Ticket, render

if TYPE_CHECKING:
    from adosync.client import DevOpsClient
    from adosync.query import SearchParams
    from adosync.tickets import ClassificationRule

logger = logging.getLogger(__name__)


class TicketSync:
    """Runs a search, fetches the matches in one batch and renders them.

    The batch request is only issued after the query has resolved, and only
    when it matched something. Failures propagate as ``DevOpsError``; the
    cycle is not retried.
    """

    def __init__(self, client: DevOpsClient, rule: ClassificationRule) -> None:
        self.client = client
        self.rule = rule

    async def _fetch_tickets(self, query_text: str) -> list[Ticket]:
        ids = await self.client.run_query(query_text)
        if not ids:
            return []
        fields = await self.client.fetch_batch(ids)
        return [Ticket.from_fields(f) for f in fields]

    async def fetch_document(self, params: SearchParams) -> SyncResult:
        """Fetch the tickets matching ``params`` and render them."""
        logger.info("Fetching tickets for %s (last %d days)", params.assignee, params.max_age_days)
        tickets = await self._fetch_tickets(build_search_query_from(params))
        if not tickets:
            logger.info(NO_TICKETS_STATUS)
            return SyncResult(document=None, status=NO_TICKETS_STATUS, tickets=[])

        document = render(tickets, self.rule)
        shown = len(document.ticket_ids())
        status = f"Fetched {len(tickets)} ticket(s)"
        if shown != len(tickets):
            status += f", {len(tickets) - shown} unclassified"
        logger.info(status)
        return SyncResult(document=document, status=status, tickets=tickets)

    async def lookup(self, title_substring: str) -> list[Ticket]:
        """Find tickets whose title contains a substring."""
        return await self._fetch_tickets(build_title_search_query(title_substring))


def describe_failure(error: DevOpsError) -> str:
    """Build the single user-visible notification for a failed operation.

    Transport and parse failures include the raw response for inspection.
    """
    if isinstance(error, RequestFailedError):
        return f"Request failed with status {error.status_code}:\n{error.body}"
    if isinstance(error, ResponseParseError):
        return f"Could not parse response ({error.diagnostic}):\n{error.body}"
    if isinstance(error, UnexpectedShapeError):
        return f"{error}:\n{json.dumps(error.payload, indent=2, default=str)}"
    if isinstance(error, NoResponseError):
        return f"Nothing to show: {error}"
    return str(error)
