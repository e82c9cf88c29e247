"""Submitter - creates and updates work items from local edits."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from adosync.client.exceptions import UnexpectedShapeError
from adosync.markup import to_remote_markup
from adosync.submitter.patch import build_create_patch, build_update_patch
from adosync.tickets.models import RICH_TEXT_FIELDS

if TYPE_CHECKING:
    from adosync.client import DevOpsClient

logger = logging.getLogger(__name__)


def _require_int(payload: Any, key: str, what: str) -> int:
    value = payload.get(key) if isinstance(payload, dict) else None
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnexpectedShapeError(f"{what} response has no '{key}'", payload)
    return value


class Submitter:
    """Turns user edits into JSON-patch submissions.

    Rich-text values arrive as Markdown and are converted to HTML here.
    Updates are last-writer-wins unless an expected revision is supplied.
    """

    def __init__(self, client: DevOpsClient) -> None:
        self.client = client

    async def submit_create(
        self,
        work_item_type: str,
        title: str,
        description: str,
        story_points: float | None,
        assignee: str,
    ) -> int:
        """Create a work item and return its id.

        Args:
            work_item_type: Type name, e.g. "Bug" or "User Story".
            title: Title of the new ticket.
            description: Description in Markdown.
            story_points: Estimate, if any.
            assignee: Identity to assign the ticket to.

        Returns:
            The id assigned by the service.

        Raises:
            UnexpectedShapeError: If the response carries no id.
        """
        patch = build_create_patch(
            title=title,
            description_html=to_remote_markup(description),
            story_points=story_points,
            assignee=assignee,
        )
        payload = await self.client.create_work_item(work_item_type, patch)
        ticket_id = _require_int(payload, "id", "Create")
        logger.info("Created %s #%d: %s", work_item_type, ticket_id, title)
        return ticket_id

    async def submit_update(
        self,
        ticket_id: int,
        changes: Mapping[str, Any],
        expected_revision: int | None = None,
    ) -> int:
        """Apply field changes to a work item and return its new revision.

        Args:
            ticket_id: Ticket to update.
            changes: New values keyed by field reference name; rich-text
                fields are Markdown.
            expected_revision: Optional precondition on the current revision.

        Raises:
            NoChangesError: If ``changes`` is empty.
            UnexpectedShapeError: If the response carries no revision.
        """
        converted = {
            str(name): to_remote_markup(value) if name in RICH_TEXT_FIELDS else value
            for name, value in changes.items()
        }
        patch = build_update_patch(converted, expected_revision=expected_revision)
        payload = await self.client.update_work_item(ticket_id, patch)
        revision = _require_int(payload, "rev", "Update")
        logger.info(
            "Updated #%d (%s) to revision %d",
            ticket_id,
            ", ".join(converted),
            revision,
        )
        return revision

