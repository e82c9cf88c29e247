"""Ticket endpoints: rendered document, lookup, create and update."""

from typing import Any

from fastapi import APIRouter, Query, status

from adosync.api.dependencies import SettingsDep, SubmitterDep, TicketSyncDep
from adosync.api.models import (
    APIResponse,
    DocumentResponse,
    TicketCreate,
    TicketCreated,
    TicketResponse,
    TicketUpdate,
    TicketUpdated,
    document_to_response,
    ticket_to_response,
)
from adosync.query import SearchParams
from adosync.query.models import DEFAULT_MAX_AGE_DAYS
from adosync.tickets import WorkItemField

router = APIRouter(prefix="/tickets", tags=["tickets"])

# Request attribute -> field reference name
_UPDATE_FIELDS = {
    "title": WorkItemField.TITLE,
    "state": WorkItemField.STATE,
    "description": WorkItemField.DESCRIPTION,
    "acceptance_criteria": WorkItemField.ACCEPTANCE_CRITERIA,
    "story_points": WorkItemField.STORY_POINTS,
    "iteration_path": WorkItemField.ITERATION_PATH,
}


@router.get("", response_model=APIResponse[DocumentResponse])
async def get_document(
    sync: TicketSyncDep,
    settings: SettingsDep,
    max_age_days: int = Query(default=DEFAULT_MAX_AGE_DAYS, ge=0),
    assignee: str | None = None,
) -> APIResponse[DocumentResponse]:
    """Fetch recent tickets and return them as a rendered document."""
    params = SearchParams(assignee=assignee or settings.assignee, max_age_days=max_age_days)
    result = await sync.fetch_document(params)
    return APIResponse(data=document_to_response(result.document, result.status))


@router.get("/search", response_model=APIResponse[list[TicketResponse]])
async def search_tickets(
    sync: TicketSyncDep,
    settings: SettingsDep,
    title: str = Query(..., min_length=1),
) -> APIResponse[list[TicketResponse]]:
    """Look up tickets by title substring."""
    tickets = await sync.lookup(title)
    return APIResponse(
        data=[ticket_to_response(t, settings.work_item_url(t.id)) for t in tickets]
    )


@router.post(
    "",
    response_model=APIResponse[TicketCreated],
    status_code=status.HTTP_201_CREATED,
)
async def create_ticket(
    data: TicketCreate, submitter: SubmitterDep, settings: SettingsDep
) -> APIResponse[TicketCreated]:
    """Create a ticket from a Markdown description."""
    ticket_id = await submitter.submit_create(
        work_item_type=data.work_item_type,
        title=data.title,
        description=data.description,
        story_points=data.story_points,
        assignee=data.assignee or settings.assignee,
    )
    return APIResponse(data=TicketCreated(id=ticket_id, url=settings.work_item_url(ticket_id)))


@router.patch("/{ticket_id}", response_model=APIResponse[TicketUpdated])
async def update_ticket(
    ticket_id: int, data: TicketUpdate, submitter: SubmitterDep
) -> APIResponse[TicketUpdated]:
    """Apply the fields set in the request to a ticket."""
    provided = data.model_dump(exclude_unset=True, exclude={"expected_revision"})
    changes: dict[str, Any] = {_UPDATE_FIELDS[name]: value for name, value in provided.items()}
    revision = await submitter.submit_update(
        ticket_id, changes, expected_revision=data.expected_revision
    )
    return APIResponse(data=TicketUpdated(id=ticket_id, revision=revision))
