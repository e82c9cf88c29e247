"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from adosync.tickets import Document, Ticket

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Document models


class TextBlockResponse(BaseModel):
    heading: str
    body: str


class EntryResponse(BaseModel):
    """One ticket entry of a rendered document."""

    id: int
    header: str
    title: str
    state: str
    story_points: float | None
    properties: dict[str, str]
    blocks: list[TextBlockResponse]


class SectionResponse(BaseModel):
    name: str
    entries: list[EntryResponse]


class DocumentResponse(BaseModel):
    """Rendered document plus its Markdown text."""

    status: str
    read_only: bool = True
    sections: list[SectionResponse] = Field(default_factory=list)
    markdown: str = ""


def document_to_response(document: Document | None, status: str) -> DocumentResponse:
    """Convert a rendered Document to DocumentResponse."""
    if document is None:
        return DocumentResponse(status=status)
    return DocumentResponse(
        status=status,
        read_only=document.read_only,
        sections=[
            SectionResponse(
                name=section.name,
                entries=[
                    EntryResponse(
                        id=entry.ticket_id,
                        header=entry.header,
                        title=entry.title,
                        state=entry.state,
                        story_points=entry.story_points,
                        properties=entry.properties,
                        blocks=[
                            TextBlockResponse(heading=b.heading, body=b.body)
                            for b in entry.blocks
                        ],
                    )
                    for entry in section.entries
                ],
            )
            for section in document.sections
        ],
        markdown=document.to_markdown(),
    )


# Ticket models


class TicketResponse(BaseModel):
    """Summary of a ticket for lookups."""

    id: int
    title: str
    state: str
    iteration_path: str
    revision: int
    url: str


def ticket_to_response(ticket: Ticket, url: str) -> TicketResponse:
    return TicketResponse(
        id=ticket.id,
        title=ticket.title,
        state=ticket.state,
        iteration_path=ticket.iteration_path,
        revision=ticket.revision,
        url=url,
    )


class TicketCreate(BaseModel):
    """Request model for creating a ticket."""

    work_item_type: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1)
    description: str = ""
    story_points: float | None = Field(default=None, ge=0)
    assignee: str | None = None


class TicketCreated(BaseModel):
    id: int
    url: str


class TicketUpdate(BaseModel):
    """Request model for updating a ticket (partial update).

    Description and acceptance criteria are Markdown.
    """

    title: str | None = Field(default=None, min_length=1)
    state: str | None = None
    description: str | None = None
    acceptance_criteria: str | None = None
    story_points: float | None = Field(default=None, ge=0)
    iteration_path: str | None = None
    expected_revision: int | None = Field(default=None, ge=1)


class TicketUpdated(BaseModel):
    id: int
    revision: int


class FailureDetail(BaseModel):
    """Raw remote response kept for inspection."""

    status_code: int | None = None
    body: Any = None


__all__ = [
    "APIResponse",
    "DocumentResponse",
    "FailureDetail",
    "TicketCreate",
    "TicketCreated",
    "TicketResponse",
    "TicketUpdate",
    "TicketUpdated",
    "document_to_response",
    "ticket_to_response",
]
