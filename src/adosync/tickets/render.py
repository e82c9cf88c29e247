"""Ticket classification and document rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from adosync.markup import to_local_markup
from adosync.tickets.models import UnmatchedPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from adosync.tickets.models import ClassificationRule, Ticket

logger = logging.getLogger(__name__)

DESCRIPTION_HEADING = "Description"
ACCEPTANCE_CRITERIA_HEADING = "Acceptance Criteria"
ITERATION_PATH_PROPERTY = "Iteration Path"


@dataclass
class TextBlock:
    """A headed block of Markdown text nested under an entry."""

    heading: str
    body: str


@dataclass
class Entry:
    """One ticket in a rendered document."""

    ticket_id: int
    title: str
    state: str
    story_points: float | None = None
    properties: dict[str, str] = field(default_factory=dict)
    blocks: list[TextBlock] = field(default_factory=list)

    @property
    def header(self) -> str:
        points = _format_points(self.story_points)
        return f"{self.ticket_id}: {self.title} [{self.state}] ({points} pts)"


@dataclass
class Section:
    """A top-level bucket of entries."""

    name: str
    entries: list[Entry] = field(default_factory=list)


@dataclass
class Document:
    """Sectioned, human-readable view of a set of tickets.

    Attributes:
        sections: Sections in emission order.
        read_only: Marks the document as display-only for the caller.
    """

    sections: list[Section] = field(default_factory=list)
    read_only: bool = True

    def ticket_ids(self) -> list[int]:
        return [entry.ticket_id for section in self.sections for entry in section.entries]

    def to_markdown(self) -> str:
        """Render the document as Markdown text."""
        lines: list[str] = []
        for section in self.sections:
            lines += [f"# {section.name}", ""]
            for entry in section.entries:
                lines.append(f"## {entry.header}")
                lines += [f"- {key}: {value}" for key, value in entry.properties.items()]
                lines.append("")
                for block in entry.blocks:
                    lines += [f"### {block.heading}", "", block.body, ""]
        return "\n".join(lines).rstrip() + "\n"


def _format_points(points: float | None) -> str:
    if points is None:
        return "-"
    if float(points).is_integer():
        return str(int(points))
    return f"{points:g}"


def classify(tickets: Iterable[Ticket], rule: ClassificationRule) -> dict[str, list[Ticket]]:
    """Partition tickets into the rule's buckets by exact iteration path.

    Buckets keep declared order and each keeps the order tickets arrived in.
    """
    buckets: dict[str, list[Ticket]] = {name: [] for name in rule.section_names}
    unmatched: list[Ticket] = []

    for ticket in tickets:
        name = rule.bucket_for(ticket.iteration_path)
        if name is None:
            unmatched.append(ticket)
        else:
            buckets[name].append(ticket)

    if unmatched:
        if rule.unmatched is UnmatchedPolicy.BUCKET:
            buckets[rule.unmatched_name].extend(unmatched)
        else:
            logger.warning(
                "Dropping %d ticket(s) with unclassified iteration paths: %s",
                len(unmatched),
                ", ".join(f"#{t.id} ({t.iteration_path or 'none'})" for t in unmatched),
            )
    return buckets


def render_entry(ticket: Ticket) -> Entry:
    """Render one ticket, converting its rich-text fields to Markdown."""
    entry = Entry(
        ticket_id=ticket.id,
        title=ticket.title,
        state=ticket.state,
        story_points=ticket.story_points,
        properties={ITERATION_PATH_PROPERTY: ticket.iteration_path},
    )
    if ticket.description:
        entry.blocks.append(TextBlock(DESCRIPTION_HEADING, to_local_markup(ticket.description)))
    if ticket.acceptance_criteria:
        entry.blocks.append(
            TextBlock(ACCEPTANCE_CRITERIA_HEADING, to_local_markup(ticket.acceptance_criteria))
        )
    return entry


def render(tickets: Iterable[Ticket], rule: ClassificationRule) -> Document:
    """Classify tickets and render them into a read-only document."""
    buckets = classify(tickets, rule)
    sections = [
        Section(name=name, entries=[render_entry(t) for t in bucket])
        for name, bucket in buckets.items()
    ]
    return Document(sections=sections, read_only=True)
