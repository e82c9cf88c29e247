"""Tickets - work item snapshots, classification and rendering."""

from adosync.tickets.models import (
    DEFAULT_FIELDS,
    Bucket,
    ClassificationRule,
    Ticket,
    UnmatchedPolicy,
    WorkItemField,
)
from adosync.tickets.render import (
    Document,
    Entry,
    Section,
    TextBlock,
    classify,
    render,
)

__all__ = [
    "DEFAULT_FIELDS",
    "Bucket",
    "ClassificationRule",
    "Document",
    "Entry",
    "Section",
    "TextBlock",
    "Ticket",
    "UnmatchedPolicy",
    "WorkItemField",
    "classify",
    "render",
]
