"""JSON-patch documents for creating and updating work items."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from adosync.submitter.exceptions import NoChangesError
from adosync.tickets.models import WorkItemField

REVISION_PATH = "/rev"


class PatchOp(StrEnum):
    """JSON-patch operations used against work items."""

    ADD = "add"
    REPLACE = "replace"
    TEST = "test"


class PatchOperation(BaseModel):
    """A single JSON-patch operation."""

    op: PatchOp
    path: str = Field(..., min_length=1)
    value: Any = None


class PatchDocument(BaseModel):
    """An ordered list of patch operations."""

    operations: list[PatchOperation] = Field(default_factory=list)

    def to_json(self) -> list[dict[str, Any]]:
        """Serialize to the JSON array the service expects."""
        return [operation.model_dump(mode="json") for operation in self.operations]

    def __len__(self) -> int:
        return len(self.operations)


def field_path(name: str) -> str:
    return f"/fields/{name}"


def build_create_patch(
    title: str,
    description_html: str,
    story_points: float | None,
    assignee: str,
) -> PatchDocument:
    """Build the four ``add`` operations of a work item creation."""
    return PatchDocument(
        operations=[
            PatchOperation(op=PatchOp.ADD, path=field_path(WorkItemField.TITLE), value=title),
            PatchOperation(
                op=PatchOp.ADD,
                path=field_path(WorkItemField.DESCRIPTION),
                value=description_html,
            ),
            PatchOperation(
                op=PatchOp.ADD, path=field_path(WorkItemField.ASSIGNED_TO), value=assignee
            ),
            PatchOperation(
                op=PatchOp.ADD,
                path=field_path(WorkItemField.STORY_POINTS),
                value=story_points,
            ),
        ]
    )


def build_update_patch(
    changes: Mapping[str, Any],
    expected_revision: int | None = None,
) -> PatchDocument:
    """Build one ``add`` operation per changed field.

    Args:
        changes: New values keyed by field reference name.
        expected_revision: When given, a leading ``test`` on ``/rev`` makes
            the service reject the update if the ticket changed since.

    Raises:
        NoChangesError: If there is nothing to change.
    """
    if not changes:
        raise NoChangesError("No field changes to submit")

    operations = []
    if expected_revision is not None:
        operations.append(
            PatchOperation(op=PatchOp.TEST, path=REVISION_PATH, value=int(expected_revision))
        )
    operations += [
        PatchOperation(op=PatchOp.ADD, path=field_path(str(name)), value=value)
        for name, value in changes.items()
    ]
    return PatchDocument(operations=operations)
