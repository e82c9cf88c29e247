"""Data models for tickets and their classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

CLOSED_STATE = "Closed"


class WorkItemField(StrEnum):
    """Fully-qualified reference names of the work item fields we read or write."""

    ID = "System.Id"
    TITLE = "System.Title"
    STATE = "System.State"
    DESCRIPTION = "System.Description"
    ACCEPTANCE_CRITERIA = "Microsoft.VSTS.Common.AcceptanceCriteria"
    STORY_POINTS = "Microsoft.VSTS.Scheduling.StoryPoints"
    REVISION = "System.Rev"
    ITERATION_PATH = "System.IterationPath"
    ASSIGNED_TO = "System.AssignedTo"
    WORK_ITEM_TYPE = "System.WorkItemType"
    CREATED_DATE = "System.CreatedDate"
    CHANGED_DATE = "System.ChangedDate"
    TEAM_PROJECT = "System.TeamProject"


# Fields requested in every batch fetch
DEFAULT_FIELDS: list[str] = [
    WorkItemField.ID,
    WorkItemField.TITLE,
    WorkItemField.STATE,
    WorkItemField.DESCRIPTION,
    WorkItemField.ACCEPTANCE_CRITERIA,
    WorkItemField.STORY_POINTS,
    WorkItemField.REVISION,
    WorkItemField.ITERATION_PATH,
    WorkItemField.ASSIGNED_TO,
    WorkItemField.WORK_ITEM_TYPE,
]

# Fields holding HTML on the remote side
RICH_TEXT_FIELDS = frozenset({WorkItemField.DESCRIPTION, WorkItemField.ACCEPTANCE_CRITERIA})


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        # Identity fields come back as objects
        return str(value.get("uniqueName") or value.get("displayName") or "")
    return str(value)


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric field value: %r", value)
        return None


def _integer(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer field value: %r", value)
        return default


@dataclass(frozen=True)
class Ticket:
    """Read-only snapshot of a work item as returned by a batch fetch.

    Rich-text fields keep the remote HTML; conversion to Markdown happens
    at render time.
    """

    id: int
    title: str = ""
    state: str = ""
    description: str = ""
    acceptance_criteria: str = ""
    story_points: float | None = None
    revision: int = 0
    iteration_path: str = ""
    assigned_to: str = ""
    work_item_type: str = ""

    @property
    def is_closed(self) -> bool:
        return self.state == CLOSED_STATE

    @classmethod
    def from_fields(cls, fields: dict[str, Any]) -> Ticket:
        """Build a Ticket from a ``fields`` mapping keyed by reference name.

        Missing or malformed values fall back to the dataclass defaults.
        """
        return cls(
            id=_integer(fields.get(WorkItemField.ID)),
            title=_text(fields.get(WorkItemField.TITLE)),
            state=_text(fields.get(WorkItemField.STATE)),
            description=_text(fields.get(WorkItemField.DESCRIPTION)),
            acceptance_criteria=_text(fields.get(WorkItemField.ACCEPTANCE_CRITERIA)),
            story_points=_number(fields.get(WorkItemField.STORY_POINTS)),
            revision=_integer(fields.get(WorkItemField.REVISION)),
            iteration_path=_text(fields.get(WorkItemField.ITERATION_PATH)),
            assigned_to=_text(fields.get(WorkItemField.ASSIGNED_TO)),
            work_item_type=_text(fields.get(WorkItemField.WORK_ITEM_TYPE)),
        )


class UnmatchedPolicy(StrEnum):
    """What to do with tickets whose iteration path matches no bucket."""

    DROP = "drop"
    BUCKET = "bucket"


@dataclass(frozen=True)
class Bucket:
    """A named document section fed by exact iteration-path matches."""

    name: str
    iteration_paths: tuple[str, ...]


@dataclass(frozen=True)
class ClassificationRule:
    """Ordered buckets plus the policy for tickets that match none of them.

    Attributes:
        buckets: Buckets in the order their sections are emitted.
        unmatched: DROP omits unmatched tickets; BUCKET collects them last.
        unmatched_name: Section name used under the BUCKET policy.
    """

    buckets: tuple[Bucket, ...]
    unmatched: UnmatchedPolicy = UnmatchedPolicy.DROP
    unmatched_name: str = "Unclassified"
    _index: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, str] = {}
        for bucket in self.buckets:
            for path in bucket.iteration_paths:
                # First declared bucket wins for a duplicated path
                index.setdefault(path, bucket.name)
        object.__setattr__(self, "_index", index)

    def bucket_for(self, iteration_path: str) -> str | None:
        """Return the bucket name for an exact iteration path, if any."""
        return self._index.get(iteration_path)

    @property
    def section_names(self) -> list[str]:
        names = [bucket.name for bucket in self.buckets]
        if self.unmatched is UnmatchedPolicy.BUCKET:
            names.append(self.unmatched_name)
        return names
