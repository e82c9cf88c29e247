"""Data models for the Query Builder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from adosync.tickets.models import WorkItemField

DEFAULT_MAX_AGE_DAYS = 30
DEFAULT_EXCLUDED_STATES = ("Closed", "Removed")


class SortDirection(StrEnum):
    """Sort direction of a WIQL ORDER BY clause."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SearchParams:
    """Structured parameters of a ticket search.

    Attributes:
        assignee: Identity the tickets are assigned to.
        max_age_days: Only tickets created in the last N days.
        excluded_states: States filtered out of the result.
        sort_field: Field reference name to order by.
        sort_direction: Order of the sort.
    """

    assignee: str
    max_age_days: int = DEFAULT_MAX_AGE_DAYS
    excluded_states: tuple[str, ...] = DEFAULT_EXCLUDED_STATES
    sort_field: str = WorkItemField.CHANGED_DATE.value
    sort_direction: SortDirection = SortDirection.DESC
