"""WIQL query construction."""

from __future__ import annotations

from collections.abc import Sequence

from adosync.query.models import SearchParams, SortDirection
from adosync.tickets.models import WorkItemField

_SELECT = f"SELECT [{WorkItemField.ID}] FROM WorkItems"
_PROJECT_FILTER = f"[{WorkItemField.TEAM_PROJECT}] = @project"


def escape_literal(value: str) -> str:
    """Escape a string for use inside a single-quoted WIQL literal."""
    return value.replace("'", "''")


def quote_literal(value: str) -> str:
    return f"'{escape_literal(value)}'"


def build_search_query(
    assignee: str,
    max_age_days: int,
    excluded_states: Sequence[str],
    sort_field: str,
    sort_direction: SortDirection | str = SortDirection.DESC,
) -> str:
    """Build the WIQL text selecting recent tickets assigned to someone.

    Args:
        assignee: Identity the tickets must be assigned to.
        max_age_days: Creation-date lower bound, relative to today. Not
            validated here.
        excluded_states: States to leave out; the clause is omitted if empty.
        sort_field: Reference name of the field to order by.
        sort_direction: ASC or DESC.

    Returns:
        A single-line WIQL query.
    """
    if isinstance(sort_direction, SortDirection):
        direction = sort_direction
    else:
        direction = SortDirection(sort_direction.upper())
    clauses = [
        _PROJECT_FILTER,
        f"[{WorkItemField.ASSIGNED_TO}] = {quote_literal(assignee)}",
        f"[{WorkItemField.CREATED_DATE}] >= @Today - {int(max_age_days)}",
    ]
    if excluded_states:
        states = ", ".join(quote_literal(state) for state in excluded_states)
        clauses.append(f"[{WorkItemField.STATE}] NOT IN ({states})")

    return (
        f"{_SELECT} WHERE {' AND '.join(clauses)} "
        f"ORDER BY [{sort_field}] {direction.value}"
    )


def build_search_query_from(params: SearchParams) -> str:
    return build_search_query(
        assignee=params.assignee,
        max_age_days=params.max_age_days,
        excluded_states=params.excluded_states,
        sort_field=params.sort_field,
        sort_direction=params.sort_direction,
    )


def build_title_search_query(substring: str) -> str:
    """Build the WIQL text for an interactive title lookup.

    No date or state filter is applied.
    """
    return (
        f"{_SELECT} WHERE {_PROJECT_FILTER} "
        f"AND [{WorkItemField.TITLE}] CONTAINS {quote_literal(substring)} "
        f"ORDER BY [{WorkItemField.CHANGED_DATE}] {SortDirection.DESC.value}"
    )
