"""Query Builder - WIQL text from structured search parameters."""

from adosync.query.builder import (
    build_search_query,
    build_search_query_from,
    build_title_search_query,
    escape_literal,
    quote_literal,
)
from adosync.query.models import SearchParams, SortDirection

__all__ = [
    "SearchParams",
    "SortDirection",
    "build_search_query",
    "build_search_query_from",
    "build_title_search_query",
    "escape_literal",
    "quote_literal",
]
