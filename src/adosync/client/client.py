"""DevOpsClient - asynchronous access to the work item tracking REST API."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from adosync.client.exceptions import (
    NoResponseError,
    RequestFailedError,
    ResponseParseError,
    UnexpectedShapeError,
)
from adosync.logging import sanitize_for_log, truncate_output
from adosync.tickets.models import DEFAULT_FIELDS

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from adosync.config import Settings
    from adosync.submitter.patch import PatchDocument

logger = logging.getLogger(__name__)

API_VERSION = "7.1"
JSON_CONTENT_TYPE = "application/json"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"


def _as_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


class DevOpsClient:
    """Client for Azure DevOps work items.

    Every call is a coroutine that resolves exactly once: it returns the
    parsed JSON or raises a ``DevOpsError`` subclass. Nothing is retried.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings (organization, project, token).
            transport: Optional httpx transport (for testing).
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.api_base,
                headers={
                    "Authorization": self.settings.auth_header,
                    "Accept": JSON_CONTENT_TYPE,
                },
                params={"api-version": API_VERSION},
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> DevOpsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Issue one request and classify its response.

        Args:
            method: HTTP method.
            path: Path relative to the work item tracking API base.
            json_body: Body to serialize as JSON, if any.
            content_type: Content type of the body.
            headers: Extra request headers, applied over the client defaults.

        Returns:
            The parsed JSON body.

        Raises:
            RequestFailedError: Status is not 200.
            NoResponseError: Connection failed or a 200 came back empty.
            ResponseParseError: Body is not valid JSON.
        """
        content = None
        request_headers = httpx.Headers(headers)
        if json_body is not None:
            content = json.dumps(json_body)
            request_headers.setdefault("Content-Type", content_type)

        logger.debug("%s %s", method, path)
        try:
            response = await self.client.request(
                method, path, content=content, headers=request_headers
            )
        except httpx.TransportError as e:
            logger.warning("%s %s: no response (%s)", method, path, sanitize_for_log(str(e)))
            raise NoResponseError(f"No response from {path}: {e}") from e

        body = response.text
        logger.info("%s %s -> %d", method, path, response.status_code)

        if response.status_code != 200:
            logger.warning(
                "%s %s failed: %s",
                method,
                path,
                sanitize_for_log(truncate_output(body)),
            )
            raise RequestFailedError(response.status_code, body)

        if not body.strip():
            raise NoResponseError(f"Empty response from {path}")

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            logger.warning("Unparseable response from %s: %s", path, e)
            raise ResponseParseError(str(e), body) from e

    async def run_query(self, query_text: str) -> list[int]:
        """Run a WIQL query and return the matching ticket ids in order.

        An absent or empty ``workItems`` array yields an empty list.
        """
        data = await self.send("POST", "wiql", {"query": query_text})
        if not isinstance(data, dict):
            raise UnexpectedShapeError("Query response is not an object", data)

        work_items = data.get("workItems") or []
        if not isinstance(work_items, list):
            raise UnexpectedShapeError("Query response 'workItems' is not a list", data)

        ids = []
        for item in work_items:
            ticket_id = _as_id(item.get("id")) if isinstance(item, dict) else None
            if ticket_id is None:
                raise UnexpectedShapeError(f"Query result item without an id: {item!r}", data)
            ids.append(ticket_id)

        logger.info("Query matched %d ticket(s)", len(ids))
        return ids

    async def fetch_batch(
        self,
        ids: Iterable[int],
        fields: Sequence[str] = DEFAULT_FIELDS,
    ) -> list[dict[str, Any]]:
        """Fetch the fields of several tickets in one request.

        Returns one ``fields`` mapping per ticket. No request is issued for
        an empty id set.
        """
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return []

        data = await self.send(
            "POST",
            "workitemsbatch",
            {"ids": unique_ids, "fields": [str(f) for f in fields], "$expand": "None"},
        )
        if not isinstance(data, dict) or not isinstance(data.get("value", []), list):
            raise UnexpectedShapeError("Batch response has no 'value' list", data)

        result = []
        for item in data.get("value", []):
            item_fields = item.get("fields") if isinstance(item, dict) else None
            if not isinstance(item_fields, dict):
                raise UnexpectedShapeError(f"Batch item without 'fields': {item!r}", data)
            result.append(item_fields)
        return result

    async def create_work_item(self, work_item_type: str, patch: PatchDocument) -> Any:
        """POST a JSON-patch document creating a work item of the given type."""
        path = f"workitems/${quote(work_item_type, safe='')}"
        logger.info("Creating %s work item", work_item_type)
        return await self.send("POST", path, patch.to_json(), JSON_PATCH_CONTENT_TYPE)

    async def update_work_item(self, ticket_id: int, patch: PatchDocument) -> Any:
        """PATCH an existing work item."""
        logger.info("Updating work item #%d", ticket_id)
        return await self.send(
            "PATCH", f"workitems/{int(ticket_id)}", patch.to_json(), JSON_PATCH_CONTENT_TYPE
        )

    def work_item_url(self, ticket_id: int) -> str:
        return self.settings.work_item_url(ticket_id)
