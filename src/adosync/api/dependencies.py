"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import AsyncGenerator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from adosync.client import DevOpsClient
from adosync.config import Settings
from adosync.submitter import Submitter
from adosync.sync import TicketSync

# Global instances (initialized on app startup)
_settings: Settings | None = None
_client: DevOpsClient | None = None


def init_client(settings: Settings) -> DevOpsClient:
    """Initialize the global DevOpsClient instance."""
    global _settings, _client  # noqa: PLW0603
    _settings = settings
    _client = DevOpsClient(settings)
    return _client


async def close_client() -> None:
    """Close the global DevOpsClient instance."""
    global _settings, _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
    _client = None
    _settings = None


async def get_settings() -> AsyncGenerator[Settings, None]:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_client() first.")
    yield _settings


async def get_client() -> AsyncGenerator[DevOpsClient, None]:
    """Dependency that provides the DevOpsClient instance."""
    if _client is None:
        raise RuntimeError("DevOpsClient not initialized. Call init_client() first.")
    yield _client


SettingsDep = Annotated[Settings, Depends(get_settings)]
ClientDep = Annotated[DevOpsClient, Depends(get_client)]


def get_ticket_sync(client: ClientDep, settings: SettingsDep) -> TicketSync:
    """Dependency that provides a TicketSync bound to the configured rule."""
    return TicketSync(client, settings.classification_rule())


def get_submitter(client: ClientDep) -> Submitter:
    """Dependency that provides a Submitter."""
    return Submitter(client)


TicketSyncDep = Annotated[TicketSync, Depends(get_ticket_sync)]
SubmitterDep = Annotated[Submitter, Depends(get_submitter)]
