"""Static connection settings for the remote service."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field

from adosync.tickets.models import Bucket, ClassificationRule, UnmatchedPolicy

DEFAULT_TIMEOUT = 30.0
DEFAULT_BUCKETS = "Current Sprint=;Backlog={project}"


class ConfigError(Exception):
    """Required configuration is missing or unreadable."""


def parse_buckets(value: str) -> tuple[Bucket, ...]:
    """Parse ``"Name=Path|Path;Name=Path"`` into buckets, keeping their order."""
    buckets = []
    for item in value.split(";"):
        if not item.strip():
            continue
        name, sep, paths = item.partition("=")
        if not sep or not name.strip():
            raise ConfigError(f"Malformed bucket definition: {item!r}")
        iteration_paths = tuple(p.strip() for p in paths.split("|") if p.strip())
        buckets.append(Bucket(name=name.strip(), iteration_paths=iteration_paths))
    return tuple(buckets)


@dataclass(frozen=True)
class Settings:
    """Immutable configuration passed to every component.

    Values are not validated locally; the remote service rejects bad ones.
    """

    organization_url: str
    project: str
    assignee: str
    token: str = field(repr=False)
    buckets: tuple[Bucket, ...] = ()
    unmatched: UnmatchedPolicy = UnmatchedPolicy.DROP
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Load settings from ``ADOSYNC_*`` environment variables.

        Raises:
            ConfigError: If a required variable is missing or malformed.
        """
        env = os.environ if environ is None else environ
        required = {
            "organization_url": "ADOSYNC_ORG_URL",
            "project": "ADOSYNC_PROJECT",
            "assignee": "ADOSYNC_ASSIGNEE",
            "token": "ADOSYNC_PAT",
        }
        missing = [var for var in required.values() if not env.get(var)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        try:
            unmatched = UnmatchedPolicy(env.get("ADOSYNC_UNMATCHED", "drop").lower())
        except ValueError as e:
            raise ConfigError(f"ADOSYNC_UNMATCHED must be 'drop' or 'bucket': {e}") from e

        try:
            timeout = float(env.get("ADOSYNC_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError as e:
            raise ConfigError(f"ADOSYNC_TIMEOUT must be a number: {e}") from e

        # Without explicit buckets, tickets on the project root iteration are backlog
        buckets = env.get("ADOSYNC_BUCKETS") or DEFAULT_BUCKETS.format(
            project=env["ADOSYNC_PROJECT"]
        )

        return cls(
            **{attr: env[var] for attr, var in required.items()},
            buckets=parse_buckets(buckets),
            unmatched=unmatched,
            timeout=timeout,
        )

    @property
    def auth_header(self) -> str:
        """Basic auth value for a personal access token (empty user name)."""
        encoded = base64.b64encode(f":{self.token}".encode()).decode("ascii")
        return f"Basic {encoded}"

    @property
    def api_base(self) -> str:
        """Base URL of the work item tracking API, with a trailing slash."""
        return f"{self.organization_url.rstrip('/')}/{self.project}/_apis/wit/"

    def work_item_url(self, ticket_id: int) -> str:
        """Browser URL of a work item."""
        return f"{self.organization_url.rstrip('/')}/{self.project}/_workitems/edit/{ticket_id}"

    def classification_rule(self) -> ClassificationRule:
        return ClassificationRule(buckets=self.buckets, unmatched=self.unmatched)
