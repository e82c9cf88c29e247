"""Shared pytest fixtures and configuration."""

import pytest

from adosync.config import Settings
from adosync.tickets import Bucket, ClassificationRule


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def settings() -> Settings:
    """Settings for a fictional organization."""
    return Settings(
        organization_url="https://dev.azure.com/contoso",
        project="Fabrikam",
        assignee="jane@contoso.com",
        token="token",
        buckets=(
            Bucket(name="Current Sprint", iteration_paths=("Fabrikam\\Sprint 5",)),
            Bucket(name="Backlog", iteration_paths=("Fabrikam",)),
        ),
    )


@pytest.fixture
def rule(settings: Settings) -> ClassificationRule:
    """Classification rule built from the settings buckets."""
    return settings.classification_rule()
