"""Pytest configuration and fixtures."""
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from toggl_mcp.client import TogglClient
from toggl_mcp.dispatcher import ToolDispatcher
from toggl_mcp.models import Project, TimeEntry

# Wednesday
NOW = datetime(2024, 3, 13, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mock_client():
    """TogglClient stand-in with every API method as an AsyncMock."""
    client = AsyncMock(spec=TogglClient)
    client.get_current_entry.return_value = None
    client.get_entries.return_value = []
    client.get_projects.return_value = []
    return client


@pytest.fixture
def dispatcher(mock_client, now):
    return ToolDispatcher(mock_client, now=lambda: now)


def make_entry(
    entry_id: int = 1,
    description: str = "Work",
    start: str = "2024-03-11T09:00:00+00:00",
    duration: int = 3600,
    project_name: str = None,
) -> TimeEntry:
    return TimeEntry(
        id=entry_id,
        description=description,
        workspace_id=42,
        start=start,
        duration=duration,
        project_name=project_name,
    )


def make_project(project_id: int, name: str) -> Project:
    return Project(id=project_id, name=name)
