"""
Catalog of the tools this server exposes.

The catalog is static: listing it never touches Toggl. Input schemas are the
JSON Schemas of the pydantic input models the dispatcher validates against.
"""

from dataclasses import dataclass
from typing import List, Optional, Type

from mcp import types

from .models import (
    BaseToolInput,
    DeleteEntryInput,
    EmptyInput,
    StartTimerInput,
    WeeklyEntriesInput,
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    input_model: Type[BaseToolInput]
    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True

    def input_schema(self) -> dict:
        return self.input_model.model_json_schema()

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
            annotations=types.ToolAnnotations(
                title=self.title,
                readOnlyHint=self.read_only,
                destructiveHint=self.destructive,
                idempotentHint=self.idempotent,
                openWorldHint=True,
            ),
        )


TOOLS = (
    ToolSpec(
        name="toggl_start",
        title="Start Timer",
        description="Start a new time tracking entry",
        input_model=StartTimerInput,
        read_only=False,
        idempotent=False,
    ),
    ToolSpec(
        name="toggl_stop",
        title="Stop Timer",
        description="Stop the currently running timer",
        input_model=EmptyInput,
        read_only=False,
        idempotent=False,
    ),
    ToolSpec(
        name="toggl_current",
        title="Current Timer",
        description="Get the currently running time entry",
        input_model=EmptyInput,
    ),
    ToolSpec(
        name="toggl_today",
        title="Today's Entries",
        description="Get today's time entries with total duration",
        input_model=EmptyInput,
    ),
    ToolSpec(
        name="toggl_projects",
        title="List Projects",
        description="List all projects in the workspace",
        input_model=EmptyInput,
    ),
    ToolSpec(
        name="toggl_delete",
        title="Delete Time Entry",
        description="Delete a time entry by ID",
        input_model=DeleteEntryInput,
        read_only=False,
        destructive=True,
    ),
    ToolSpec(
        name="toggl_weekly",
        title="Weekly Summary",
        description=(
            "Get weekly time tracking summary with total hours, "
            "daily/project breakdowns"
        ),
        input_model=WeeklyEntriesInput,
    ),
    ToolSpec(
        name="toggl_last_week",
        title="Last Week Summary",
        description="Get last week's time tracking summary",
        input_model=EmptyInput,
    ),
)

_TOOLS_BY_NAME = {spec.name: spec for spec in TOOLS}


def get_tool(name: str) -> Optional[ToolSpec]:
    return _TOOLS_BY_NAME.get(name)


def tool_names() -> List[str]:
    return [spec.name for spec in TOOLS]


def list_tools() -> List[types.Tool]:
    """Return the catalog as MCP Tool definitions."""
    return [spec.to_tool() for spec in TOOLS]
