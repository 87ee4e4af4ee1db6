"""
Pydantic models for Toggl records and tool inputs.

Records mirror the subset of the Toggl Track v9 payloads the tools read;
unknown fields are ignored. Tool input models double as the argument
schemas published in the tool catalog.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


# ============================================================================
# Toggl Records
# ============================================================================

class TogglRecord(BaseModel):
    """Base model for payloads returned by the Toggl API."""
    model_config = ConfigDict(extra='ignore')


class TimeEntry(TogglRecord):
    """A Toggl time entry. A negative duration marks a running entry."""
    id: int
    description: Optional[str] = None
    workspace_id: Optional[int] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    start: Optional[str] = None
    duration: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self.duration is not None and self.duration < 0


class Project(TogglRecord):
    id: int
    name: str


class User(TogglRecord):
    fullname: Optional[str] = None
    email: Optional[str] = None
    default_workspace_id: int


class WeeklySummary(BaseModel):
    """Hours for one Monday-to-Sunday week, recomputed on every request."""
    week_starting: date
    week_ending: date
    total_hours: float
    daily_breakdown: Dict[str, float]
    project_breakdown: Dict[str, float]
    entry_count: int
    entries: List[TimeEntry]


# ============================================================================
# Tool Input Models
# ============================================================================

class BaseToolInput(BaseModel):
    """Base model with common configuration."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )


class EmptyInput(BaseToolInput):
    """Input model for tools that take no arguments."""


class StartTimerInput(BaseToolInput):
    """Input model for starting a new time entry."""
    description: str = Field(
        ...,
        description="Description of the task",
        min_length=1
    )
    project_name: Optional[str] = Field(
        default=None,
        description=(
            "Optional project name, matched case-insensitively against the "
            "workspace's projects (see toggl_projects)"
        )
    )


class DeleteEntryInput(BaseToolInput):
    """Input model for deleting a time entry."""
    entry_id: int = Field(
        ...,
        description="ID of the time entry to delete",
        strict=True
    )


class WeeklyEntriesInput(BaseToolInput):
    """Input model for the weekly summary."""
    week_offset: int = Field(
        default=0,
        description=(
            "Week relative to the current one (0 = current week, "
            "-1 = last week, 1 = next week)"
        ),
        strict=True
    )


InputModel = TypeVar("InputModel", bound=BaseToolInput)


def validate_arguments(
    model: Type[InputModel],
    arguments: Optional[Dict[str, Any]]
) -> Tuple[Optional[InputModel], List[str]]:
    """
    Validate raw tool arguments against an input model.

    Returns:
        (params, []) on success, or (None, violations) where each violation
        reads "<field>: <message>".
    """
    try:
        return model.model_validate(arguments or {}), []
    except PydanticValidationError as e:
        violations = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "arguments"
            violations.append(f"{location}: {error['msg']}")
        return None, violations
