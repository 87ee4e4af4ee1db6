"""
Tool dispatcher: validates arguments, runs the named tool and renders text.

`dispatch` raises TogglMCPError subclasses; `call_tool` is the protocol
boundary that turns them into McpError exactly once.
"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import types
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData

from . import catalog
from .aggregation import (
    entries_for_day,
    entry_seconds,
    start_of_day,
    summarize_week,
    week_bounds,
    week_label,
)
from .client import TogglClient
from .errors import DomainError, TogglMCPError, UnknownOperationError, ValidationError
from .formatting import (
    format_compact_duration,
    format_duration,
    format_hours,
    truncate_response,
)
from .models import (
    BaseToolInput,
    DeleteEntryInput,
    StartTimerInput,
    WeeklyEntriesInput,
    WeeklySummary,
    validate_arguments,
)

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    # naive wall clock; week bounds localize each date separately
    return datetime.now()


class ToolDispatcher:
    """Runs catalog tools against a TogglClient."""

    def __init__(self, client: TogglClient, now: Callable[[], datetime] = _local_now):
        self.client = client
        self.now = now
        self._handlers: Dict[str, Callable[[Any], Awaitable[str]]] = {
            "toggl_start": self._start,
            "toggl_stop": self._stop,
            "toggl_current": self._current,
            "toggl_today": self._today,
            "toggl_projects": self._projects,
            "toggl_delete": self._delete,
            "toggl_weekly": self._weekly,
            "toggl_last_week": self._last_week,
        }

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Validate `arguments` for tool `name` and run it.

        Returns:
            str: The tool's text result

        Raises:
            UnknownOperationError: If `name` is not in the catalog
            ValidationError: If the arguments do not match the tool's input model
            DomainError, AuthenticationError, RemoteError: From the tool itself
        """
        spec = catalog.get_tool(name)
        if spec is None:
            raise UnknownOperationError(name)

        params, violations = validate_arguments(spec.input_model, arguments)
        if violations:
            raise ValidationError(violations)

        logger.info("Running tool %s", name)
        return truncate_response(await self._handlers[name](params))

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[types.TextContent]:
        """Protocol-facing wrapper around `dispatch`; all failures become McpError."""
        try:
            text = await self.dispatch(name, arguments)
        except TogglMCPError as e:
            logger.warning("Tool %s failed: %s", name, e.message)
            raise McpError(e.to_error_data()) from e
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            raise McpError(
                ErrorData(code=INTERNAL_ERROR, message=str(e) or "An unexpected error occurred")
            ) from e
        return [types.TextContent(type="text", text=text)]

    # ========================================================================
    # Timer tools
    # ========================================================================

    async def _start(self, params: StartTimerInput) -> str:
        """
        Start a timer, attaching a project when `project_name` matches one.

        The match is exact and case-insensitive. An unknown project name is
        not an error; the entry is simply created without a project.
        """
        project = None
        if params.project_name:
            wanted = params.project_name.lower()
            projects = await self.client.get_projects()
            project = next((p for p in projects if p.name.lower() == wanted), None)
            if project is None:
                logger.info("No project named %r, starting without one", params.project_name)

        entry = await self.client.start_entry(
            params.description,
            start=self.now(),
            project_id=project.id if project else None
        )

        text = f'Started timer: "{params.description}"'
        if project:
            text += f' on project "{project.name}"'
        return f"{text}\nEntry ID: {entry.id}"

    async def _stop(self, params: BaseToolInput) -> str:
        current = await self.client.get_current_entry()
        if current is None:
            raise DomainError("No timer is currently running")

        entry = await self.client.stop_entry(current.id)
        duration = abs(entry.duration or 0)
        return (
            f'Stopped timer: "{entry.description or "No description"}"\n'
            f"Duration: {format_duration(duration)}"
        )

    async def _current(self, params: BaseToolInput) -> str:
        current = await self.client.get_current_entry()
        if current is None:
            return "No timer is currently running"

        # Running entries store -(start epoch) as duration
        elapsed = abs((current.duration or 0) + int(self.now().timestamp()))
        return (
            f'Currently tracking: "{current.description or "No description"}"\n'
            f"Running for: {format_duration(elapsed)}"
        )

    async def _delete(self, params: DeleteEntryInput) -> str:
        await self.client.delete_entry(params.entry_id)
        return f"Deleted entry {params.entry_id}"

    # ========================================================================
    # Listing tools
    # ========================================================================

    async def _today(self, params: BaseToolInput) -> str:
        now = self.now()
        entries = await self.client.get_entries(start_of_day(now), now)
        if not entries:
            return "No time entries today"

        now_epoch = int(now.timestamp())
        lines = ["Today's entries:"]
        total_seconds = 0
        for entry in entries:
            seconds = entry_seconds(entry, now_epoch)
            total_seconds += seconds
            lines.append(f"- {entry.description or 'No description'} ({format_duration(seconds)})")

        lines.append("")
        lines.append(f"Total: {format_duration(total_seconds)}")
        return "\n".join(lines)

    async def _projects(self, params: BaseToolInput) -> str:
        projects = await self.client.get_projects()
        if not projects:
            return "No projects found"

        lines = ["Projects:"]
        lines.extend(f"- {p.name} (ID: {p.id})" for p in projects)
        return "\n".join(lines)

    # ========================================================================
    # Weekly summaries
    # ========================================================================

    async def _weekly(self, params: WeeklyEntriesInput) -> str:
        return await self._week_summary(params.week_offset)

    async def _last_week(self, params: BaseToolInput) -> str:
        return await self._week_summary(-1)

    async def _week_summary(self, week_offset: int) -> str:
        monday, sunday = week_bounds(self.now(), week_offset)
        entries = await self.client.get_entries(monday, sunday)
        summary = summarize_week(entries, monday, sunday)
        return render_weekly_summary(summary, week_label(week_offset))


def render_weekly_summary(summary: WeeklySummary, label: str) -> str:
    """
    Render a WeeklySummary as text.

    Layout: header with date range and total, daily breakdown with the day's
    entries nested under each date, project breakdown, then the entry count.
    Empty sections are omitted.
    """
    text = (
        f"{label} Week Summary ({summary.week_starting.isoformat()} "
        f"to {summary.week_ending.isoformat()})\n"
    )
    text += f"Total: {format_hours(summary.total_hours)} hours\n\n"

    if summary.daily_breakdown:
        text += "Daily Breakdown:\n"
        for day, hours in summary.daily_breakdown.items():
            text += f"  {day}: {format_hours(hours)}h\n"
            for entry in entries_for_day(summary.entries, day):
                duration = format_compact_duration(abs(entry.duration or 0))
                text += f"    • {entry.description or 'No description'} ({duration})\n"
        text += "\n"

    if summary.project_breakdown:
        text += "Project Breakdown:\n"
        for project, hours in summary.project_breakdown.items():
            text += f"  {project}: {format_hours(hours)}h\n"

    text += f"\nTotal entries: {summary.entry_count}"
    return text
