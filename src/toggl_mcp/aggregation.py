"""
Weekly aggregation of Toggl time entries.

Week windows run Monday 00:00:00.000 through Sunday 23:59:59.999 local time.
Each bound is localized on its own date, so a week spanning a DST change
still starts and ends at local midnight. All hour figures are rounded to
two decimals.
"""

import math
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from .models import TimeEntry, WeeklySummary

NO_PROJECT = "No Project"

WEEK_START_TIME = time(0, 0, 0, 0)
WEEK_END_TIME = time(23, 59, 59, 999000)


def round_hours(seconds: float) -> float:
    """
    Convert seconds to hours rounded to 2 decimals, half away from zero.

    Examples: 3661 -> 1.02, 1800 -> 0.5
    """
    scaled = seconds / 3600 * 100
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 100


def _localize(day: date, at: time, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        # astimezone() on a naive value applies the local offset in force on `day`
        return datetime.combine(day, at).astimezone()
    return datetime.combine(day, at, tzinfo=tz)


def week_bounds(now: datetime, week_offset: int = 0) -> Tuple[datetime, datetime]:
    """
    Return the (monday, sunday) bounds of the week `week_offset` weeks from `now`.

    Offset 0 is the week containing `now`, negative offsets are past weeks.
    Both bounds are inclusive. A naive `now` is read as system local time;
    an aware one keeps its tzinfo, so pass a ZoneInfo for DST-correct bounds.
    """
    day_of_week = now.isoweekday() % 7  # Sunday = 0
    days_to_monday = -6 if day_of_week == 0 else 1 - day_of_week

    monday_date = now.date() + timedelta(days=days_to_monday + week_offset * 7)
    sunday_date = monday_date + timedelta(days=6)

    monday = _localize(monday_date, WEEK_START_TIME, now.tzinfo)
    sunday = _localize(sunday_date, WEEK_END_TIME, now.tzinfo)
    return monday, sunday


def start_of_day(now: datetime) -> datetime:
    return _localize(now.date(), WEEK_START_TIME, now.tzinfo)


def entry_date(entry: TimeEntry) -> str:
    """Date portion of the entry's start timestamp, as stored by Toggl."""
    return entry.start.split("T")[0] if entry.start else ""


def entry_seconds(entry: TimeEntry, now_epoch: int) -> int:
    """Elapsed seconds for an entry; running entries are measured up to `now_epoch`."""
    if entry.is_running:
        return abs(entry.duration + now_epoch)
    return entry.duration or 0


def entries_for_day(entries: Iterable[TimeEntry], day: str) -> List[TimeEntry]:
    return [e for e in entries if e.start and e.start.startswith(day)]


def summarize_week(entries: List[TimeEntry], monday: datetime, sunday: datetime) -> WeeklySummary:
    """
    Build a WeeklySummary from the entries fetched for [monday, sunday].

    Entries without a start are counted in the total and project figures but
    left out of the daily breakdown.
    """
    total_seconds = 0
    daily_totals: Dict[str, int] = {}
    project_totals: Dict[str, int] = {}

    for entry in entries:
        duration = abs(entry.duration or 0)
        total_seconds += duration

        if entry.start:
            day = entry_date(entry)
            daily_totals[day] = daily_totals.get(day, 0) + duration

        project = entry.project_name or NO_PROJECT
        project_totals[project] = project_totals.get(project, 0) + duration

    daily_breakdown = {
        day: round_hours(seconds)
        for day, seconds in sorted(daily_totals.items())
    }
    # sorted() is stable, so equal totals keep first-seen order
    project_breakdown = dict(
        sorted(
            ((project, round_hours(seconds)) for project, seconds in project_totals.items()),
            key=lambda item: item[1],
            reverse=True,
        )
    )

    return WeeklySummary(
        week_starting=monday.date(),
        week_ending=sunday.date(),
        total_hours=round_hours(total_seconds),
        daily_breakdown=daily_breakdown,
        project_breakdown=project_breakdown,
        entry_count=len(entries),
        entries=entries,
    )


def week_label(week_offset: int) -> str:
    """Heading prefix for a weekly summary ("Current", "Last", "3 weeks ago")."""
    if week_offset == 0:
        return "Current"
    if week_offset == -1:
        return "Last"
    if week_offset == 1:
        return "Next"
    if week_offset < 0:
        return f"{abs(week_offset)} weeks ago"
    return f"{week_offset} weeks ahead"
