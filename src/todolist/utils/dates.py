"""Calendar-day helpers.

Due dates carry no time component, so "today" has to be pinned to a
timezone. ``"local"`` uses the machine's local time; any other value is
treated as an IANA zone name.
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

LOCAL_TIMEZONE = "local"


def today(timezone: str = LOCAL_TIMEZONE, now: datetime | None = None) -> date:
    """Return the current calendar date in *timezone*.

    Args:
        timezone: "local" or an IANA zone name (e.g. "Europe/Berlin")
        now: Optional fixed instant; naive values are taken as local time

    Returns:
        The calendar date at *now* in the requested zone
    """
    if timezone == LOCAL_TIMEZONE:
        if now is None:
            return date.today()
        return now.astimezone().date() if now.tzinfo else now.date()

    zone = ZoneInfo(timezone)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        now = now.astimezone()
    return now.astimezone(zone).date()


def is_overdue(due_date: date | None, reference: date) -> bool:
    """True when *due_date* falls on a calendar day strictly before *reference*.

    A task due today is never overdue.
    """
    if due_date is None:
        return False
    return due_date < reference
