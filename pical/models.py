"""Event and calendar types produced by the parser."""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class Event:
    """
    A single concrete occurrence of a calendar event.

    Occurrences of a recurring event are derived copies of the first one,
    never mutated in place.

    Attributes:
        summary: Display text, may be empty
        start: Aware start time in the calendar's target offset
        end: Aware end time in the calendar's target offset
    """

    summary: str
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def covers(self, day: date) -> bool:
        """
        Check whether the event's date range includes a calendar day.

        Both ends are inclusive and only calendar dates are compared, so an
        event ending at 00:30 still covers the day it ends on.

        Args:
            day: Calendar date to test

        Returns:
            True if start.date() <= day <= end.date()
        """
        return self.start.date() <= day <= self.end.date()

    def shifted(self, start: datetime) -> "Event":
        """Return a copy starting at `start` with the same duration."""
        return replace(self, start=start, end=start + self.duration)


# Ascending by start; equal starts keep their source order.
Calendar = list[Event]


def events_on(calendar: Calendar, day: date) -> list[Event]:
    """
    Get the events covering a calendar day.

    Args:
        calendar: Sorted calendar
        day: Calendar date to query

    Returns:
        Covering events, in calendar order
    """
    return [event for event in calendar if event.covers(day)]


def filter_by_date_range(
    calendar: Calendar, start: datetime, end: datetime
) -> list[Event]:
    """
    Filter events starting within a time range.

    Args:
        calendar: Sorted calendar
        start: Start of the range (inclusive)
        end: End of the range (exclusive)

    Returns:
        Events with start <= event.start < end
    """
    return [event for event in calendar if start <= event.start < end]
