"""Expansion of a recurring event into its individual occurrences.

Expansion is an explicit state machine: `advance` takes the current state and
the previous occurrence and returns the next state and occurrence, or None
once the rule is exhausted. `expand` drives it up to a caller's horizon.
"""

import calendar
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from .models import Event
from .rrule import Frequency, RecurrenceRule, WeekdaySelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionState:
    """
    Attributes:
        rule: The rule being expanded
        first: The first occurrence (the event as written in the source)
        remaining: Occurrences still allowed by COUNT, or None if unbounded
        index: Number of occurrences emitted after the first
    """

    rule: RecurrenceRule
    first: Event
    remaining: Optional[int] = None
    index: int = 0


def start_expansion(first: Event, rule: RecurrenceRule) -> ExpansionState:
    remaining = None
    if rule.count is not None:
        # The first occurrence counts towards COUNT.
        remaining = max(rule.count - 1, 0)
    return ExpansionState(rule, first, remaining)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def nth_weekday(year: int, month: int, selector: WeekdaySelector) -> date:
    """
    Find the Nth (or Nth-from-last) given weekday of a month.

    Ordinals 0 and 1 both mean the first occurrence; an ordinal past the
    month's occurrences clamps to the last (or first) one in the month.
    """
    last_day = days_in_month(year, month)
    if selector.ordinal >= 0:
        first = date(year, month, 1)
        day = 1 + (selector.weekday - first.weekday()) % 7
        day += 7 * (max(selector.ordinal, 1) - 1)
        while day > last_day:
            day -= 7
    else:
        last = date(year, month, last_day)
        day = last_day - (last.weekday() - selector.weekday) % 7
        day -= 7 * (-selector.ordinal - 1)
        while day < 1:
            day += 7
    return date(year, month, day)


def _next_weekday(after: date, weekday: int) -> date:
    delta = (weekday - after.weekday()) % 7
    return after + timedelta(days=delta or 7)


def _next_monthly(state: ExpansionState, previous: date) -> date:
    # 32 days after the 1st always lands in the following month.
    probe = previous.replace(day=1) + timedelta(days=32)
    year, month = probe.year, probe.month
    rule = state.rule
    if rule.by_month_day is not None:
        return date(year, month, min(rule.by_month_day, days_in_month(year, month)))
    if rule.by_day is not None:
        return nth_weekday(year, month, rule.by_day)
    # Not clamped: a day past the month's end spills into the next month.
    return date(year, month, 1) + timedelta(days=state.first.start.day - 1)


def _next_yearly(state: ExpansionState) -> datetime:
    first = state.first.start
    year = first.year + state.rule.interval * (state.index + 1)
    try:
        return first.replace(year=year)
    except ValueError:
        return first.replace(year=year, day=28)


def next_start(state: ExpansionState, previous: Event) -> datetime:
    """Compute the candidate start following `previous` under the rule."""
    rule = state.rule
    prev_date = previous.start.date()

    if rule.frequency is Frequency.DAILY:
        day = prev_date + timedelta(days=rule.interval)
    elif rule.frequency is Frequency.WEEKLY:
        if rule.by_day is not None:
            day = _next_weekday(prev_date, rule.by_day.weekday)
        else:
            day = prev_date + timedelta(days=7)
    elif rule.frequency is Frequency.MONTHLY:
        day = _next_monthly(state, prev_date)
    else:
        return _next_yearly(state)

    return datetime.combine(day, previous.start.timetz())


def advance(
    state: ExpansionState, previous: Event
) -> tuple[ExpansionState, Optional[Event]]:
    """
    Produce the occurrence after `previous`.

    Args:
        state: Current expansion state
        previous: The most recently produced occurrence

    Returns:
        (new_state, next_event), with next_event None when the rule is done
        or the next occurrence cannot be represented
    """
    if state.remaining is not None and state.remaining <= 0:
        return state, None

    try:
        candidate = next_start(state, previous)
        if state.rule.until is not None and candidate >= state.rule.until:
            return state, None
        occurrence = previous.shifted(candidate)
    except (OverflowError, ValueError):
        logger.debug("Next occurrence of %r is past year 9999", previous.summary)
        return state, None

    remaining = None if state.remaining is None else state.remaining - 1
    new_state = replace(state, remaining=remaining, index=state.index + 1)
    return new_state, occurrence


def expand(first: Event, rule: RecurrenceRule, horizon: datetime) -> Iterator[Event]:
    """
    Yield the first event and its recurrences that start before `horizon`.

    Args:
        first: The event as written in the source
        rule: Parsed recurrence rule
        horizon: Exclusive upper bound on occurrence start times

    Yields:
        Occurrences in ascending start order
    """
    if first.start >= horizon:
        return
    yield first

    state = start_expansion(first, rule)
    previous = first
    produced = 1
    while True:
        state, occurrence = advance(state, previous)
        if occurrence is None or occurrence.start >= horizon:
            break
        yield occurrence
        previous = occurrence
        produced += 1

    logger.debug("Expanded %r into %d occurrence(s)", first.summary, produced)
