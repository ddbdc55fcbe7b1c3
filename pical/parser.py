"""Assembly of parsed iCal components into a sorted calendar of events."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterator, Mapping, Optional

from .components import Component, parse_calendars
from .constants import DEFAULT_HORIZON_DAYS
from .expander import expand
from .models import Calendar, Event
from .properties import Found, PropertyAccessor, unwrap
from .rrule import parse_rrule
from .timezones import DateTimeResolver, ZoneRule

logger = logging.getLogger(__name__)


def default_horizon(now: datetime, days: int = DEFAULT_HORIZON_DAYS) -> datetime:
    """The usual expansion horizon: `days` calendar days after `now`."""
    return now + timedelta(days=days)


class ICalParser:
    """
    Turns iCal content into a flat, sorted list of concrete events.

    Bad events and bad recurrence rules are logged and skipped; only a
    structurally broken document raises.

    Attributes:
        target_offset: Offset all event times are expressed in
        resolver: Date-time resolver bound to the target offset and zone table
    """

    def __init__(
        self,
        target_offset: timezone,
        zones: Optional[Mapping[str, ZoneRule]] = None,
    ) -> None:
        self.target_offset: timezone = target_offset
        self.resolver: DateTimeResolver = DateTimeResolver(target_offset, zones)

    def build_event(self, component: Component) -> Optional[Event]:
        """
        Build the base event of a component.

        Args:
            component: A VEVENT component

        Returns:
            The event, or None if SUMMARY, DTSTART or DTEND is unusable
        """
        props = PropertyAccessor(component)
        summary = props.text("SUMMARY")
        start = props.value_as("DTSTART", self.resolver.resolve_property)
        end = props.value_as("DTEND", self.resolver.resolve_property)

        for result in (summary, start, end):
            if not isinstance(result, Found):
                logger.warning(
                    "Dropping event %r: %s is %s",
                    unwrap(summary) or "<no summary>",
                    result.name,
                    type(result).__name__.lower(),
                )
                return None
        return Event(summary.value, start.value, end.value)

    def expand_component(
        self, component: Component, horizon: datetime
    ) -> Iterator[Event]:
        """
        Yield every occurrence of a component starting before `horizon`.

        Args:
            component: A VEVENT component
            horizon: Exclusive upper bound on start times

        Yields:
            The base event and, if it has a usable RRULE, its recurrences
        """
        event = self.build_event(component)
        if event is None:
            return

        raw_rule = PropertyAccessor(component).find("RRULE")
        rule = None
        if raw_rule is not None and raw_rule.value:
            rule = parse_rrule(raw_rule.value, self.target_offset)

        if rule is None:
            if event.start < horizon:
                yield event
            return
        yield from expand(event, rule, horizon)

    def parse(self, content: str, horizon: datetime) -> Calendar:
        """
        Parse complete iCal content into a calendar.

        Args:
            content: Raw iCal content
            horizon: Exclusive upper bound on event start times

        Returns:
            Events from every calendar block, sorted by start time

        Raises:
            ICalSyntaxError: If the content is not structurally valid iCal
        """
        events: Calendar = []
        for block in parse_calendars(content):
            for component in block.events:
                events.extend(self.expand_component(component, horizon))

        # list.sort is stable, so equal starts keep their source order.
        events.sort(key=lambda event: event.start)
        logger.debug("Parsed %d event(s) before %s", len(events), horizon)
        return events


def parse_ical(
    content: str,
    offset: timezone,
    horizon: datetime,
    zones: Optional[Mapping[str, ZoneRule]] = None,
) -> Calendar:
    """
    Parse iCal content into a calendar sorted by start time.

    Args:
        content: Raw iCal content
        offset: Offset all event times are expressed in
        horizon: Exclusive upper bound on event start times
        zones: Optional TZID table replacing the default one

    Raises:
        ICalSyntaxError: If the content is not structurally valid iCal
    """
    return ICalParser(offset, zones).parse(content, horizon)
