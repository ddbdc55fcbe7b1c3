"""Structural iCal parsing: content lines, properties and components.

This layer only splits text into calendars, components and properties. It
knows nothing about dates or recurrence; values are kept as raw strings.
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .exceptions import ICalSyntaxError

logger = logging.getLogger(__name__)

Params = list[tuple[str, list[str]]]


class Property(NamedTuple):
    """A content line: `NAME;PARAM=a,b:value`."""

    name: str
    value: Optional[str]
    params: Optional[Params]


@dataclass
class Component:
    """A single component (e.g. one VEVENT) and its own properties."""

    name: str
    properties: list[Property] = field(default_factory=list)


@dataclass
class CalendarBlock:
    """One VCALENDAR block and the event components directly inside it."""

    properties: list[Property] = field(default_factory=list)
    events: list[Component] = field(default_factory=list)


def unfold_lines(content: str) -> list[str]:
    """
    Unfold iCal lines that are split with CRLF + space/tab.

    The iCal format allows long lines to be folded by inserting
    a newline followed by a space or tab.

    Args:
        content: Raw iCal content

    Returns:
        List of unfolded, non-blank lines

    Raises:
        ICalSyntaxError: If content is not a string
    """
    if not isinstance(content, str):
        raise ICalSyntaxError("Content must be a string")

    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    unfolded: list[str] = []
    current = ""
    for line in lines:
        if line and line[0] in (" ", "\t"):
            current += line[1:]
        else:
            if current.strip():
                unfolded.append(current)
            current = line
    if current.strip():
        unfolded.append(current)
    return unfolded


def _split_unquoted(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for char in text:
        if char == '"':
            quoted = not quoted
            current.append(char)
        elif char == separator and not quoted:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_content_line(line: str, line_number: Optional[int] = None) -> Property:
    """
    Split one unfolded content line into name, parameters and value.

    Args:
        line: Unfolded content line, e.g. "DTSTART;TZID=Australia/Sydney:20240615T100000"
        line_number: Line number used in error messages

    Returns:
        The parsed property

    Raises:
        ICalSyntaxError: If the line has no value separator or no name
    """
    quoted = False
    colon = -1
    for i, char in enumerate(line):
        if char == '"':
            quoted = not quoted
        elif char == ":" and not quoted:
            colon = i
            break
    if colon < 0:
        raise ICalSyntaxError(f"Missing ':' in content line {line!r}", line_number)

    head, value = line[:colon], line[colon + 1 :]
    name, *raw_params = _split_unquoted(head, ";")
    name = name.strip().upper()
    if not name:
        raise ICalSyntaxError(f"Missing property name in {line!r}", line_number)

    params: Optional[Params] = None
    if raw_params:
        params = []
        for raw in raw_params:
            if "=" not in raw:
                raise ICalSyntaxError(
                    f"Malformed parameter {raw!r} in {name}", line_number
                )
            key, values = raw.split("=", 1)
            params.append(
                (
                    key.strip().upper(),
                    [_unquote(v) for v in _split_unquoted(values, ",")],
                )
            )
    return Property(name, value, params)


def parse_calendars(content: str) -> list[CalendarBlock]:
    """
    Parse iCal content into calendar blocks and their event components.

    Properties of nested sub-components (VALARM inside a VEVENT) stay out of
    the enclosing event; components other than VEVENT are skipped.

    Args:
        content: Raw iCal content

    Returns:
        One CalendarBlock per VCALENDAR, in source order

    Raises:
        ICalSyntaxError: If the content is not structurally valid iCal
    """
    if not content or not isinstance(content, str):
        raise ICalSyntaxError("Content must be a non-empty string")

    if "BEGIN:VCALENDAR" not in content.upper():
        raise ICalSyntaxError(
            "Content does not contain BEGIN:VCALENDAR - not valid iCal format"
        )

    blocks: list[CalendarBlock] = []
    stack: list[str] = []
    block: Optional[CalendarBlock] = None
    event: Optional[Component] = None

    for number, line in enumerate(unfold_lines(content), start=1):
        prop = parse_content_line(line, number)

        if prop.name == "BEGIN":
            kind = (prop.value or "").strip().upper()
            if not kind:
                raise ICalSyntaxError("BEGIN without component name", number)
            if not stack and kind != "VCALENDAR":
                raise ICalSyntaxError(f"{kind} outside of VCALENDAR", number)
            if kind == "VCALENDAR" and stack:
                raise ICalSyntaxError("Nested VCALENDAR", number)
            stack.append(kind)
            if kind == "VCALENDAR":
                block = CalendarBlock()
            elif kind == "VEVENT" and len(stack) == 2:
                event = Component(kind)
            continue

        if prop.name == "END":
            kind = (prop.value or "").strip().upper()
            if not stack or stack[-1] != kind:
                expected = stack[-1] if stack else "nothing"
                raise ICalSyntaxError(
                    f"END:{kind} does not close {expected}", number
                )
            stack.pop()
            if kind == "VCALENDAR" and block is not None:
                blocks.append(block)
                block = None
            elif event is not None and len(stack) == 1:
                block.events.append(event)
                event = None
            continue

        if not stack:
            raise ICalSyntaxError(
                f"Property {prop.name} outside of VCALENDAR", number
            )
        if len(stack) == 1:
            block.properties.append(prop)
        elif len(stack) == 2 and event is not None:
            event.properties.append(prop)

    if stack:
        raise ICalSyntaxError(f"Unclosed {stack[-1]} block at end of content")

    logger.debug(
        "Parsed %d calendar block(s) with %d event component(s)",
        len(blocks),
        sum(len(b.events) for b in blocks),
    )
    return blocks
