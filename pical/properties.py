"""Soft-failing property lookups on a parsed component."""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from .components import Component, Property

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class Missing:
    name: str


@dataclass(frozen=True)
class Invalid:
    name: str
    reason: str


Lookup = Union[Found[T], Missing, Invalid]


def unwrap(result: "Lookup[T]") -> Optional[T]:
    """Return the found value, or None for Missing/Invalid."""
    if isinstance(result, Found):
        return result.value
    return None


def find_param(prop: Property, name: str) -> Optional[str]:
    """
    Get the first value of a property parameter.

    Args:
        prop: Property to inspect
        name: Parameter name, e.g. "TZID"

    Returns:
        First parameter value, or None if absent
    """
    for key, values in prop.params or []:
        if key == name:
            return values[0] if values else None
    return None


class PropertyAccessor:
    """
    Looks up properties on a component without ever raising.

    Every lookup returns a tagged result: Found, Missing or Invalid. Failures
    are logged so a single bad field drops one event instead of the calendar.

    Attributes:
        component: The component being read
    """

    def __init__(self, component: Component) -> None:
        self.component: Component = component

    def find(self, name: str) -> Optional[Property]:
        for prop in self.component.properties:
            if prop.name == name:
                return prop
        return None

    def value_as(
        self, name: str, parse_fn: Callable[[Property], Optional[T]]
    ) -> "Lookup[T]":
        """
        Find a property and convert it with `parse_fn`.

        `parse_fn` signals an unusable value by returning None or raising
        ValueError (whose message becomes the Invalid reason).

        Args:
            name: Property name
            parse_fn: Converter from the raw property to the wanted type

        Returns:
            Found(value), Missing(name) or Invalid(name, reason)
        """
        prop = self.find(name)
        if prop is None:
            logger.warning("Could not find property %s in iCal component", name)
            return Missing(name)

        try:
            value = parse_fn(prop)
            reason = "unparseable value"
        except ValueError as e:
            value = None
            reason = str(e) or "unparseable value"

        if value is None:
            logger.warning("Failed to parse value of property %s: %s", name, reason)
            logger.debug("Raw property: %r", prop)
            return Invalid(name, reason)
        return Found(value)

    def text(self, name: str) -> "Lookup[str]":
        """Get a property's raw value as text."""
        return self.value_as(name, lambda prop: prop.value)
