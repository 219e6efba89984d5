"""Filter specifications and the query engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Union

from days.dates import days_between
from days.schema import Event


@dataclass(frozen=True)
class All:
    def matches(self, event: Event, today: date) -> bool:
        return True


@dataclass(frozen=True)
class Today:
    def matches(self, event: Event, today: date) -> bool:
        return days_between(today, event.timestamp) == 0


@dataclass(frozen=True)
class Before:
    """Events strictly before ``day``."""

    day: date

    def matches(self, event: Event, today: date) -> bool:
        return event.timestamp < self.day


@dataclass(frozen=True)
class After:
    """Events strictly after ``day``."""

    day: date

    def matches(self, event: Event, today: date) -> bool:
        return event.timestamp > self.day


@dataclass(frozen=True)
class OutsideRange:
    """Events before ``start`` or after ``end``.

    This is what ``list --before-date START --after-date END`` selects: the
    union of the two strict filters, i.e. everything outside the inclusive
    window ``[start, end]``.
    """

    start: date
    end: date

    def matches(self, event: Event, today: date) -> bool:
        return event.timestamp < self.start or event.timestamp > self.end


Between = OutsideRange


@dataclass(frozen=True)
class OnDate:
    day: date

    def matches(self, event: Event, today: date) -> bool:
        return event.timestamp == self.day


@dataclass(frozen=True)
class InCategories:
    """Events whose category is in ``categories`` (or not in it, with ``exclude``)."""

    categories: frozenset = field(default_factory=frozenset)
    exclude: bool = False

    def matches(self, event: Event, today: date) -> bool:
        member = event.category in self.categories
        return not member if self.exclude else member


@dataclass(frozen=True)
class NoCategory:
    def matches(self, event: Event, today: date) -> bool:
        return event.category == ""


FilterSpec = Union[All, Today, Before, After, OutsideRange, OnDate, InCategories, NoCategory]


def parse_categories(text: str) -> frozenset:
    """Split a comma-separated category list; empty pieces stand for ``""``."""

    return frozenset(text.split(","))


def run_query(spec: FilterSpec, events: Iterable[Event], today: date) -> list[tuple[Event, int]]:
    """Select matching events in store order, each paired with its day offset from ``today``."""

    return [(event, days_between(today, event.timestamp)) for event in events if spec.matches(event, today)]
