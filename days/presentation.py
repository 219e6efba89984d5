"""Human-readable rendering of query results."""

from __future__ import annotations

from typing import Iterable, Optional

from days import filters
from days.dates import format_date
from days.schema import Event

DEFAULT_EMPTY_MESSAGE = "No events found"

_EMPTY_MESSAGES = {
    filters.Today: "No events today",
    filters.OutsideRange: "No events found in the given date range",
    filters.OnDate: "No events found on the given date",
    filters.InCategories: "No events found in the given category",
    filters.NoCategory: "No events found with no category",
}


def relative_text(delta: int) -> str:
    if delta == 0:
        return "today"
    if delta > 0:
        return f"in {delta} days"
    return f"{abs(delta)} days ago"


def format_line(event: Event, delta: int) -> str:
    """Format an event as ``<date>: <description> (<category>) - <relative>``."""

    return (
        f"{format_date(event.timestamp)}: {event.description} ({event.category}) - "
        f"{relative_text(delta)}"
    )


def empty_message(spec: Optional[filters.FilterSpec] = None) -> str:
    if spec is None:
        return DEFAULT_EMPTY_MESSAGE
    return _EMPTY_MESSAGES.get(type(spec), DEFAULT_EMPTY_MESSAGE)


def render(results: Iterable[tuple[Event, int]], spec: Optional[filters.FilterSpec] = None) -> list[str]:
    """Render query results, or a single "no events" line when there are none."""

    lines = [format_line(event, delta) for event, delta in results]
    if not lines:
        return [empty_message(spec)]
    return lines
