"""In-memory event store loaded from the backing CSV file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from days.adapters import csv_adapter
from days.adapters.csv_adapter import Row
from days.dates import parse_date
from days.schema import Event

logger = logging.getLogger(__name__)


def row_to_event(row: Row) -> Optional[Event]:
    """Convert one provider row into an event, or None when the row is malformed."""

    if row.date is None or row.category is None or row.description is None:
        logger.warning("missing columns at row %d: %r", row.row_number, row)
        return None

    timestamp = parse_date(row.date)
    if timestamp is None:
        logger.warning("bad date at row %d: %s", row.row_number, row.date)
        return None

    return Event(timestamp=timestamp, category=row.category, description=row.description)


def load_events(rows: Iterable[Row]) -> list[Event]:
    """Convert rows into events, skipping malformed rows one at a time."""

    events: list[Event] = []
    for row in rows:
        event = row_to_event(row)
        if event is not None:
            events.append(event)
    return events


@dataclass
class EventStore:
    """Handle on the backing file, passed to every mutation."""

    path: Path
    keep_header_on_clear: bool = True

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> list[Event]:
        if not self.exists():
            logger.debug("%s does not exist yet, starting empty", self.path)
            return []
        return load_events(csv_adapter.load_rows(str(self.path)))
