"""Core data schema for the event log."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Event:
    """A single dated record, as stored in one row of the events file."""

    timestamp: date
    category: str
    description: str
