"""Demo script for days."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from days import filters
from days.presentation import render
from days.store import EventStore


def main() -> None:
    events = EventStore(Path("examples/sample_events.csv")).load()
    today = date(2024, 1, 10)
    for title, spec in (
        ("All", filters.All()),
        ("Before 2024-01-15", filters.Before(date(2024, 1, 15))),
        ("Work only", filters.InCategories(frozenset({"work"}))),
        ("Uncategorized", filters.NoCategory()),
    ):
        print(f"== {title}")
        for line in render(filters.run_query(spec, events, today), spec):
            print(line)


if __name__ == "__main__":
    main()
