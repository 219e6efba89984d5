"""Streamlit browser for a days events file."""

from __future__ import annotations

import tempfile
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Any, Optional

from days import filters
from days.adapters import csv_adapter
from days.config import load_settings
from days.errors import DaysError
from days.presentation import render
from days.store import EventStore, load_events

FILTERS = ["All", "Today", "Before", "After", "Outside range", "On date", "Categories", "No category"]
DEMO_DATASET = "examples/sample_events.csv"


def _parse_uploaded(uploaded_file) -> list:
    with tempfile.NamedTemporaryFile(delete=False, suffix=".csv") as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return load_events(csv_adapter.load_rows(temp_path))


def build_filter(
    name: str,
    first: Optional[date] = None,
    second: Optional[date] = None,
    categories: str = "",
    exclude: bool = False,
) -> filters.FilterSpec:
    """Map the sidebar choice onto a filter specification."""

    if name == "Today":
        return filters.Today()
    if name == "Before":
        return filters.Before(first)
    if name == "After":
        return filters.After(first)
    if name == "Outside range":
        return filters.OutsideRange(first, second)
    if name == "On date":
        return filters.OnDate(first)
    if name == "Categories":
        return filters.InCategories(filters.parse_categories(categories), exclude=exclude)
    if name == "No category":
        return filters.NoCategory()
    return filters.All()


def run_view(events: list, spec: filters.FilterSpec, today: date) -> dict[str, Any]:
    """Run the query and return a UI-friendly payload."""

    results = filters.run_query(spec, events, today)
    categories = Counter(event.category or "(none)" for event, _ in results)
    return {
        "total_events": len(events),
        "matched": len(results),
        "upcoming": sum(1 for _, delta in results if delta > 0),
        "past": sum(1 for _, delta in results if delta < 0),
        "categories": dict(categories),
        "lines": render(results, spec),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="days", layout="wide")
    st.title("days: event log browser")

    with st.sidebar:
        st.header("Source")
        source = st.radio("Events file", options=["Configured store", "Demo dataset", "Upload"], index=0)
        uploaded = st.file_uploader("Upload events.csv", type=["csv"]) if source == "Upload" else None

        st.header("Filter")
        today = st.date_input("Today", value=date.today())
        name = st.selectbox("Filter", options=FILTERS, index=0)
        first = second = None
        categories = ""
        exclude = False
        if name in ("Before", "After", "On date", "Outside range"):
            first = st.date_input("Date" if name != "Outside range" else "Start", value=today)
        if name == "Outside range":
            second = st.date_input("End", value=today)
        if name == "Categories":
            categories = st.text_input("Categories (comma-separated)", value="")
            exclude = st.checkbox("Exclude these categories", value=False)
        run = st.button("Show events", type="primary")

    if not run:
        st.info("Pick a source and a filter in the sidebar and click **Show events**.")
        return

    try:
        if source == "Configured store":
            events = EventStore(load_settings().events_path()).load()
        elif source == "Demo dataset":
            events = EventStore(Path(DEMO_DATASET)).load()
        elif uploaded is not None:
            events = _parse_uploaded(uploaded)
        else:
            st.error("Please upload an events CSV file.")
            return

        spec = build_filter(name, first, second, categories, exclude)
        view = run_view(events, spec, today)

        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Events", view["total_events"])
        c2.metric("Matched", view["matched"])
        c3.metric("Upcoming", view["upcoming"])
        c4.metric("Past", view["past"])
        if view["categories"]:
            st.table([view["categories"]])
        st.code("\n".join(view["lines"]), language=None)

    except DaysError as exc:
        st.error(str(exc))
    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
