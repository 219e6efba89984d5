"""Add and delete operations against the backing file."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from days.adapters import csv_adapter
from days.dates import format_date
from days.errors import StoreRewriteError, StoreWriteError
from days.schema import Event
from days.store import EventStore, row_to_event

logger = logging.getLogger(__name__)

Predicate = Callable[[Event], bool]


@dataclass(frozen=True)
class DeleteCriteria:
    """Fields a deletion target must match; unset fields are ignored.

    Criteria with nothing set match no event.
    """

    date: Optional[date] = None
    category: Optional[str] = None
    description_prefix: Optional[str] = None

    def is_empty(self) -> bool:
        return self.date is None and self.category is None and self.description_prefix is None

    def matches(self, event: Event) -> bool:
        if self.is_empty():
            return False
        if self.date is not None and event.timestamp != self.date:
            return False
        if self.category is not None and event.category != self.category:
            return False
        if self.description_prefix is not None and not event.description.startswith(self.description_prefix):
            return False
        return True


def _ends_with_newline(path) -> bool:
    with open(path, "rb") as handle:
        handle.seek(-1, os.SEEK_END)
        return handle.read(1) == b"\n"


def add(store: EventStore, event: Event) -> None:
    """Append ``event`` as the last row of the backing file.

    A last line without a terminating newline is closed off first, so the
    new row never merges into it.
    """

    for value in (event.category, event.description):
        if "\n" in value or "\r" in value:
            raise ValueError("event fields must not contain line breaks")

    line = csv_adapter.format_row(format_date(event.timestamp), event.category, event.description)
    try:
        needs_header = not store.path.exists() or store.path.stat().st_size == 0
        needs_newline = not needs_header and not _ends_with_newline(store.path)
        with open(store.path, "a", newline="", encoding=csv_adapter.ENCODING) as handle:
            if needs_header:
                handle.write(csv_adapter.format_header())
            if needs_newline:
                handle.write("\n")
            handle.write(line)
    except OSError as exc:
        raise StoreWriteError(f"cannot append to {store.path}: {exc}") from exc

    logger.debug("appended %r to %s", line, store.path)


def _scan(store: EventStore, predicate: Predicate) -> tuple[list[bytes], list[Event]]:
    """Split the file into raw lines to keep and events to remove."""

    kept: list[bytes] = []
    removed: list[Event] = []
    columns = None
    for line_number, raw in csv_adapter.read_lines(str(store.path)):
        if columns is None:
            columns = csv_adapter.header_columns(raw, str(store.path))
            kept.append(raw)
            continue
        row = csv_adapter.decode_row(line_number, raw, columns)
        event = row_to_event(row) if row is not None else None
        if event is not None and predicate(event):
            removed.append(event)
        else:
            kept.append(raw)
    return kept, removed


def _replace(store: EventStore, lines: list[bytes]) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=".events-", suffix=".csv", dir=str(store.path.parent))
    try:
        with os.fdopen(fd, "wb") as target:
            target.writelines(lines)
        shutil.copymode(store.path, tmp_name)
        os.replace(tmp_name, store.path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def delete_matching(store: EventStore, predicate: Predicate, dry_run: bool = False) -> list[Event]:
    """Remove every event matching ``predicate`` with one rewrite of the file.

    Returns the matched events in file order. With ``dry_run`` the file is
    only read. Lines that are not removed are copied byte for byte.
    """

    if not store.exists():
        return []

    try:
        kept, removed = _scan(store, predicate)
        if dry_run or not removed:
            return removed
        _replace(store, kept)
    except OSError as exc:
        raise StoreRewriteError(f"cannot rewrite {store.path}: {exc}") from exc

    logger.info("removed %d event(s) from %s", len(removed), store.path)
    return removed


def delete_all(store: EventStore, dry_run: bool = False) -> list[Event]:
    """Remove every event; the header survives when ``store.keep_header_on_clear`` is set."""

    events = store.load()
    if dry_run or not store.exists():
        return events

    try:
        with open(store.path, "w", newline="", encoding=csv_adapter.ENCODING) as handle:
            if store.keep_header_on_clear:
                handle.write(csv_adapter.format_header())
    except OSError as exc:
        raise StoreRewriteError(f"cannot truncate {store.path}: {exc}") from exc

    logger.info("cleared %s (%d event(s))", store.path, len(events))
    return events


def run_delete(
    store: EventStore,
    criteria: DeleteCriteria,
    dry_run: bool = False,
    report: Optional[Callable[[Event], None]] = None,
) -> int:
    """Delete the events matching ``criteria`` and return how many were affected.

    ``report`` is called once per affected event, in file order.
    """

    removed = delete_matching(store, criteria.matches, dry_run=dry_run)
    if report is not None:
        for event in removed:
            report(event)
    return len(removed)
