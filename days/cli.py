"""Command-line interface: ``days list``, ``days add`` and ``days delete``."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import Mapping, Optional

from days import filters
from days.birthday import birthday_message
from days.config import Settings, load_settings
from days.dates import days_between, to_date
from days.errors import DaysError, InvalidDate, MissingHomeDirectory, StoreMissing
from days.mutations import DeleteCriteria, add, delete_all, run_delete
from days.presentation import format_line, render
from days.schema import Event
from days.store import EventStore

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _date_arg(text: Optional[str]) -> Optional[date]:
    return to_date(text) if text is not None else None


def build_filter(args: argparse.Namespace) -> filters.FilterSpec:
    """Translate ``list`` options into one filter specification."""

    before = _date_arg(args.before_date)
    after = _date_arg(args.after_date)
    on_date = _date_arg(args.date)

    chosen = []
    if args.today:
        chosen.append(filters.Today())
    if before is not None and after is not None:
        chosen.append(filters.OutsideRange(before, after))
    elif before is not None:
        chosen.append(filters.Before(before))
    elif after is not None:
        chosen.append(filters.After(after))
    if on_date is not None:
        chosen.append(filters.OnDate(on_date))
    if args.categories is not None:
        chosen.append(filters.InCategories(filters.parse_categories(args.categories), exclude=args.exclude))
    elif args.exclude:
        raise ValueError("--exclude needs --categories")
    if args.no_category:
        chosen.append(filters.NoCategory())

    if len(chosen) > 1:
        raise ValueError("only one filter can be given at a time")
    return chosen[0] if chosen else filters.All()


def cmd_list(args, settings: Settings, today: date) -> int:
    try:
        spec = build_filter(args)
    except InvalidDate as exc:
        print(exc, file=sys.stderr)
        return 0
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    store = EventStore(settings.events_path(), settings.keep_header_on_clear)
    results = filters.run_query(spec, store.load(), today)
    for line in render(results, spec):
        print(line)
    return 0


def cmd_add(args, settings: Settings, today: date) -> int:
    try:
        timestamp = _date_arg(args.date) or today
    except InvalidDate as exc:
        print(exc, file=sys.stderr)
        return 0

    event = Event(timestamp=timestamp, category=args.category, description=args.description)
    store = EventStore(settings.events_path(), settings.keep_header_on_clear)
    try:
        add(store, event)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(f"Added: {format_line(event, days_between(today, timestamp))}")
    return 0


def cmd_delete(args, settings: Settings, today: date) -> int:
    try:
        criteria = DeleteCriteria(
            date=_date_arg(args.date),
            category=args.category,
            description_prefix=args.description,
        )
    except InvalidDate as exc:
        print(exc, file=sys.stderr)
        return 0

    if args.all and not criteria.is_empty():
        print("error: --all cannot be combined with other criteria", file=sys.stderr)
        return 2
    if not args.all and criteria.is_empty():
        print("No deletion criteria given")
        return 0

    prefix = "Would delete" if args.dry_run else "Deleted"

    def report(event: Event) -> None:
        print(f"{prefix}: {format_line(event, days_between(today, event.timestamp))}")

    store = EventStore(settings.events_path(), settings.keep_header_on_clear)
    if args.all:
        removed = delete_all(store, dry_run=args.dry_run)
        for event in removed:
            report(event)
        count = len(removed)
    else:
        count = run_delete(store, criteria, dry_run=args.dry_run, report=report)

    if count == 0:
        print("No events found")
    else:
        print(f"{prefix} {count} event(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="days", description="Personal event log")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    sp = sub.add_parser("list", help="List events")
    sp.add_argument("--today", action="store_true", help="Only events happening today")
    sp.add_argument("--before-date", help="YYYY-MM-DD; events strictly before this date")
    sp.add_argument("--after-date", help="YYYY-MM-DD; events strictly after this date")
    sp.add_argument("--date", help="YYYY-MM-DD; events on this date")
    sp.add_argument("--categories", help="Comma-separated categories, e.g. work,home")
    sp.add_argument("--exclude", action="store_true", help="Invert --categories")
    sp.add_argument("--no-category", action="store_true", help="Only uncategorized events")
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("add", help="Add an event")
    sp.add_argument("--date", help="YYYY-MM-DD (defaults to today)")
    sp.add_argument("--category", default="")
    sp.add_argument("--description", default="")
    sp.set_defaults(func=cmd_add)

    sp = sub.add_parser("delete", help="Delete events")
    sp.add_argument("--date", help="YYYY-MM-DD; events on this date")
    sp.add_argument("--category", help="Events in exactly this category")
    sp.add_argument("--description", help="Events whose description starts with this text")
    sp.add_argument("--all", action="store_true", help="Delete every event")
    sp.add_argument("--dry-run", action="store_true", help="Only show what would be deleted")
    sp.set_defaults(func=cmd_delete)

    return parser


def main(
    argv: Optional[list[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    today: Optional[date] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=_LOG_FORMAT)

    if args.command is None:
        print("No arguments given")
        return 0

    today = today or date.today()
    try:
        settings = load_settings(environ)
    except (MissingHomeDirectory, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    if settings.birthdate is not None:
        print(birthday_message(settings.birthdate, today, settings.user))

    try:
        return args.func(args, settings, today)
    except StoreMissing as exc:
        print(exc)
        return 1
    except (DaysError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
