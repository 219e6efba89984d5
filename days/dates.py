"""Parsing and formatting of YYYY-MM-DD calendar dates."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from days.errors import InvalidDate

logger = logging.getLogger(__name__)

_PATTERN = "YYYY-MM-DD"
_WIDTHS = (4, 2, 2)


def parse_date(text: str) -> Optional[date]:
    """Parse ``text`` in YYYY-MM-DD form, returning None when it is not a valid date."""

    if text is None or len(text) != len(_PATTERN):
        logger.debug("date %r has the wrong length", text)
        return None

    parts = text.split("-")
    if len(parts) != 3:
        logger.debug("date %r does not have three components", text)
        return None

    for part, width in zip(parts, _WIDTHS):
        if len(part) != width or not (part.isascii() and part.isdigit()):
            logger.debug("date %r has a malformed component %r", text, part)
            return None

    year, month, day = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError as exc:
        logger.debug("date %r is not a calendar date: %s", text, exc)
        return None


def to_date(text: str) -> date:
    """Like :func:`parse_date` but raises :class:`InvalidDate` on failure."""

    parsed = parse_date(text)
    if parsed is None:
        raise InvalidDate(text)
    return parsed


def format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def days_between(earlier: date, later: date) -> int:
    """Signed number of days from ``earlier`` to ``later``."""

    return (later - earlier).days
