"""Birthday greeting shown when BIRTHDATE is configured."""

from __future__ import annotations

from datetime import date
from typing import Optional

from days.dates import days_between


def birthday_message(birthdate: date, today: date, user: Optional[str] = None) -> str:
    parts = []
    if (birthdate.month, birthdate.day) == (today.month, today.day):
        parts.append(f"Happy birthday, {user}! " if user else "Happy birthday! ")

    age = days_between(birthdate, today)
    parts.append(f"You are {age} days old.")
    if age % 1000 == 0:
        parts.append(" That's a nice round number!")
    return "".join(parts)
