"""Runtime settings resolved from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping, Optional

from days.dates import parse_date
from days.errors import MissingHomeDirectory, StoreMissing

DEFAULTS = {
    "dir_name": ".days",
    "events_file": "events.csv",
    "keep_header_on_clear": True,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def home_directory(environ: Mapping[str, str]) -> Optional[str]:
    """HOME, falling back to USERPROFILE on Windows."""

    return environ.get("HOME") or environ.get("USERPROFILE") or None


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError(f"invalid boolean value '{value}'")


@dataclass
class Settings:
    days_dir: Path
    events_file: str = DEFAULTS["events_file"]
    keep_header_on_clear: bool = DEFAULTS["keep_header_on_clear"]
    birthdate: Optional[date] = None
    user: Optional[str] = None

    def events_path(self) -> Path:
        """Path of the events file; the storage directory itself must already exist."""

        if not self.days_dir.is_dir():
            raise StoreMissing(self.days_dir)
        return self.days_dir / self.events_file


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        environ = os.environ

    override = environ.get("DAYS_DIR")
    if override:
        days_dir = Path(override)
    else:
        home = home_directory(environ)
        if home is None:
            raise MissingHomeDirectory("Unable to determine home directory")
        days_dir = Path(home) / DEFAULTS["dir_name"]

    birthdate_raw = environ.get("BIRTHDATE")
    return Settings(
        days_dir=days_dir,
        events_file=environ.get("DAYS_EVENTS_FILE") or DEFAULTS["events_file"],
        keep_header_on_clear=_flag(environ.get("DAYS_KEEP_HEADER"), DEFAULTS["keep_header_on_clear"]),
        birthdate=parse_date(birthdate_raw) if birthdate_raw else None,
        user=environ.get("USER") or None,
    )
