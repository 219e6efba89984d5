"""Error taxonomy for the event log."""

from __future__ import annotations


class DaysError(Exception):
    """Base class for every error raised by the event log."""


class InvalidDate(DaysError, ValueError):
    """Date text that is not a calendar-valid YYYY-MM-DD value."""

    def __init__(self, text: str):
        super().__init__(f"bad date: {text}")
        self.text = text


class MissingHomeDirectory(DaysError):
    """Neither HOME nor USERPROFILE is set."""


class StoreMissing(DaysError):
    def __init__(self, path):
        super().__init__(f"{path} does not exist, please create it")
        self.path = path


class StoreWriteError(DaysError, OSError):
    """Appending to the backing file failed."""


class StoreRewriteError(DaysError, OSError):
    """Rewriting the backing file during a delete failed."""
