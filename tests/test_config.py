from datetime import date
from pathlib import Path

import pytest

from days.config import home_directory, load_settings
from days.errors import MissingHomeDirectory, StoreMissing


def test_home_falls_back_to_userprofile():
    assert home_directory({"HOME": "/home/a", "USERPROFILE": "C:/b"}) == "/home/a"
    assert home_directory({"USERPROFILE": "C:/b"}) == "C:/b"
    assert home_directory({}) is None


def test_default_settings(tmp_path):
    settings = load_settings({"HOME": str(tmp_path)})
    assert settings.days_dir == tmp_path / ".days"
    assert settings.events_file == "events.csv"
    assert settings.keep_header_on_clear is True
    assert settings.birthdate is None


def test_missing_home_directory():
    with pytest.raises(MissingHomeDirectory):
        load_settings({})


def test_overrides(tmp_path):
    settings = load_settings(
        {
            "DAYS_DIR": str(tmp_path),
            "DAYS_EVENTS_FILE": "log.csv",
            "DAYS_KEEP_HEADER": "no",
            "BIRTHDATE": "1990-05-17",
            "USER": "sam",
        }
    )
    assert settings.events_path() == tmp_path / "log.csv"
    assert settings.keep_header_on_clear is False
    assert settings.birthdate == date(1990, 5, 17)
    assert settings.user == "sam"


def test_invalid_flag(tmp_path):
    with pytest.raises(ValueError):
        load_settings({"DAYS_DIR": str(tmp_path), "DAYS_KEEP_HEADER": "maybe"})


def test_events_path_requires_directory(tmp_path):
    settings = load_settings({"HOME": str(tmp_path)})
    with pytest.raises(StoreMissing) as excinfo:
        settings.events_path()
    assert Path(excinfo.value.path) == tmp_path / ".days"
    assert "please create it" in str(excinfo.value)
