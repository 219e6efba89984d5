from datetime import date

import pytest

from days.cli import main

TODAY = date(2024, 1, 10)


@pytest.fixture
def env(tmp_path):
    days_dir = tmp_path / ".days"
    days_dir.mkdir()
    (days_dir / "events.csv").write_text(
        "date,category,description\n"
        "2024-01-01,holiday,New Year\n"
        "2024-01-10,work,Standup\n"
        "2024-01-15,work,Planning\n"
        "2024-02-01,,Dentist\n",
        encoding="utf-8",
    )
    return {"HOME": str(tmp_path)}


def run(capsys, env, *argv):
    code = main(list(argv), environ=env, today=TODAY)
    out, err = capsys.readouterr()
    return code, out.splitlines(), err


def test_no_arguments(capsys, env):
    code, out, _ = run(capsys, env)
    assert code == 0
    assert out == ["No arguments given"]


def test_list_all(capsys, env):
    code, out, _ = run(capsys, env, "list")
    assert code == 0
    assert out == [
        "2024-01-01: New Year (holiday) - 9 days ago",
        "2024-01-10: Standup (work) - today",
        "2024-01-15: Planning (work) - in 5 days",
        "2024-02-01: Dentist () - in 22 days",
    ]


def test_list_today(capsys, env):
    _, out, _ = run(capsys, env, "list", "--today")
    assert out == ["2024-01-10: Standup (work) - today"]


def test_list_before_and_after_select_outside_window(capsys, env):
    _, out, _ = run(capsys, env, "list", "--before-date", "2024-01-10", "--after-date", "2024-01-15")
    assert [line[:10] for line in out] == ["2024-01-01", "2024-02-01"]


def test_list_categories_exclude(capsys, env):
    _, out, _ = run(capsys, env, "list", "--categories", "work,holiday", "--exclude")
    assert out == ["2024-02-01: Dentist () - in 22 days"]


def test_list_no_matches(capsys, env):
    _, out, _ = run(capsys, env, "list", "--date", "2030-01-01")
    assert out == ["No events found on the given date"]


def test_list_bad_date_is_not_fatal(capsys, env):
    code, out, err = run(capsys, env, "list", "--before-date", "2024-02-30")
    assert code == 0
    assert out == []
    assert "bad date: 2024-02-30" in err


def test_list_conflicting_filters(capsys, env):
    code, _, err = run(capsys, env, "list", "--today", "--no-category")
    assert code == 2
    assert "only one filter" in err


def test_add_defaults_to_today(capsys, env, tmp_path):
    code, out, _ = run(capsys, env, "add", "--category", "work", "--description", "Retro")
    assert code == 0
    assert out == ["Added: 2024-01-10: Retro (work) - today"]
    lines = (tmp_path / ".days" / "events.csv").read_text(encoding="utf-8").splitlines()
    assert lines[-1] == "2024-01-10,work,Retro"


def test_delete_dry_run_then_delete(capsys, env, tmp_path):
    path = tmp_path / ".days" / "events.csv"
    before = path.read_bytes()

    _, out, _ = run(capsys, env, "delete", "--category", "work", "--dry-run")
    assert out[-1] == "Would delete 2 event(s)"
    assert path.read_bytes() == before

    _, out, _ = run(capsys, env, "delete", "--category", "work")
    assert out[0] == "Deleted: 2024-01-10: Standup (work) - today"
    assert "work" not in path.read_text(encoding="utf-8")


def test_delete_needs_criteria(capsys, env):
    code, out, _ = run(capsys, env, "delete")
    assert code == 0
    assert out == ["No deletion criteria given"]


def test_delete_all_respects_header_setting(capsys, env, tmp_path):
    env = dict(env, DAYS_KEEP_HEADER="false")
    run(capsys, env, "delete", "--all")
    assert (tmp_path / ".days" / "events.csv").read_bytes() == b""


def test_missing_home_exits_1(capsys):
    code, _, _ = run(capsys, {}, "list")
    assert code == 1


def test_missing_storage_directory_exits_1(capsys, tmp_path):
    code, out, _ = run(capsys, {"HOME": str(tmp_path)}, "list")
    assert code == 1
    assert out == [f"{tmp_path / '.days'} does not exist, please create it"]


def test_birthday_greeting_is_printed(capsys, env):
    env = dict(env, BIRTHDATE="2000-01-10", USER="sam")
    _, out, _ = run(capsys, env, "list", "--today")
    assert out[0].startswith("Happy birthday, sam! You are")


def test_list_and_dry_run_delete_see_the_same_rows(capsys, tmp_path):
    days_dir = tmp_path / ".days"
    days_dir.mkdir()
    (days_dir / "events.csv").write_bytes(
        b"date,category,description\n"
        b'2024-01-01,work,"oops\n'
        b"2024-01-02,home,caf\xe9\n"
        b"2024-01-12,home,Laundry\n"
    )
    env = {"HOME": str(tmp_path)}

    code, listed, _ = run(capsys, env, "list", "--categories", "home")
    assert code == 0
    assert listed == ["2024-01-12: Laundry (home) - in 2 days"]

    _, planned, _ = run(capsys, env, "delete", "--category", "home", "--dry-run")
    assert planned == ["Would delete: 2024-01-12: Laundry (home) - in 2 days", "Would delete 1 event(s)"]
