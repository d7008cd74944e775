# tests/test_cli.py

from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path

import pendulum
import pytest
from typer.testing import CliRunner
from yaml import safe_load

from taskbin.repository.configuration import ConfigurationRepository
from taskbin.repository.task import TaskRepository
from taskbin.state import AppState, create_app_state
from taskbin.terminal.app import app
from taskbin.terminal.shell import run_shell
from taskbin.time import now_utc

from .fakes import FlakyTaskStore

runner = CliRunner()


def _invoke(app_state: AppState, args: list[str], input: str | None = None):
    return runner.invoke(app, args, obj=app_state, input=input)


def _add(app_state: AppState, title: str, **fields) -> str:
    task = app_state.task_store.save_new_task({"title": title, **fields})
    return task["id"]


def test_task_add_and_list(app_state: AppState) -> None:
    result = _invoke(
        app_state,
        ["task", "add", "Buy milk", "--category", "shopping", "--due", "2024-02-14"],
    )
    assert result.exit_code == 0, result.output
    assert "Buy milk" in result.output

    tasks = app_state.task_store.get_all_tasks()
    assert len(tasks) == 1
    assert tasks[0]["category"] == "shopping"
    assert tasks[0]["due"] == pendulum.date(2024, 2, 14)

    result = _invoke(app_state, ["t", "ls"])
    assert result.exit_code == 0, result.output
    assert "Buy milk" in result.output
    assert "Shopping" in result.output


def test_task_add_rejects_unknown_category(app_state: AppState) -> None:
    result = _invoke(app_state, ["task", "add", "Report", "--category", "work"])

    assert result.exit_code == 2
    assert app_state.task_store.get_all_tasks() == []


def test_task_list_filters_by_status(app_state: AppState) -> None:
    done_id = _add(app_state, "Done thing")
    _add(app_state, "Open thing")
    app_state.task_store.modify_task(done_id, {"completed": True})

    result = _invoke(app_state, ["task", "list", "--status", "active"])

    assert result.exit_code == 0, result.output
    assert "Open thing" in result.output
    assert "Done thing" not in result.output


def test_task_toggle(app_state: AppState) -> None:
    task_id = _add(app_state, "Flip me")

    result = _invoke(app_state, ["task", "toggle", task_id[:8]])

    assert result.exit_code == 0, result.output
    assert app_state.task_store.get_task(task_id)["completed"] is True


def test_task_delete_confirmed(app_state: AppState) -> None:
    task_id = _add(app_state, "Old chore")

    result = _invoke(app_state, ["task", "delete", task_id[:8]], input="y\n")

    assert result.exit_code == 0, result.output
    assert "moved to the recycle bin" in result.output
    assert "30 days" in result.output
    assert app_state.task_store.get_all_tasks() == []
    assert [t["id"] for t in app_state.recycle_bin.get_recycled_tasks()] == [task_id]


def test_task_delete_cancelled(app_state: AppState) -> None:
    task_id = _add(app_state, "Keep me")

    result = _invoke(app_state, ["task", "delete", task_id[:8]], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled." in result.output
    assert len(app_state.task_store.get_all_tasks()) == 1
    assert app_state.recycle_bin.get_recycled_tasks() == []


def test_task_delete_unknown_id_changes_nothing(app_state: AppState) -> None:
    _add(app_state, "Untouched")

    result = _invoke(app_state, ["task", "delete", "zzzz", "--yes"])

    assert result.exit_code == 0, result.output
    assert "nothing changed" in result.output
    assert len(app_state.task_store.get_all_tasks()) == 1
    assert app_state.recycle_bin.get_recycled_tasks() == []


def test_bin_list_purges_expired_entries(app_state: AppState) -> None:
    old_id = _add(app_state, "Ancient")
    new_id = _add(app_state, "Recent")
    app_state.recycle_bin.recycle(old_id)
    app_state.recycle_bin.recycle(new_id)
    old = app_state.recycle_bin_repo.get_recycled_task(old_id)
    assert old is not None
    old["deleted"] = now_utc().subtract(days=31)
    app_state.recycle_bin_repo.save_recycled_task(old)

    result = _invoke(app_state, ["bin", "list"])

    assert result.exit_code == 0, result.output
    assert "automatically deleted after 30 days" in result.output
    assert "Recent" in result.output
    assert "Ancient" not in result.output
    assert [t["id"] for t in app_state.recycle_bin.get_recycled_tasks()] == [new_id]


def test_bin_restore(app_state: AppState) -> None:
    task_id = _add(app_state, "Bring back", category="home")
    app_state.recycle_bin.recycle(task_id)

    result = _invoke(app_state, ["bin", "restore", task_id[:8]])

    assert result.exit_code == 0, result.output
    assert "Task restored." in result.output
    tasks = app_state.task_store.get_all_tasks()
    assert [(t["title"], t["category"]) for t in tasks] == [("Bring back", "home")]
    assert app_state.recycle_bin.get_recycled_tasks() == []


def test_bin_restore_unknown_id(app_state: AppState) -> None:
    result = _invoke(app_state, ["bin", "restore", "nope"])

    assert result.exit_code == 0, result.output
    assert "nothing changed" in result.output


def test_bin_purge_and_empty(app_state: AppState) -> None:
    ids = [_add(app_state, title) for title in ["one", "two", "three"]]
    for task_id in ids:
        app_state.recycle_bin.recycle(task_id)

    result = _invoke(app_state, ["bin", "purge", ids[0][:8], "--yes"])
    assert result.exit_code == 0, result.output
    assert len(app_state.recycle_bin.get_recycled_tasks()) == 2

    result = _invoke(app_state, ["bin", "empty"], input="n\n")
    assert result.exit_code == 0
    assert len(app_state.recycle_bin.get_recycled_tasks()) == 2

    result = _invoke(app_state, ["bin", "empty", "--yes"])
    assert result.exit_code == 0, result.output
    assert "Recycle bin is empty" in result.output
    assert app_state.recycle_bin.get_recycled_tasks() == []


def test_calendar_month_and_day(app_state: AppState) -> None:
    _add(app_state, "Valentine", due=pendulum.date(2024, 2, 14))

    result = _invoke(
        app_state, ["calendar", "month", "--month", "2024-02", "--select", "2024-02-14"]
    )
    assert result.exit_code == 0, result.output
    assert "February 2024" in result.output
    assert "Tasks for February 14, 2024" in result.output
    assert "Valentine" in result.output

    result = _invoke(app_state, ["cal", "day", "2024-02-15"])
    assert result.exit_code == 0, result.output
    assert "No tasks for this date." in result.output


def test_calendar_month_rejects_bad_month(app_state: AppState) -> None:
    result = _invoke(app_state, ["calendar", "month", "--month", "2024-13"])

    assert result.exit_code != 0


def test_config_set_updates_running_services(app_state: AppState, tmp_path) -> None:
    result = _invoke(
        app_state,
        ["config", "set", "--retention-days", "7", "--week-start", "monday", "--add-category", "work"],
    )

    assert result.exit_code == 0, result.output
    assert app_state.recycle_bin.retention_days == 7
    assert app_state.calendar.week_start == "monday"
    saved = safe_load((tmp_path / "config.yaml").read_text())
    assert saved["retention_days"] == 7
    assert "work" in saved["categories"]

    result = _invoke(app_state, ["task", "add", "Report", "--category", "work"])
    assert result.exit_code == 0, result.output


def test_config_set_rejects_bad_week_start(app_state: AppState) -> None:
    result = _invoke(app_state, ["config", "set", "--week-start", "friday"])

    assert result.exit_code == 2
    assert app_state.calendar.week_start == "sunday"


def _lines(*lines: str):
    pending: Iterator[str] = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError

    return read_line


def test_shell_shares_tasks_between_commands(
    app_state: AppState, tmp_path, capsys: pytest.CaptureFixture[str]
) -> None:
    keep_id = _add(app_state, "Keep")
    drop_id = _add(app_state, "Drop")

    run_shell(
        app,
        app_state,
        read_line=_lines(
            'task add "Buy bread" --category shopping',
            "not-a-command",
            f"task delete {drop_id[:8]} --yes",
            "task list",
            "exit",
            "task add never-run",
        ),
    )

    titles = [t["title"] for t in app_state.task_store.get_all_tasks()]
    assert titles == ["Keep", "Buy bread"]
    assert keep_id in [t["id"] for t in app_state.task_store.get_all_tasks()]
    saved = safe_load((tmp_path / "recycle_bin.yaml").read_text())
    assert [t["id"] for t in saved["recycled_tasks"]] == [drop_id]
    assert "Buy bread" in capsys.readouterr().out


def test_shell_stops_at_end_of_input(app_state: AppState) -> None:
    run_shell(app, app_state, read_line=_lines("task add Solo"))

    assert [t["title"] for t in app_state.task_store.get_all_tasks()] == ["Solo"]


def test_shell_survives_declined_confirmation(
    app_state: AppState, monkeypatch: pytest.MonkeyPatch
) -> None:
    task_id = _add(app_state, "Keep me")
    monkeypatch.setattr("sys.stdin", io.StringIO("n\n"))

    run_shell(
        app,
        app_state,
        read_line=_lines(f"task delete {task_id[:8]}", "task add After"),
    )

    assert [t["title"] for t in app_state.task_store.get_all_tasks()] == ["Keep me", "After"]
    assert app_state.recycle_bin.get_recycled_tasks() == []


def test_shell_survives_aborted_confirmation(
    app_state: AppState, monkeypatch: pytest.MonkeyPatch
) -> None:
    task_id = _add(app_state, "Keep me")
    # No answer at all aborts the prompt
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    run_shell(
        app,
        app_state,
        read_line=_lines(f"task delete {task_id[:8]}", "task add After"),
    )

    assert [t["title"] for t in app_state.task_store.get_all_tasks()] == ["Keep me", "After"]


def test_shell_survives_out_of_range_dates(app_state: AppState) -> None:
    run_shell(
        app,
        app_state,
        read_line=_lines(
            "calendar month --month 9999-12",
            "calendar month --month 0000-01",
            "task add Late --due 99999999",
            "task add After",
        ),
    )

    assert [t["title"] for t in app_state.task_store.get_all_tasks()] == ["After"]


def test_shell_reports_unexpected_errors_and_keeps_tasks(
    app_state: AppState,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _add(app_state, "Survivor")

    def broken_grid(*args, **kwargs):
        raise RuntimeError("grid exploded")

    monkeypatch.setattr(app_state.calendar, "month_grid", broken_grid)

    run_shell(
        app,
        app_state,
        read_line=_lines("calendar month --month 2024-02", "task add After"),
    )

    assert "grid exploded" in capsys.readouterr().out
    assert [t["title"] for t in app_state.task_store.get_all_tasks()] == ["Survivor", "After"]


@pytest.fixture()
def flaky_app_state(tmp_path: Path) -> tuple[AppState, FlakyTaskStore]:
    flaky = FlakyTaskStore(TaskRepository())
    state = create_app_state(
        config_repo=ConfigurationRepository(tmp_path / "config.yaml"),
        task_store=flaky,
        recycle_bin_path=tmp_path / "recycle_bin.yaml",
    )
    return state, flaky


def test_bin_list_finishes_interrupted_recycle(
    flaky_app_state: tuple[AppState, FlakyTaskStore],
) -> None:
    app_state, flaky = flaky_app_state
    task_id = flaky.inner.save_new_task({"title": "Half gone"})["id"]
    flaky.fail_deletes = True
    app_state.recycle_bin.recycle(task_id)
    assert len(flaky.inner.get_all_tasks()) == 1
    flaky.fail_deletes = False

    result = _invoke(app_state, ["bin", "list"])

    assert result.exit_code == 0, result.output
    assert flaky.inner.get_all_tasks() == []
    assert [t["id"] for t in app_state.recycle_bin.get_recycled_tasks()] == [task_id]


def test_bin_restore_reports_failed_create(
    flaky_app_state: tuple[AppState, FlakyTaskStore],
) -> None:
    app_state, flaky = flaky_app_state
    task_id = flaky.inner.save_new_task({"title": "Stuck"})["id"]
    app_state.recycle_bin.recycle(task_id)
    flaky.fail_creates = True

    result = _invoke(app_state, ["bin", "restore", task_id[:8]])

    assert result.exit_code == 1
    assert "Restore failed" in result.output
    assert "nothing changed" not in result.output
    assert [t["id"] for t in app_state.recycle_bin.get_recycled_tasks()] == [task_id]
