# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pendulum
import pytest

from taskbin.repository.configuration import ConfigurationRepository
from taskbin.repository.recycle_bin import RecycleBinRepository
from taskbin.repository.task import TaskRepository
from taskbin.service.calendar import CalendarIndex
from taskbin.service.recycle_bin import RecycleBinManager
from taskbin.state import AppState, create_app_state
from taskbin.view import state as view_state

from .fakes import FixedClock, FlakyTaskStore


@pytest.fixture(autouse=True)
def no_header():
    # Keep CLI output down to the reports themselves
    view_state.set_show_header(False)
    yield
    view_state.set_show_header(True)


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(pendulum.datetime(2024, 3, 15, 12, 0, 0, tz="UTC"))


@pytest.fixture()
def task_store(clock: FixedClock) -> TaskRepository:
    return TaskRepository(clock=clock)


@pytest.fixture()
def flaky_store(task_store: TaskRepository) -> FlakyTaskStore:
    return FlakyTaskStore(task_store)


@pytest.fixture()
def bin_path(tmp_path: Path) -> Path:
    return tmp_path / "recycle_bin.yaml"


@pytest.fixture()
def recycle_bin_repo(bin_path: Path) -> RecycleBinRepository:
    return RecycleBinRepository(bin_path)


@pytest.fixture()
def manager(
    task_store: TaskRepository,
    recycle_bin_repo: RecycleBinRepository,
    clock: FixedClock,
) -> RecycleBinManager:
    return RecycleBinManager(task_store, recycle_bin_repo, retention_days=30, clock=clock)


@pytest.fixture()
def calendar_index(task_store: TaskRepository) -> CalendarIndex:
    return CalendarIndex(
        task_store, week_start="sunday", today=lambda: pendulum.date(2024, 2, 14)
    )


@pytest.fixture()
def app_state(tmp_path: Path) -> AppState:
    """
    AppState on temporary paths with the real in-memory task store.

    Nothing here reads the user's config or data directories.
    """
    return create_app_state(
        config_repo=ConfigurationRepository(tmp_path / "config.yaml"),
        task_store=TaskRepository(),
        recycle_bin_path=tmp_path / "recycle_bin.yaml",
    )
