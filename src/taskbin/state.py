# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from taskbin import configuration
from taskbin.repository.configuration import ConfigurationRepository
from taskbin.repository.recycle_bin import RecycleBinRepository
from taskbin.repository.task import TaskRepository, TaskStore
from taskbin.service.calendar import CalendarIndex
from taskbin.service.recycle_bin import RecycleBinManager


@dataclass
class AppState:
    """Everything a command needs, built once per process and passed down."""

    config_repo: ConfigurationRepository
    task_store: TaskStore
    recycle_bin_repo: RecycleBinRepository
    recycle_bin: RecycleBinManager
    calendar: CalendarIndex

    def flush(self) -> None:
        self.config_repo.flush()
        self.recycle_bin_repo.flush()


def create_app_state(
    config_repo: Optional[ConfigurationRepository] = None,
    task_store: Optional[TaskStore] = None,
    recycle_bin_path: Optional[Path] = None,
) -> AppState:
    """
    Wire the concrete stores and services together.

    Everything is injectable so tests can build a state on temporary paths
    without touching the user's config or data directories.
    """
    if config_repo is None:
        config_repo = ConfigurationRepository()
    if task_store is None:
        task_store = TaskRepository()
    if recycle_bin_path is None:
        recycle_bin_path = configuration.DATA_RECYCLE_BIN_PATH

    config = config_repo.get_config()
    recycle_bin_repo = RecycleBinRepository(recycle_bin_path)

    return AppState(
        config_repo=config_repo,
        task_store=task_store,
        recycle_bin_repo=recycle_bin_repo,
        recycle_bin=RecycleBinManager(
            task_store,
            recycle_bin_repo,
            retention_days=config["retention_days"],
        ),
        calendar=CalendarIndex(task_store, week_start=config["week_start"]),
    )
