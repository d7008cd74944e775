# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from taskbin import time
from taskbin.model.entity_id import EntityId
from taskbin.model.recycled_task import RecycledTask

logger = logging.getLogger(__name__)


class RecycleBinRepository:
    """
    Side store for recycled tasks, keyed by the id the task had while active.

    Records are written to disk as a flat list under "recycled_tasks".
    When no path is given the bin lives in memory only.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._recycled_tasks: Optional[list[RecycledTask]] = None
        self.is_dirty = False

    @property
    def recycled_tasks(self) -> list[RecycledTask]:
        if self._recycled_tasks is None:
            self.__load_data()
        if self._recycled_tasks is None:
            raise ValueError()
        return self._recycled_tasks

    def __load_data(self) -> None:
        self._recycled_tasks = []
        if self._path is None or not self._path.is_file():
            return
        data = load(self._path.read_text(), Loader=Loader)
        if data is None:
            return
        for raw_task in data.get("recycled_tasks") or []:
            self._recycled_tasks.append(
                self.__convert_recycled_task_for_deserialization(raw_task)
            )
        logger.debug(
            "Recycle bin loaded path=%s entries=%s",
            self._path,
            len(self._recycled_tasks),
        )

    def __save_data(self) -> None:
        if self._path is None:
            return
        serializable_tasks = [
            self.__convert_recycled_task_for_serialization(deepcopy(recycled_task))
            for recycled_task in self.recycled_tasks
        ]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            dump({"recycled_tasks": serializable_tasks}, Dumper=Dumper)
        )

    def flush(self) -> bool:
        if self._recycled_tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_recycled_task_for_serialization(
        self, recycled_task: RecycledTask
    ) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], recycled_task)
        serializable_task["due"] = time.date_to_str_optional(serializable_task["due"])
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["updated"] = time.datetime_to_iso_str(
            serializable_task["updated"]
        )
        serializable_task["deleted"] = time.datetime_to_iso_str(
            serializable_task["deleted"]
        )
        return serializable_task

    def __convert_recycled_task_for_deserialization(
        self, raw_task: dict[str, Any]
    ) -> RecycledTask:
        deserializable_task = raw_task
        deserializable_task["due"] = time.date_from_str_optional(
            deserializable_task.get("due")
        )
        deserializable_task["created"] = time.datetime_from_str(
            deserializable_task["created"]
        )
        deserializable_task["updated"] = time.datetime_from_str(
            deserializable_task.get("updated") or raw_task["created"]
        )
        deserializable_task["deleted"] = time.datetime_from_str(
            deserializable_task["deleted"]
        )
        deserializable_task.setdefault("description", "")
        deserializable_task.setdefault("category", "none")
        deserializable_task.setdefault("completed", False)
        return cast(RecycledTask, deserializable_task)

    def get_all_recycled_tasks(self) -> list[RecycledTask]:
        return deepcopy(self.recycled_tasks)

    def get_recycled_task(self, id: EntityId) -> Optional[RecycledTask]:
        for recycled_task in self.recycled_tasks:
            if recycled_task["id"] == id:
                return deepcopy(recycled_task)
        return None

    def save_recycled_task(self, recycled_task: RecycledTask) -> None:
        """Add an entry, replacing any entry already held under the same id."""
        self.is_dirty = True
        for index, existing in enumerate(self.recycled_tasks):
            if existing["id"] == recycled_task["id"]:
                self.recycled_tasks[index] = deepcopy(recycled_task)
                return
        self.recycled_tasks.append(deepcopy(recycled_task))

    def remove_recycled_task(self, id: EntityId) -> bool:
        remaining = [task for task in self.recycled_tasks if task["id"] != id]
        if len(remaining) == len(self.recycled_tasks):
            return False
        self._recycled_tasks = remaining
        self.is_dirty = True
        return True

    def remove_all(self) -> int:
        count = len(self.recycled_tasks)
        self._recycled_tasks = []
        self.is_dirty = True
        return count

    def remove_deleted_before(self, cutoff: pendulum.DateTime) -> int:
        """Drop every entry deleted strictly before the cutoff."""
        remaining = [
            task for task in self.recycled_tasks if not task["deleted"] < cutoff
        ]
        removed = len(self.recycled_tasks) - len(remaining)
        if removed:
            self._recycled_tasks = remaining
            self.is_dirty = True
        return removed
