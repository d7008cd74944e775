# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Callable, Protocol

import pendulum

from taskbin import time
from taskbin.error import TaskNotFoundError, TaskValidationError
from taskbin.model.entity_id import EntityId
from taskbin.model.task import DEFAULT_CATEGORY, Task, TaskFields, TaskUpdate
from taskbin.template.task import get_task_template

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    """
    What the recycle bin and the calendar need from wherever active tasks live.

    Implementations raise TaskNotFoundError for unknown ids,
    TaskValidationError for bad input, and TaskStoreError when the
    store itself cannot be reached.
    """

    def get_all_tasks(self) -> list[Task]: ...

    def get_task(self, id: EntityId) -> Task: ...

    def save_new_task(self, fields: TaskFields) -> Task: ...

    def modify_task(self, id: EntityId, update: TaskUpdate) -> Task: ...

    def delete_task(self, id: EntityId) -> None: ...


def _validate_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise TaskValidationError("title is required")
    return title


def _validate_category(category: str) -> str:
    category = category.strip().lower()
    if not category:
        raise TaskValidationError("category cannot be empty")
    return category


class TaskRepository:
    """Active tasks held in process memory, in insertion order."""

    def __init__(
        self, clock: Callable[[], pendulum.DateTime] = time.now_utc
    ) -> None:
        self._tasks: list[Task] = []
        self._clock = clock

    def __find(self, id: EntityId) -> Task:
        for task in self._tasks:
            if task["id"] == id:
                return task
        raise TaskNotFoundError(id)

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(self._tasks)

    def get_task(self, id: EntityId) -> Task:
        return deepcopy(self.__find(id))

    def save_new_task(self, fields: TaskFields) -> Task:
        title = _validate_title(fields.get("title") or "")
        category = _validate_category(fields.get("category") or DEFAULT_CATEGORY)

        task = get_task_template()
        existing_ids = {t["id"] for t in self._tasks}
        while task["id"] in existing_ids:
            task = get_task_template()

        now = self._clock()
        task["title"] = title
        task["description"] = fields.get("description") or ""
        task["due"] = fields.get("due")
        task["category"] = category
        task["created"] = now
        task["updated"] = now

        self._tasks.append(task)
        logger.debug("Task added id=%s due=%s", task["id"], task["due"])
        return deepcopy(task)

    def modify_task(self, id: EntityId, update: TaskUpdate) -> Task:
        task = self.__find(id)

        # Validate everything before touching the stored task
        title = _validate_title(update["title"]) if "title" in update else None
        category = (
            _validate_category(update["category"]) if "category" in update else None
        )

        if title is not None:
            task["title"] = title
        if "description" in update:
            task["description"] = update["description"]
        if "due" in update:
            task["due"] = update["due"]
        if update.get("remove_due", False):
            task["due"] = None
        if category is not None:
            task["category"] = category
        if "completed" in update:
            task["completed"] = update["completed"]
        task["updated"] = self._clock()

        logger.debug("Task modified id=%s fields=%s", id, sorted(update.keys()))
        return deepcopy(task)

    def delete_task(self, id: EntityId) -> None:
        task = self.__find(id)
        self._tasks.remove(task)
        logger.debug("Task deleted id=%s", id)
