# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from taskbin.error import TaskNotFoundError, TaskStoreError
from taskbin.model.entity_id import EntityId
from taskbin.model.task import Task
from taskbin.model.task_filter import TaskStatusFilter
from taskbin.repository.task import TaskStore

logger = logging.getLogger(__name__)


def toggle_task_completion(task_store: TaskStore, task_id: EntityId) -> list[Task]:
    """
    Flip a task between open and completed, returning the refreshed list.

    When the store cannot be read afterwards the list read before the toggle
    is returned.
    """
    try:
        tasks = task_store.get_all_tasks()
    except TaskStoreError:
        logger.exception("Could not read task store, not toggling task %s", task_id)
        return []

    task = next((t for t in tasks if t["id"] == task_id), None)
    if task is None:
        logger.debug("Toggle of missing task %s ignored", task_id)
        return tasks

    try:
        task_store.modify_task(task_id, {"completed": not task["completed"]})
    except TaskNotFoundError:
        logger.debug("Task %s vanished before it could be toggled", task_id)
    except TaskStoreError:
        logger.exception("Toggling task %s failed", task_id)

    try:
        return task_store.get_all_tasks()
    except TaskStoreError:
        logger.exception("Could not read task store after toggle")
        return tasks


def filter_tasks(
    tasks: list[Task],
    status: TaskStatusFilter = TaskStatusFilter.ALL,
    category: Optional[str] = None,
) -> list[Task]:
    filtered_tasks = tasks
    if status == TaskStatusFilter.COMPLETED:
        filtered_tasks = [task for task in filtered_tasks if task["completed"]]
    elif status == TaskStatusFilter.ACTIVE:
        filtered_tasks = [task for task in filtered_tasks if not task["completed"]]

    if category is not None and category != "all":
        filtered_tasks = [
            task for task in filtered_tasks if task["category"] == category
        ]
    return filtered_tasks


def resolve_task_id(candidates: list[EntityId], id_prefix: str) -> EntityId:
    """
    Resolve a full id from a unique prefix.

    Raises TaskNotFoundError when nothing matches and ValueError when the
    prefix is ambiguous.
    """
    id_prefix = id_prefix.strip().lower()
    if id_prefix in candidates:
        return id_prefix
    matches = [candidate for candidate in candidates if candidate.startswith(id_prefix)]
    if not id_prefix or not matches:
        raise TaskNotFoundError(id_prefix)
    if len(matches) > 1:
        raise ValueError(f"id prefix '{id_prefix}' matches {len(matches)} tasks")
    return matches[0]
