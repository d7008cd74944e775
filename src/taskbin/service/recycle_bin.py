# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from taskbin import time
from taskbin.configuration import DEFAULT_RETENTION_DAYS
from taskbin.error import TaskNotFoundError, TaskStoreError, TaskValidationError
from taskbin.model.entity_id import EntityId
from taskbin.model.recycled_task import RecycledTask
from taskbin.model.task import Task, TaskFields
from taskbin.repository.recycle_bin import RecycleBinRepository
from taskbin.repository.task import TaskStore

logger = logging.getLogger(__name__)


class RecycleBinManager:
    """
    Soft-delete lifecycle on top of a task store.

    Tasks are copied into the recycle bin before they are removed from
    the store, so a failure in between leaves a task in both places
    rather than in neither. Store failures are logged and never raised;
    callers get back the best state that could be read.
    """

    def __init__(
        self,
        task_store: TaskStore,
        recycle_bin: RecycleBinRepository,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        clock: Callable[[], pendulum.DateTime] = time.now_utc,
    ) -> None:
        self._task_store = task_store
        self._recycle_bin = recycle_bin
        self.retention_days = retention_days
        self._clock = clock
        self._last_known_tasks: list[Task] = []

    def __read_tasks(self) -> list[Task]:
        self._last_known_tasks = self._task_store.get_all_tasks()
        return list(self._last_known_tasks)

    def __get_tasks(self) -> list[Task]:
        try:
            return self.__read_tasks()
        except TaskStoreError:
            logger.warning(
                "Could not read task store, using last known task list",
                exc_info=True,
            )
        return list(self._last_known_tasks)

    def __delete_from_store(self, task_id: EntityId) -> None:
        try:
            self._task_store.delete_task(task_id)
        except TaskNotFoundError:
            # Already gone, which is what we wanted
            logger.debug("Task %s already absent from store", task_id)
        except TaskStoreError:
            logger.exception(
                "Deleting task %s from store failed; it stays in the recycle bin",
                task_id,
            )

    def get_recycled_tasks(self) -> list[RecycledTask]:
        return self._recycle_bin.get_all_recycled_tasks()

    def recycle(self, task_id: EntityId) -> list[Task]:
        try:
            tasks = self.__read_tasks()
        except TaskStoreError:
            # Without a fresh snapshot there is nothing safe to act on
            logger.warning(
                "Could not read task store, not recycling task %s", task_id, exc_info=True
            )
            return list(self._last_known_tasks)

        task = next((t for t in tasks if t["id"] == task_id), None)
        if task is None:
            return tasks

        existing = self._recycle_bin.get_recycled_task(task_id)
        if existing is not None:
            # Replaying an interrupted recycle: keep the first deletion stamp
            deleted = existing["deleted"]
        else:
            deleted = self._clock()

        recycled_task: RecycledTask = {
            "id": task["id"],
            "title": task["title"],
            "description": task["description"],
            "due": task["due"],
            "category": task["category"],
            "completed": task["completed"],
            "created": task["created"],
            "updated": task["updated"],
            "deleted": deleted,
        }
        self._recycle_bin.save_recycled_task(recycled_task)
        # The bin entry must be on disk before the store forgets the task
        self._recycle_bin.flush()

        self.__delete_from_store(task_id)
        logger.info("Recycled task id=%s title=%r", task_id, task["title"])
        return self.__get_tasks()

    def restore(self, task_id: EntityId) -> list[RecycledTask]:
        recycled_task = self._recycle_bin.get_recycled_task(task_id)
        if recycled_task is None:
            return self.get_recycled_tasks()

        try:
            active_ids = {task["id"] for task in self.__read_tasks()}
        except TaskStoreError:
            logger.warning(
                "Could not read task store, not restoring task %s", task_id, exc_info=True
            )
            return self.get_recycled_tasks()

        if task_id in active_ids:
            # The recycle never got as far as deleting it; the task is already back
            self._recycle_bin.remove_recycled_task(task_id)
            self._recycle_bin.flush()
            logger.info("Task id=%s still active, dropped its recycle bin entry", task_id)
            return self.get_recycled_tasks()

        fields: TaskFields = {
            "title": recycled_task["title"],
            "description": recycled_task["description"],
            "due": recycled_task["due"],
            "category": recycled_task["category"],
        }
        try:
            restored = self._task_store.save_new_task(fields)
        except (TaskStoreError, TaskValidationError):
            logger.exception(
                "Restoring task %s failed; leaving it in the recycle bin", task_id
            )
            return self.get_recycled_tasks()

        self._recycle_bin.remove_recycled_task(task_id)
        self._recycle_bin.flush()
        logger.info("Restored task id=%s as id=%s", task_id, restored["id"])
        return self.get_recycled_tasks()

    def permanently_delete(self, task_id: EntityId) -> list[RecycledTask]:
        if self._recycle_bin.remove_recycled_task(task_id):
            self._recycle_bin.flush()
            logger.info("Permanently deleted task id=%s", task_id)
        return self.get_recycled_tasks()

    def empty_all(self) -> list[RecycledTask]:
        count = self._recycle_bin.remove_all()
        self._recycle_bin.flush()
        logger.info("Emptied recycle bin, %s entries removed", count)
        return self.get_recycled_tasks()

    def expiry_cutoff(self) -> pendulum.DateTime:
        return self._clock().subtract(days=self.retention_days)

    def cleanup_expired(self) -> list[RecycledTask]:
        cutoff = self.expiry_cutoff()
        removed = self._recycle_bin.remove_deleted_before(cutoff)
        if removed:
            self._recycle_bin.flush()
            logger.info(
                "Removed %s expired entries from recycle bin (cutoff=%s)",
                removed,
                cutoff,
            )
        return self.get_recycled_tasks()

    def expires_at(self, recycled_task: RecycledTask) -> pendulum.DateTime:
        return recycled_task["deleted"].add(days=self.retention_days)

    def reconcile(self) -> list[RecycledTask]:
        """
        Finish recycles that were interrupted after the bin entry was written.

        Any bin entry whose id is still active in the store has its delete
        replayed. Safe to call any number of times.
        """
        try:
            active_ids = {task["id"] for task in self._task_store.get_all_tasks()}
        except TaskStoreError:
            logger.warning("Could not read task store, skipping reconcile")
            return self.get_recycled_tasks()

        for recycled_task in self.get_recycled_tasks():
            if recycled_task["id"] in active_ids:
                logger.info(
                    "Replaying interrupted recycle of task id=%s", recycled_task["id"]
                )
                self.__delete_from_store(recycled_task["id"])
        return self.get_recycled_tasks()

    def days_remaining(
        self, recycled_task: RecycledTask, now: Optional[pendulum.DateTime] = None
    ) -> int:
        if now is None:
            now = self._clock()
        return max(0, now.diff(self.expires_at(recycled_task), False).in_days())
