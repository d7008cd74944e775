# SPDX-License-Identifier: MIT


class TaskbinError(Exception):
    pass


class TaskNotFoundError(TaskbinError, LookupError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class TaskValidationError(TaskbinError, ValueError):
    pass


class TaskStoreError(TaskbinError):
    """The task store could not be reached or failed to complete a request."""
