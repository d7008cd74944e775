# SPDX-License-Identifier: MIT

import pendulum

from taskbin.model.entity_id import EntityId
from taskbin.model.task import Task

SHORT_ID_LENGTH = 8


def short_id(id: EntityId) -> str:
    return id[:SHORT_ID_LENGTH]


def task_state(task: Task) -> str:
    """
    Get the state symbol for a task.

    Returns:
        "X" if completed, " " if open
    """
    if task["completed"]:
        return "X"
    return " "


def task_age(task: Task) -> str:
    now = pendulum.now()
    return now.diff_for_humans(task["created"], absolute=True)


def format_category(category: str) -> str:
    if category == "none":
        return ""
    return category.capitalize()
