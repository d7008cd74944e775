# SPDX-License-Identifier: MIT

from taskbin.model.entity_id import generate_entity_id
from taskbin.model.task import DEFAULT_CATEGORY, Task
from taskbin.time import now_utc


def get_task_template() -> Task:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "title": "",
        "description": "",
        "due": None,
        "category": DEFAULT_CATEGORY,
        "completed": False,
        "created": now,
        "updated": now,
    }
