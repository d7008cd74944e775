# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from taskbin.model.entity_id import EntityId

DEFAULT_CATEGORY = "none"


class Task(TypedDict):
    id: EntityId
    title: str
    description: str
    due: Optional[pendulum.Date]
    category: str
    completed: bool
    created: pendulum.DateTime
    updated: pendulum.DateTime


class TaskFields(TypedDict):
    """Fields accepted when creating a task. The store assigns the rest."""

    title: str
    description: NotRequired[str]
    due: NotRequired[Optional[pendulum.Date]]
    category: NotRequired[str]


class TaskUpdate(TypedDict, total=False):
    """Mutable task fields. Keys left out are not touched."""

    title: str
    description: str
    due: pendulum.Date
    category: str
    completed: bool
    remove_due: bool
