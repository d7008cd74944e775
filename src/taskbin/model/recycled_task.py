# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from taskbin.model.entity_id import EntityId


class RecycledTask(TypedDict):
    id: EntityId
    title: str
    description: str
    due: Optional[pendulum.Date]
    category: str
    completed: bool
    created: pendulum.DateTime
    updated: pendulum.DateTime
    deleted: pendulum.DateTime
