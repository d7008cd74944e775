# SPDX-License-Identifier: MIT

from enum import StrEnum


class TaskStatusFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
