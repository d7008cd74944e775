# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from taskbin.configuration import WEEK_STARTS
from taskbin.model.task_filter import TaskStatusFilter


def validate_category(category: Optional[str], known_categories: list[str]) -> Optional[str]:
    if category is None:
        return None
    category = category.strip().lower()
    if category not in known_categories:
        raise typer.BadParameter(
            f"Unknown category '{category}'. Known categories: "
            f"{', '.join(known_categories)} (add one with 'config set --add-category')"
        )
    return category


def validate_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    status = status.strip().lower()
    if status not in [s.value for s in TaskStatusFilter]:
        raise typer.BadParameter(
            f"Status must be one of: {', '.join(s.value for s in TaskStatusFilter)}"
        )
    return status


def validate_week_start(week_start: Optional[str]) -> Optional[str]:
    if week_start is None:
        return None
    week_start = week_start.strip().lower()
    if week_start not in WEEK_STARTS:
        raise typer.BadParameter(f"Week start must be one of: {', '.join(WEEK_STARTS)}")
    return week_start


def validate_retention_days(retention_days: Optional[int]) -> Optional[int]:
    if retention_days is None:
        return None
    if retention_days < 1:
        raise typer.BadParameter("Retention must be at least 1 day")
    return retention_days
