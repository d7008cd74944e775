# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from taskbin import time
from taskbin.error import TaskStoreError
from taskbin.model.calendar import MONTH_GRID_SIZE, CalendarDay
from taskbin.model.task import Task
from taskbin.repository.task import TaskStore

logger = logging.getLogger(__name__)

# Grids for January of year 1 and December of 9999 would need dates outside
# what pendulum can represent
MIN_GRID_YEAR = 2
MAX_GRID_YEAR = 9998


def first_weekday_offset(first_of_month: pendulum.Date, week_start: str) -> int:
    """Number of leading cells needed before day 1 of the month."""
    # date.weekday(): Monday = 0 ... Sunday = 6
    if week_start == "monday":
        return first_of_month.weekday()
    return (first_of_month.weekday() + 1) % 7


class CalendarIndex:
    """
    Date oriented queries over the live task store.

    Nothing is cached: every call reads the store again, so the results
    always match what is active right now. Dates are matched as
    'YYYY-MM-DD' strings.
    """

    def __init__(
        self,
        task_store: TaskStore,
        week_start: str = "sunday",
        today: Callable[[], pendulum.Date] = time.today_local,
    ) -> None:
        self._task_store = task_store
        self.week_start = week_start
        self._today = today

    def __get_tasks(self) -> list[Task]:
        try:
            return self._task_store.get_all_tasks()
        except TaskStoreError:
            logger.warning("Could not read task store for calendar", exc_info=True)
            return []

    def tasks_on_date(self, date: pendulum.Date) -> list[Task]:
        date_str = time.date_to_str(date)
        return [
            task
            for task in self.__get_tasks()
            if task["due"] is not None and time.date_to_str(task["due"]) == date_str
        ]

    def dates_with_tasks(self) -> set[str]:
        return {
            time.date_to_str(task["due"])
            for task in self.__get_tasks()
            if task["due"] is not None
        }

    def month_grid(
        self,
        year: int,
        month: int,
        selected: Optional[pendulum.Date] = None,
    ) -> list[CalendarDay]:
        if year < MIN_GRID_YEAR or year > MAX_GRID_YEAR:
            raise ValueError(f"year {year} is outside {MIN_GRID_YEAR}..{MAX_GRID_YEAR}")
        first_of_month = pendulum.date(year, month, 1)
        offset = first_weekday_offset(first_of_month, self.week_start)
        grid_start = first_of_month.subtract(days=offset)

        dates_with_tasks = self.dates_with_tasks()
        today_str = time.date_to_str(self._today())
        selected_str = time.date_to_str(selected) if selected is not None else None

        cells: list[CalendarDay] = []
        for index in range(MONTH_GRID_SIZE):
            date = grid_start.add(days=index)
            date_str = time.date_to_str(date)
            in_month = date.month == month and date.year == year
            cells.append(
                {
                    "date": date_str,
                    "day": date.day,
                    "other_month": not in_month,
                    "is_today": in_month and date_str == today_str,
                    "is_selected": in_month and date_str == selected_str,
                    "has_tasks": in_month and date_str in dates_with_tasks,
                }
            )
        return cells
