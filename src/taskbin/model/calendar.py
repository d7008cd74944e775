# SPDX-License-Identifier: MIT

from typing import TypedDict

# 6 weeks x 7 days
MONTH_GRID_SIZE = 42


class CalendarDay(TypedDict):
    date: str
    day: int
    other_month: bool
    is_today: bool
    is_selected: bool
    has_tasks: bool
