# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from taskbin.color import COMPLETED_TASK_COLOR
from taskbin.model.calendar import CalendarDay
from taskbin.model.task import Task
from taskbin.time import date_to_display_str
from taskbin.view.views.header import header

DAY_NAMES_SUNDAY_FIRST = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAY_NAMES_MONDAY_FIRST = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def calendar_month_view(
    year: int,
    month: int,
    grid: list[CalendarDay],
    week_start: str = "sunday",
    selected: Optional[pendulum.Date] = None,
    selected_tasks: Optional[list[Task]] = None,
) -> None:
    """
    Display a month as a 6 x 7 grid, marking today, the selected date
    and the days that have tasks due, followed by the tasks of the
    selected date.

    Args:
        year: Year of the month shown
        month: Month shown (1-12)
        grid: The 42 cells produced by the calendar index
        week_start: "sunday" or "monday", must match the grid
        selected: The selected date, if any
        selected_tasks: Tasks due on the selected date
    """
    header("calendar")

    console = Console()
    month_year_str = pendulum.date(year, month, 1).format("MMMM YYYY")
    console.print(f"\n[bold]{month_year_str}[/bold]\n")
    console.print(_render_month_grid(grid, week_start))

    if selected is not None:
        date_tasks_view(selected, selected_tasks or [])


def date_tasks_view(date: pendulum.Date, tasks: list[Task]) -> None:
    console = Console()
    console.print(f"[bold]Tasks for {date_to_display_str(date)}[/bold]")
    if len(tasks) == 0:
        console.print("[dim]No tasks for this date.[/dim]")
        return
    for task in tasks:
        if task["completed"]:
            console.print(f"  [{COMPLETED_TASK_COLOR}]X {task['title']}[/{COMPLETED_TASK_COLOR}]")
        else:
            console.print(f"    {task['title']}")


def _render_month_grid(grid: list[CalendarDay], week_start: str) -> Table:
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))

    day_names = (
        DAY_NAMES_MONDAY_FIRST if week_start == "monday" else DAY_NAMES_SUNDAY_FIRST
    )
    for day_name in day_names:
        table.add_column(day_name, justify="right", width=4)

    week_cells: list[Text] = []
    for cell in grid:
        week_cells.append(_render_day_cell(cell))
        # Add row when we have a complete week
        if len(week_cells) == 7:
            table.add_row(*week_cells)
            week_cells = []

    return table


def _render_day_cell(cell: CalendarDay) -> Text:
    if cell["other_month"]:
        return Text(f"{cell['day']:2d} ", style="dim")

    style = "bold"
    if cell["is_today"]:
        style = "bold black on bright_cyan"
    if cell["is_selected"]:
        style = "bold reverse"

    cell_content = Text()
    cell_content.append(f"{cell['day']:2d}", style=style)
    cell_content.append("•" if cell["has_tasks"] else " ", style="bright_green")
    return cell_content
