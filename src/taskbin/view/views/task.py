# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from taskbin.color import COMPLETED_TASK_COLOR, get_category_color
from taskbin.model.task import Task
from taskbin.time import date_to_str, datetime_to_display_local_date_str
from taskbin.view.util import format_category, short_id, task_age, task_state
from taskbin.view.views.header import header


def tasks_view(
    report_name: str,
    tasks: list[Task],
    columns: list[str] = [
        "id",
        "state",
        "age",
        "due",
        "category",
        "title",
    ],
    use_color: bool = True,
) -> None:
    header(report_name)

    console = Console()
    if len(tasks) == 0:
        console.print("[dim]No tasks found.[/dim]")
        return

    tasks_table = Table(box=box.SIMPLE)
    for column in columns:
        tasks_table.add_column(column)

    for task in tasks:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = short_id(task["id"])
            elif column == "state":
                column_value = task_state(task)
            elif column == "age":
                column_value = task_age(task)
            elif column == "due":
                column_value = date_to_str(task["due"]) if task["due"] else ""
            elif column == "category":
                column_value = format_category(task["category"])
            elif column == "title":
                column_value = task["title"]
            elif column == "description":
                column_value = task["description"]

            if use_color:
                if task["completed"]:
                    column_value = f"[{COMPLETED_TASK_COLOR}]{column_value}[/{COMPLETED_TASK_COLOR}]"
                elif column == "category" and column_value:
                    color = get_category_color(task["category"])
                    column_value = f"[{color}]{column_value}[/{color}]"

            row.append(column_value)
        tasks_table.add_row(*row)

    console.print(tasks_table)


def single_task_view(task: Task) -> None:
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", task["id"])
    task_table.add_row("title", task["title"])
    if task["description"]:
        task_table.add_row("description", task["description"])
    if task["due"] is not None:
        task_table.add_row("due", date_to_str(task["due"]))
    task_table.add_row("category", task["category"])
    task_table.add_row("completed", "yes" if task["completed"] else "no")
    task_table.add_row("created", datetime_to_display_local_date_str(task["created"]))
    task_table.add_row("updated", datetime_to_display_local_date_str(task["updated"]))

    console = Console()
    console.print(task_table)
