# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from taskbin.color import RECYCLED_TASK_COLOR
from taskbin.model.entity_id import EntityId
from taskbin.model.recycled_task import RecycledTask
from taskbin.time import datetime_to_display_local_date_str
from taskbin.view.util import short_id
from taskbin.view.views.header import header


def recycle_bin_view(
    recycled_tasks: list[RecycledTask],
    retention_days: int,
    days_left: dict[EntityId, int],
) -> None:
    """
    Display the recycle bin with the deletion date and the days left
    before each entry is purged automatically.

    Args:
        recycled_tasks: Entries currently in the bin
        retention_days: Retention window in days
        days_left: Days before each entry expires, keyed by id
    """
    header("recycle bin")

    console = Console()
    console.print(
        f"[dim]Items in the recycle bin will be automatically deleted after "
        f"{retention_days} days.[/dim]"
    )

    if len(recycled_tasks) == 0:
        console.print("Recycle bin is empty")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("title")
    table.add_column("deleted")
    table.add_column("days left")

    for recycled_task in recycled_tasks:
        table.add_row(
            short_id(recycled_task["id"]),
            f"[{RECYCLED_TASK_COLOR}]{recycled_task['title']}[/{RECYCLED_TASK_COLOR}]",
            datetime_to_display_local_date_str(recycled_task["deleted"]),
            str(days_left.get(recycled_task["id"], 0)),
        )

    console.print(table)
