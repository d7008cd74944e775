# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from taskbin.error import TaskNotFoundError, TaskValidationError
from taskbin.model.entity_id import EntityId
from taskbin.model.task import TaskFields, TaskUpdate
from taskbin.model.task_filter import TaskStatusFilter
from taskbin.service.task import filter_tasks, resolve_task_id, toggle_task_completion
from taskbin.state import AppState
from taskbin.terminal.app_context import get_app_state
from taskbin.terminal.custom_typer import AliasedTyperGroup
from taskbin.terminal.parse import parse_date
from taskbin.terminal.validate import validate_category, validate_status
from taskbin.view.util import short_id
from taskbin.view.views import task as task_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def resolve_active_task_id(app_state: AppState, id: str) -> EntityId:
    console = Console()
    task_ids = [task["id"] for task in app_state.task_store.get_all_tasks()]
    try:
        return resolve_task_id(task_ids, id)
    except TaskNotFoundError:
        console.print(f"[red]No task matching '{id}'[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("add, a", no_args_is_help=True)
def add(
    ctx: typer.Context,
    title: str,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
) -> None:
    app_state = get_app_state(ctx)
    config = app_state.config_repo.get_config()
    category = validate_category(category, config["categories"])

    fields: TaskFields = {"title": title}
    if description is not None:
        fields["description"] = description
    if due is not None:
        fields["due"] = due
    if category is not None:
        fields["category"] = category

    try:
        task = app_state.task_store.save_new_task(fields)
    except TaskValidationError as e:
        raise typer.BadParameter(str(e))

    task_report.single_task_view(task)


@app.command("list, ls")
def list_tasks(
    ctx: typer.Context,
    status: Annotated[
        str,
        typer.Option(
            "--status",
            "-s",
            callback=validate_status,
            help="valid input: all, active, completed",
        ),
    ] = TaskStatusFilter.ALL.value,
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="category name, or all"),
    ] = None,
) -> None:
    app_state = get_app_state(ctx)
    tasks = filter_tasks(
        app_state.task_store.get_all_tasks(),
        TaskStatusFilter(status),
        category.strip().lower() if category is not None else None,
    )
    task_report.tasks_view(f"{status} tasks", tasks)


@app.command("show, s", no_args_is_help=True)
def show(ctx: typer.Context, id: str) -> None:
    app_state = get_app_state(ctx)
    task_id = resolve_active_task_id(app_state, id)
    task_report.single_task_view(app_state.task_store.get_task(task_id))


@app.command("modify, m", no_args_is_help=True)
def modify(
    ctx: typer.Context,
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    due: Annotated[
        Optional[pendulum.Date],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    remove_due: Annotated[bool, typer.Option("--remove-due", "-rdu")] = False,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
    completed: Annotated[
        Optional[bool], typer.Option("--completed/--not-completed")
    ] = None,
) -> None:
    app_state = get_app_state(ctx)
    config = app_state.config_repo.get_config()
    category = validate_category(category, config["categories"])
    task_id = resolve_active_task_id(app_state, id)

    update: TaskUpdate = {}
    if title is not None:
        update["title"] = title
    if description is not None:
        update["description"] = description
    if due is not None:
        update["due"] = due
    if remove_due:
        update["remove_due"] = True
    if category is not None:
        update["category"] = category
    if completed is not None:
        update["completed"] = completed

    try:
        task = app_state.task_store.modify_task(task_id, update)
    except TaskValidationError as e:
        raise typer.BadParameter(str(e))

    task_report.single_task_view(task)


@app.command("toggle, t", no_args_is_help=True)
def toggle(ctx: typer.Context, id: str) -> None:
    """Mark a task completed, or open again if it already is."""
    app_state = get_app_state(ctx)
    task_id = resolve_active_task_id(app_state, id)
    tasks = toggle_task_completion(app_state.task_store, task_id)
    task_report.tasks_view("all tasks", tasks)


@app.command("delete, d", no_args_is_help=True)
def delete(
    ctx: typer.Context,
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Move a task to the recycle bin."""
    app_state = get_app_state(ctx)
    console = Console()

    task_ids = [task["id"] for task in app_state.task_store.get_all_tasks()]
    try:
        task_id = resolve_task_id(task_ids, id)
    except TaskNotFoundError:
        # Nothing to recycle; the bin treats this as already done
        tasks = app_state.recycle_bin.recycle(id)
        console.print(f"No task matching '{id}', nothing changed.")
        task_report.tasks_view("all tasks", tasks)
        return
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    task = app_state.task_store.get_task(task_id)
    if not yes and not typer.confirm(f"Move '{task['title']}' to the recycle bin?"):
        console.print("Cancelled.")
        raise typer.Exit(0)

    tasks = app_state.recycle_bin.recycle(task_id)
    console.print(
        f"Task '{task['title']}' ({short_id(task_id)}) moved to the recycle bin. "
        f"It will be deleted permanently after "
        f"{app_state.recycle_bin.retention_days} days."
    )
    task_report.tasks_view("all tasks", tasks)
