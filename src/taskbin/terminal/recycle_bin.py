# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from taskbin.error import TaskNotFoundError
from taskbin.model.entity_id import EntityId
from taskbin.service.task import resolve_task_id
from taskbin.state import AppState
from taskbin.terminal.app_context import get_app_state
from taskbin.terminal.custom_typer import AliasedTyperGroup
from taskbin.view.views import recycle_bin as recycle_bin_report
from taskbin.view.views import task as task_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _resolve_recycled_task_id(app_state: AppState, id: str) -> EntityId:
    """Resolve a prefix against the bin; unknown ids pass through unchanged."""
    recycled_ids = [task["id"] for task in app_state.recycle_bin.get_recycled_tasks()]
    try:
        return resolve_task_id(recycled_ids, id)
    except TaskNotFoundError:
        return id
    except ValueError as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _show_recycle_bin(app_state: AppState) -> None:
    manager = app_state.recycle_bin
    recycled_tasks = manager.get_recycled_tasks()
    recycle_bin_report.recycle_bin_view(
        recycled_tasks,
        manager.retention_days,
        {task["id"]: manager.days_remaining(task) for task in recycled_tasks},
    )


@app.command("list, ls")
def list_recycled(ctx: typer.Context) -> None:
    """Show the recycle bin, finishing interrupted recycles and purging expired entries first."""
    app_state = get_app_state(ctx)
    app_state.recycle_bin.reconcile()
    app_state.recycle_bin.cleanup_expired()
    _show_recycle_bin(app_state)


@app.command("restore, r", no_args_is_help=True)
def restore(ctx: typer.Context, id: str) -> None:
    app_state = get_app_state(ctx)
    console = Console()
    task_id = _resolve_recycled_task_id(app_state, id)

    if app_state.recycle_bin_repo.get_recycled_task(task_id) is None:
        console.print(f"No recycled task matching '{id}', nothing changed.")
        _show_recycle_bin(app_state)
        return

    remaining = app_state.recycle_bin.restore(task_id)
    if any(task["id"] == task_id for task in remaining):
        console.print(
            "[red]Restore failed, the task stays in the recycle bin. "
            "See the log for details.[/red]"
        )
        _show_recycle_bin(app_state)
        raise typer.Exit(1)

    console.print("Task restored.")
    task_report.tasks_view("all tasks", app_state.task_store.get_all_tasks())
    _show_recycle_bin(app_state)


@app.command("purge, p", no_args_is_help=True)
def purge(
    ctx: typer.Context,
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Delete one entry from the recycle bin permanently."""
    app_state = get_app_state(ctx)
    task_id = _resolve_recycled_task_id(app_state, id)

    if not yes and not typer.confirm(
        "Are you sure you want to permanently delete this task?"
    ):
        Console().print("Cancelled.")
        raise typer.Exit(0)

    app_state.recycle_bin.permanently_delete(task_id)
    _show_recycle_bin(app_state)


@app.command("empty, e")
def empty(
    ctx: typer.Context,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Delete every entry in the recycle bin permanently."""
    app_state = get_app_state(ctx)

    if len(app_state.recycle_bin.get_recycled_tasks()) == 0:
        _show_recycle_bin(app_state)
        return

    if not yes and not typer.confirm(
        "Are you sure you want to permanently delete all items in the recycle bin?"
    ):
        Console().print("Cancelled.")
        raise typer.Exit(0)

    app_state.recycle_bin.empty_all()
    _show_recycle_bin(app_state)
