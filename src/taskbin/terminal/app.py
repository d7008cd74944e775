# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from taskbin.state import AppState
from taskbin.terminal import calendar, configuration, recycle_bin, task
from taskbin.terminal.app_context import get_app_state
from taskbin.terminal.custom_typer import OrderedAliasedTyperGroup
from taskbin.terminal.shell import in_shell, run_shell
from taskbin.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="taskbin - tasks, a recycle bin and a calendar in the CLI",
    invoke_without_command=True,
)
app.add_typer(task.app, name="task, t", help="Add, list, change and delete tasks")
app.add_typer(recycle_bin.app, name="bin, b", help="Restore or purge deleted tasks")
app.add_typer(calendar.app, name="calendar, cal", help="Month grid and tasks by date")
app.add_typer(configuration.app, name="config, c", help="Show or change settings")


@app.command("shell")
def shell(ctx: typer.Context) -> None:
    """Run commands interactively against one in-memory task list."""
    if in_shell():
        return
    run_shell(app, get_app_state(ctx))


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    taskbin - tasks, a recycle bin and a calendar in the CLI

    Without a command an interactive shell is started.
    """
    if no_header:
        view_state.set_show_header(False)
    if ctx.invoked_subcommand is None and not in_shell():
        run_shell(app, get_app_state(ctx))


def run(app_state: AppState) -> None:
    app(obj=app_state, prog_name="taskbin")
