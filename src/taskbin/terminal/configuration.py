# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from taskbin import configuration
from taskbin.terminal.app_context import get_app_state
from taskbin.terminal.custom_typer import AliasedTyperGroup
from taskbin.terminal.validate import validate_retention_days, validate_week_start

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, v")
def show(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    config = get_app_state(ctx).config_repo.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("retention_days", str(config["retention_days"]))
    table.add_row("week_start", config["week_start"])
    table.add_row("categories", ", ".join(config["categories"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)


@app.command("set, s")
def set(
    ctx: typer.Context,
    retention_days: Annotated[
        Optional[int],
        typer.Option(
            "--retention-days",
            callback=validate_retention_days,
            help="Days a deleted task stays in the recycle bin",
        ),
    ] = None,
    week_start: Annotated[
        Optional[str],
        typer.Option(
            "--week-start",
            callback=validate_week_start,
            help="First day of the week in the calendar: sunday or monday",
        ),
    ] = None,
    add_categories: Annotated[
        Optional[list[str]],
        typer.Option("--add-category", help="Add a category (repeatable)"),
    ] = None,
    remove_categories: Annotated[
        Optional[list[str]],
        typer.Option("--remove-category", help="Remove a category (repeatable)"),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header"),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Console log level"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory for the recycle bin and logs"),
    ] = None,
    remove_data_path: Annotated[
        bool, typer.Option("--remove-data-path", help="Use the default data directory")
    ] = False,
) -> None:
    """Update configuration settings."""
    app_state = get_app_state(ctx)
    console = Console()

    try:
        app_state.config_repo.update_config(
            retention_days=retention_days,
            week_start=week_start,
            add_categories=add_categories,
            remove_categories=remove_categories,
            show_header=show_header,
            log_level=log_level,
            data_path=data_path,
            remove_data_path=remove_data_path,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    app_state.config_repo.flush()

    # Settings the running services read at construction time
    if retention_days is not None:
        app_state.recycle_bin.retention_days = retention_days
    if week_start is not None:
        app_state.calendar.week_start = week_start

    if data_path is not None or remove_data_path:
        console.print("[yellow]The new data path is used from the next start.[/yellow]")
    console.print("[green]Configuration updated[/green]")
