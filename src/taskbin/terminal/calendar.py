# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer

from taskbin.terminal.app_context import get_app_state
from taskbin.terminal.custom_typer import AliasedTyperGroup
from taskbin.terminal.parse import parse_date, parse_month
from taskbin.time import today_local
from taskbin.view.views import calendar as calendar_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("month, m")
def month(
    ctx: typer.Context,
    month: Annotated[
        Optional[str],
        typer.Option("--month", "-m", help="valid input: YYYY-MM (defaults to this month)"),
    ] = None,
    select: Annotated[
        Optional[pendulum.Date],
        typer.Option(
            "--select",
            "-s",
            parser=parse_date,
            help="date whose tasks are listed under the grid (defaults to today)",
        ),
    ] = None,
) -> None:
    app_state = get_app_state(ctx)

    selected = select if select is not None else today_local()
    year_month = parse_month(month)
    if year_month is None:
        year_month = (selected.year, selected.month)
    year, month_number = year_month

    grid = app_state.calendar.month_grid(year, month_number, selected)
    calendar_report.calendar_month_view(
        year,
        month_number,
        grid,
        week_start=app_state.calendar.week_start,
        selected=selected,
        selected_tasks=app_state.calendar.tasks_on_date(selected),
    )


@app.command("day, d", no_args_is_help=True)
def day(
    ctx: typer.Context,
    date: Annotated[
        pendulum.Date,
        typer.Argument(
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset",
        ),
    ],
) -> None:
    app_state = get_app_state(ctx)
    calendar_report.date_tasks_view(date, app_state.calendar.tasks_on_date(date))
