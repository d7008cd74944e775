# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from taskbin.service.calendar import MAX_GRID_YEAR, MIN_GRID_YEAR
from taskbin.time import date_from_str, today_local


def _check_year(year: int) -> None:
    # The month grid pads into the neighbouring months
    if year < MIN_GRID_YEAR or year > MAX_GRID_YEAR:
        raise typer.BadParameter(
            f"Year must be between {MIN_GRID_YEAR} and {MAX_GRID_YEAR}, got {year}"
        )


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a calendar date.

    Accepts YYYY-MM-DD, today (t), tomorrow (o), yesterday (y), or a day
    offset from today such as 1 or -1.
    """
    if date_param is None:
        return None

    date = str(date_param).strip().lower()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        _check_year(int(date[:4]))
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date}': {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        try:
            parsed = today_local().add(days=int(date))
        except (OverflowError, ValueError):
            raise typer.BadParameter(f"Day offset {date} is out of range")
        _check_year(parsed.year)
        return parsed

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_month(month_param: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a month in YYYY-MM format into (year, month).

    Raises:
        typer.BadParameter: If the format is wrong or the month or year is out of range
    """
    if month_param is None:
        return None

    month_match = re.match(r"^(\d{4})-(\d{1,2})$", month_param.strip())
    if not month_match:
        raise typer.BadParameter(
            f"Month must be in YYYY-MM format (e.g., 2024-02), got '{month_param}'"
        )

    year = int(month_match.group(1))
    month = int(month_match.group(2))
    if month < 1 or month > 12:
        raise typer.BadParameter(f"Month must be between 1 and 12, got {month}")
    _check_year(year)

    return (year, month)
