# tests/test_parse.py

from __future__ import annotations

import pendulum
import pytest
import typer

from taskbin.terminal.parse import parse_date, parse_month
from taskbin.time import today_local


def test_parse_date_iso() -> None:
    assert parse_date("2024-02-29") == pendulum.date(2024, 2, 29)
    assert parse_date(None) is None


@pytest.mark.parametrize(
    "value, offset",
    [("today", 0), ("t", 0), ("tomorrow", 1), ("o", 1), ("yesterday", -1), ("y", -1), ("3", 3), ("-2", -2)],
)
def test_parse_date_relative(value: str, offset: int) -> None:
    assert parse_date(value) == today_local().add(days=offset)


@pytest.mark.parametrize("value", ["2023-02-29", "2024-13-01", "next week", "02/14/2024"])
def test_parse_date_rejects_bad_input(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_date(value)


def test_parse_month() -> None:
    assert parse_month("2024-02") == (2024, 2)
    assert parse_month("2024-9") == (2024, 9)
    assert parse_month(None) is None
    with pytest.raises(typer.BadParameter):
        parse_month("2024-13")
    with pytest.raises(typer.BadParameter):
        parse_month("February")


@pytest.mark.parametrize("value", ["0000-01", "0001-01", "9999-12"])
def test_parse_month_rejects_years_the_grid_cannot_show(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_month(value)


def test_parse_month_accepts_grid_year_limits() -> None:
    assert parse_month("0002-01") == (2, 1)
    assert parse_month("9998-12") == (9998, 12)


@pytest.mark.parametrize("value", ["9999-12-31", "0001-01-01", "99999999", "-99999999", "9" * 30])
def test_parse_date_rejects_out_of_range_dates(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_date(value)
