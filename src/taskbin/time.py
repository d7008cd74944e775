# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.now("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def date_to_str(date: pendulum.Date) -> str:
    """Format a calendar date as 'YYYY-MM-DD'."""
    return date.to_date_string()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a plain calendar date (no time, no zone)."""
    parsed = pendulum.parse(date_str, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if not isinstance(parsed, pendulum.Date):
        raise ValueError(f"not a calendar date: {date_str}")
    return parsed


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("MMMM D, YYYY")
