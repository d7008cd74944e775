# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Reports print the taskbin banner unless turned off by config or --no-header
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
