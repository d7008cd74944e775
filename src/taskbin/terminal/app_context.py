# SPDX-License-Identifier: MIT

from typing import cast

import typer

from taskbin.state import AppState


def get_app_state(ctx: typer.Context) -> AppState:
    app_state = ctx.find_object(AppState)
    if app_state is None:
        raise RuntimeError("taskbin commands must be invoked with an AppState")
    return cast(AppState, app_state)
