# SPDX-License-Identifier: MIT

import atexit

from taskbin.state import AppState


def flush_and_sync(app_state: AppState) -> None:
    app_state.flush()


def register_cleanup(app_state: AppState) -> None:
    atexit.register(flush_and_sync, app_state)
