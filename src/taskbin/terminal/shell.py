# SPDX-License-Identifier: MIT

import logging
import shlex
from contextvars import ContextVar
from typing import Callable

from rich.console import Console

from taskbin.state import AppState

logger = logging.getLogger(__name__)

_in_shell: ContextVar[bool] = ContextVar("in_shell", default=False)

EXIT_COMMANDS = {"exit", "quit", "q"}


def in_shell() -> bool:
    return _in_shell.get()


def run_shell(
    command: Callable[..., object],
    app_state: AppState,
    read_line: Callable[[str], str] = input,
) -> None:
    """
    Run commands against one AppState until the user exits.

    Active tasks only live as long as this process, so the shell is how
    more than one command sees the same tasks. Each command runs in
    standalone mode: usage errors, declined confirmations and normal
    completion all end in SystemExit, which only ends that command.
    """
    console = Console()
    console.print(
        "[dark_orange]taskbin[/dark_orange] shell. "
        "Type a command (e.g. 'task add \"Buy milk\"'), --help, or exit."
    )

    token = _in_shell.set(True)
    try:
        while True:
            try:
                line = read_line("taskbin> ")
            except (EOFError, KeyboardInterrupt):
                console.print()
                break

            try:
                args = shlex.split(line)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                continue
            if not args:
                continue
            if args[0] in EXIT_COMMANDS:
                break

            try:
                command(args, prog_name="taskbin", obj=app_state)
            except SystemExit as e:
                logger.debug("Command %s finished with exit code %s", args[0], e.code)
            except Exception as e:
                logger.exception("Command %r failed", line)
                console.print(f"[red]Error: {e}[/red]")
            # Keep the bin file current between commands
            app_state.flush()
    finally:
        _in_shell.reset(token)
        logger.debug("Shell closed")
