# SPDX-License-Identifier: MIT

from taskbin.cleanup import register_cleanup
from taskbin.initialize import initialize
from taskbin.terminal.app import run


def main() -> None:
    app_state = initialize()
    register_cleanup(app_state)
    run(app_state)


if __name__ == "__main__":
    main()
