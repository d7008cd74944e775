# SPDX-License-Identifier: MIT

import logging

from taskbin import configuration
from taskbin.logging_setup import setup_logging
from taskbin.repository.configuration import ConfigurationRepository
from taskbin.state import AppState, create_app_state
from taskbin.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> AppState:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    config_repo = ConfigurationRepository()
    __ensure_config_files(config_repo)
    config = config_repo.get_config()

    setup_logging(
        log_file=configuration.DATA_LOG_PATH,
        console_level=config["log_level"],
    )
    view_state.set_show_header(config["show_header"])

    app_state = create_app_state(config_repo=config_repo)
    logger.info(
        "taskbin ready data_path=%s recycled=%s",
        configuration.DATA_PATH,
        len(app_state.recycle_bin.get_recycled_tasks()),
    )
    return app_state


def __ensure_config_files(config_repo: ConfigurationRepository) -> None:
    # Loading fills in defaults for a missing file or missing keys
    config_repo.get_config()
    config_repo.flush()
