# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "taskbin"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_RECYCLE_BIN_PATH: Path = DATA_PATH / "recycle_bin.yaml"
DATA_LOG_PATH: Path = DATA_PATH / "taskbin.log"

DEFAULT_RETENTION_DAYS = 30
DEFAULT_CATEGORIES = ["none", "home", "school", "shopping"]
WEEK_STARTS = ("sunday", "monday")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Configuration(TypedDict):
    retention_days: int
    week_start: str
    categories: list[str]
    data_path: Optional[str]
    show_header: bool
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "retention_days": DEFAULT_RETENTION_DAYS,
        "week_start": "sunday",
        "categories": list(DEFAULT_CATEGORIES),
        "data_path": None,
        "show_header": True,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_RECYCLE_BIN_PATH, DATA_LOG_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_RECYCLE_BIN_PATH = DATA_PATH / "recycle_bin.yaml"
        DATA_LOG_PATH = DATA_PATH / "taskbin.log"
