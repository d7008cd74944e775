# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from taskbin import configuration

logger = logging.getLogger(__name__)


class ConfigurationRepository:
    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = (
            config_path if config_path is not None else configuration.APP_CONFIG_PATH
        )
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if self._config_path.is_file():
            self._config = load(self._config_path.read_text(), Loader=Loader)
        if self._config is None:
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        # Migration: fill in any setting added after the file was written
        defaults = configuration.get_default_configuration()
        for key, value in defaults.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True
                logger.info("Configuration migration: added %s", key)

    def __save_data(self, config: configuration.Configuration) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        retention_days: Optional[int] = None,
        week_start: Optional[str] = None,
        add_categories: Optional[list[str]] = None,
        remove_categories: Optional[list[str]] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        # Reject the whole update before any setting is touched
        if retention_days is not None and retention_days < 1:
            raise ValueError("retention_days must be at least 1")
        if week_start is not None and week_start not in configuration.WEEK_STARTS:
            raise ValueError(
                f"week_start must be one of: {', '.join(configuration.WEEK_STARTS)}"
            )
        if log_level is not None and log_level.upper() not in configuration.LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of: {', '.join(configuration.LOG_LEVELS)}"
            )

        self.is_dirty = True
        if retention_days is not None:
            self.config["retention_days"] = retention_days
        if week_start is not None:
            self.config["week_start"] = week_start
        if add_categories is not None:
            categories = self.config["categories"]
            for category in add_categories:
                category = category.strip().lower()
                if category and category not in categories:
                    categories.append(category)
        if remove_categories is not None:
            self.config["categories"] = [
                category
                for category in self.config["categories"]
                if category == "none" or category not in remove_categories
            ]
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
