import builtins
import logging
import sys
from typing import Final

import rich
from injector import inject
from rich.console import Console
from rich.logging import RichHandler

from pod_mutator.common.config import Config, Option

CONSOLE_WIDTH: Final = 140
DEFAULT_APP_NAME: Final = "pod-mutator"


class LoggerManager:

    _config: Config
    _logger: logging.Logger

    @property
    def logger(self) -> logging.Logger:
        assert self._logger is not None
        return self._logger

    @inject
    def __init__(self, config: Config):
        self._config = config
        self._logger = LoggerManager._get_logger(config)

    @staticmethod
    def _get_logger(config: Config) -> logging.Logger:
        log_level = logging.getLevelName(str(config.get(Option.LOG_LEVEL, "INFO")).upper())
        log_rich_enabled = config.get_bool(Option.LOG_RICH_ENABLED)

        if log_rich_enabled:
            builtins.print = rich.print
            # https://rich.readthedocs.io/en/stable/logging.html#logging-handler
            _stdout_handler: logging.Handler = RichHandler(console=Console(width=CONSOLE_WIDTH))
        else:
            _stdout_handler = logging.StreamHandler(sys.stdout)
            _stdout_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

        logger: logging.Logger = logging.getLogger(config.get(Option.APP_NAME, DEFAULT_APP_NAME))
        if logger.hasHandlers():
            logger.handlers.clear()
        logger.addHandler(_stdout_handler)
        logger.setLevel(log_level)
        logger.propagate = False

        return logger
