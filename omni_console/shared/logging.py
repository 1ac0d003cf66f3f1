import logging
import sys
from typing import Dict, Optional

from omni_console.const import DEFAULT_LOG_LEVEL, LIBRARY_LOG_LEVELS, LOG_DATE_FORMAT, LOG_FORMAT

CONSOLE_HANDLER_NAME = "omni_console.console"


class LoggingManager:
    """Configures the console log output shared by the server and the benchmark script."""

    @classmethod
    def setup_logging(cls, level: str = DEFAULT_LOG_LEVEL, library_log_levels: Optional[Dict[str, str]] = None) -> None:
        """Install the console handler on the root logger.

        Calling this again replaces the handler installed by the previous call,
        so building several apps in one process does not duplicate output.

        Args:
            level: Level name; unknown names fall back to INFO
            library_log_levels: Per-logger overrides, defaults to LIBRARY_LOG_LEVELS
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        root_logger = logging.getLogger()

        for handler in list(root_logger.handlers):
            if handler.get_name() == CONSOLE_HANDLER_NAME:
                root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(numeric_level)

        root_logger.setLevel(numeric_level)
        root_logger.addHandler(console_handler)

        # httpx logs every request at INFO
        for logger_name, lib_level in (library_log_levels or LIBRARY_LOG_LEVELS).items():
            logging.getLogger(logger_name).setLevel(getattr(logging, lib_level.upper(), logging.WARNING))

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Return the module logger for ``name``."""
        return logging.getLogger(name)
