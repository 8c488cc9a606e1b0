###########EXTERNAL IMPORTS############

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

#######################################

#############LOCAL IMPORTS#############

#######################################

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerManager:
    """
    Static manager for the application loggers.

    Configures a single application root logger with a console handler and an
    optional rotating file handler. Module loggers are obtained through
    get_logger and propagate to that root.
    """

    ROOT_NAME = "cursor"
    _initialized: bool = False

    def __init__(self):
        raise TypeError("LoggerManager is a static class and cannot be instantiated")

    @staticmethod
    def init(level: int | str = logging.INFO, log_file: Optional[str] = None, max_bytes: int = 1_000_000, backup_count: int = 3) -> None:
        """
        Initializes the application logging handlers.

        Calling init more than once only updates the level.

        Args:
            level: Logging level (name or number).
            log_file: Optional path of a rotating log file.
            max_bytes: Maximum size of the log file before rotation.
            backup_count: Number of rotated files kept.
        """

        root = logging.getLogger(LoggerManager.ROOT_NAME)
        root.setLevel(level)

        if LoggerManager._initialized:
            return

        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        if log_file is not None:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        LoggerManager._initialized = True

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """
        Returns a logger nested under the application root logger.

        Args:
            name: Module name, usually __name__.
        """

        return logging.getLogger(f"{LoggerManager.ROOT_NAME}.{name}")
