# zktracker/utils/logging.py
from loguru import logger
import sys
from pathlib import Path
from typing import Union

from zktracker.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]} | {message}"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan> | <level>{message}</level>"
)

# (file name, minimum level, rotation, retention)
FILE_SINKS = (
    ("tracker.log", LOG_LEVEL, "20 MB", "7 days"),
    ("tracker-errors.log", "ERROR", "5 MB", "30 days"),
)


class AppLogger:
    """Loguru sinks for the tracker service, configured once per process"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self.log_path = Path(LOG_DIR)
        self.log_path.mkdir(parents=True, exist_ok=True)

        # records logged without get_logger still render a module
        logger.configure(extra={"module": "zktracker"})
        logger.remove()

        logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=LOG_LEVEL)
        for filename, level, rotation, retention in FILE_SINKS:
            logger.add(
                self.log_path / filename,
                rotation=rotation,
                retention=retention,
                compression="zip",
                format=LOG_FORMAT,
                level=level,
            )

    @staticmethod
    def get_logger(name: Union[str, None] = None):
        """Bind the module name shown in every tracker log line"""
        return logger.bind(module=name or "zktracker")


app_logger = AppLogger()


def get_logger(name: Union[str, None] = None):
    return app_logger.get_logger(name)
