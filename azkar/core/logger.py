"""
Logging for the azkar package
Console output plus rotating log files under the configured logs directory
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

from azkar.config.loader import get_config

PACKAGE_LOGGER = "azkar"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

_SIZE_SUFFIXES = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size: object) -> int:
    """Bytes for a size such as "10MB", "512KB" or a plain integer"""
    text = str(size).strip().upper()
    for suffix, multiplier in _SIZE_SUFFIXES.items():
        if text.endswith(suffix):
            return int(text[: -len(suffix)]) * multiplier
    return int(text)


class LoggerManager:
    """Owns the handlers of the ``azkar`` logger tree

    Records still propagate to the root logger, so a host such as uvicorn keeps
    its own output untouched.
    """

    def __init__(self):
        self.logs_dir: Optional[Path] = None
        self._handlers: List[logging.Handler] = []
        self.configure()

    def configure(self) -> None:
        """(Re)build handlers from the [logging] section"""
        config = get_config()
        package_logger = logging.getLogger(PACKAGE_LOGGER)

        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        level_name = str(config.get("logging.level", "INFO")).upper()
        package_logger.setLevel(getattr(logging, level_name, logging.INFO))

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self._add(package_logger, console_handler)

        logs_dir = config.get("logging.logs_dir")
        if not logs_dir:
            self.logs_dir = None
            return

        self.logs_dir = Path(logs_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        max_bytes = parse_size(config.get("logging.max_file_size", "10MB"))
        backup_count = int(config.get("logging.backup_count", 5))

        # azkar.log gets everything, error.log only errors
        for file_name, level in (("azkar.log", logging.DEBUG), ("error.log", logging.ERROR)):
            file_handler = logging.handlers.RotatingFileHandler(
                self.logs_dir / file_name,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            self._add(package_logger, file_handler)

    def _add(self, package_logger: logging.Logger, handler: logging.Handler) -> None:
        package_logger.addHandler(handler)
        self._handlers.append(handler)


_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; configures the package handlers on first use"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()

    return logging.getLogger(name)


def setup_logging() -> LoggerManager:
    """Re-read the logging section of the current configuration"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()
    else:
        _logger_manager.configure()
    return _logger_manager
