"""
Logging setup for the netstorage command and embedding applications.
"""

import logging
import sys
from pathlib import Path

from .config import LogConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(threadName)s - %(message)s"


def _handlers(config: LogConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))
    if config.console:
        handlers.append(logging.StreamHandler(sys.stderr))
    return handlers


def setup_logging(config: LogConfig) -> None:
    """
    Route client logs to the configured log file and/or stderr.

    Args:
        config: LogConfig from the [logging] section or --verbose.

    Note:
        Request lines (method, URL, status) are logged at DEBUG and transport
        failures at ERROR. Signatures and keys never reach a handler. urllib3's
        per-connection messages only pass through when the level is DEBUG.
        Calling this again replaces the previous handlers.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    for handler in _handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(level if level <= logging.DEBUG else logging.WARNING)
