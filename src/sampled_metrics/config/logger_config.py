"""Loguru sinks for applications that embed the metrics client."""

import sys
from typing import Optional

from loguru import logger

from .settings import LoggingConfig

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{line} - {message}"


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Replace loguru's sinks with the ones described by config.

    The file sink is enqueued because the flush timer and sender threads log
    concurrently with the application.
    """
    config = config or LoggingConfig()
    logger.remove()

    if config.log_to_console:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=config.level, colorize=True)

    if config.log_to_file:
        logger.add(
            str(config.log_file_path),
            format=FILE_FORMAT,
            level=config.level,
            rotation=config.rotation,
            retention=config.retention,
            compression="gz",
            enqueue=True,
        )
        logger.debug(f"Metrics logging to {config.log_file_path} at {config.level}")
