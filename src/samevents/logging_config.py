"""Logging configuration using loguru."""
import sys
from pathlib import Path
from typing import Literal, Optional, Union

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def disable_logging() -> None:
    """Silence samevents records; library users opt in with ``setup_logging``."""
    logger.disable("samevents")


def setup_logging(level: LogLevel = "WARNING", log_file: Optional[Union[str, Path]] = None) -> None:
    """Send samevents logs to stderr, and to ``log_file`` if given.

    The library never configures handlers on import; only the CLI calls this.
    """
    logger.remove()
    logger.add(sys.stderr, format="{level}: {message}", level=level)
    if log_file:
        logger.add(str(log_file), format=LOG_FORMAT, level="DEBUG")
    logger.enable("samevents")


disable_logging()
