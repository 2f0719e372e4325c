"""Logging system setup."""

import os
import logging
from datetime import datetime
from typing import Iterable, Optional
import colorlog

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# Chatty libraries kept at WARNING unless the service runs at DEBUG
NOISY_LOGGERS = ("urllib3", "uvicorn.access")


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = "./logs",
    log_format: Optional[str] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS
) -> Optional[str]:
    """
    Setup logging system with console and optional file output.

    Every host call logs at DEBUG, so the file handler always records
    DEBUG while the console follows log_level.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        log_dir: Directory for log files, or None for console only
        log_format: Custom log format string for the file
        quiet_loggers: Third-party loggers raised to WARNING above DEBUG

    Returns:
        Path of the log file, or None when logging to the console only
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    color_format = (
        "%(log_color)s%(levelname)-8s%(reset)s "
        "%(blue)s%(name)s%(reset)s - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_dir else level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = colorlog.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(colorlog.ColoredFormatter(color_format, log_colors=LOG_COLORS))
    root_logger.addHandler(console_handler)

    if level > logging.DEBUG:
        for name in quiet_loggers:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)

    if not log_dir:
        logger.info("Logging initialized (console only)")
        return None

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"random_sample_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Log file: {log_file}")
    return log_file
