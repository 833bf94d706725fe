"""Loguru setup for the globz command line."""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {elapsed} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    app_name: str = "globz",
    log_root: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    level: str = "WARNING",
):
    """Configure the Loguru logging system.

    Args:
        app_name: Application name, used for the log directory
        log_root: Directory that receives ``logs/<app_name>/<date>/``; no
            log file is written when None
        console_output: Whether to log to stderr
        level: Console log level

    Returns:
        tuple: (logger, config_info)
            - logger: the configured logger
            - config_info: dict with the log file path (or None)
    """
    logger.remove()

    if console_output:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    log_file = None
    if log_root is not None:
        current_time = datetime.now()
        log_dir = os.path.join(log_root, "logs", app_name, current_time.strftime("%Y-%m-%d"))
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"{current_time.strftime('%H%M%S')}.log")
        logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            encoding="utf-8",
            format=FILE_FORMAT,
        )

    config_info = {
        "log_file": log_file,
    }

    logger.debug(f"logging initialised for {app_name}")
    return logger, config_info
