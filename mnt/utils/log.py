# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Logging setup for the command line tools."""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Literal, Optional, Tuple

LOG_FORMAT = "[%(asctime)s] - [%(levelname)s] - [%(name)s] - %(message)s"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def init_logger(
    logger_name: str,
    log_level: LogLevel = "WARNING",
    log_file: Optional[str] = None,
    log_formatter: Optional[logging.Formatter] = logging.Formatter(LOG_FORMAT),
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
) -> Tuple[logging.Logger, logging.Handler]:
    """Set up logging for a command.

    Logs go to `log_file` if given (rotated every `max_bytes`), otherwise to
    stderr so they never mix with the results printed on stdout.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level))

    handler: logging.Handler
    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(
            log_file, mode="a", maxBytes=max_bytes, backupCount=backup_count
        )
    else:
        handler = logging.StreamHandler(sys.stderr)

    if log_formatter:
        handler.setFormatter(log_formatter)
    logger.addHandler(handler)

    return logger, handler
