"""Logging setup shared by the vault exporter and library callers."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'clutch_vault'
ENV_LOG_LEVEL = 'CLUTCH_LOG_LEVEL'

# requests logs every connection through urllib3 at DEBUG
NOISY_LOGGERS = ('urllib3',)


def parse_level(value: Optional[str | int], default: int = logging.INFO) -> int:
    """
    Turn 'debug', 'WARNING', '10' or a logging constant into a level.

    Unknown names fall back to the default.
    """
    if value is None or value == '':
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the 'clutch_vault' logger tree.

    Module loggers ('clutch_vault.assignment', 'clutch_vault.api_client', ...)
    propagate here, so one call covers the whole package. Calling it again
    replaces the previous handlers.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: CLUTCH_LOG_LEVEL, else INFO)
        log_to_file: Write a timestamped vault_*.log file (default: True)
        log_to_console: Log to stdout (default: True)

    Returns:
        The package logger

    Example:
        from clutch_vault.logging_config import setup_logging
        logger = setup_logging(log_to_file=False)
        logger.info("Exporting vault")
    """
    if level is None:
        level = parse_level(os.environ.get(ENV_LOG_LEVEL))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'vault_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
