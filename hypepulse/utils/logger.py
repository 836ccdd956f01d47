"""
Logging setup for HypePulse.

Handlers live on the ``hypepulse`` package logger only. Module loggers are its
children, so every record (retry warnings included) reaches the console and the
dated file under ``logs/`` through propagation.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from hypepulse.config import Config

PACKAGE_LOGGER = 'hypepulse'
LOG_DIR = Path('logs')


def log_file_path() -> Path:
    return LOG_DIR / f'hypepulse_{datetime.now().strftime("%Y%m%d")}.log'


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return package_logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    package_logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    LOG_DIR.mkdir(exist_ok=True)
    file_handler = logging.FileHandler(log_file_path(), encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)

    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Logger for module ``name``, writing through the shared package handlers.

    Names outside the package (``__main__`` when run as a script) are nested
    under it so they still reach the log file.
    """
    package_logger = _configure_package_logger()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.'):
        return logging.getLogger(name)
    return package_logger.getChild(name)
