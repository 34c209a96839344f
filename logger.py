"""Logging configuration for qifledger.

Import runs log to a dated file under the configured log directory and to the
console. Modules obtain their logger through get_logger(), optionally asking
for a child logger (e.g. "qifledger.ledger") so passes can be filtered.
"""

import logging
from datetime import date
from typing import Optional
from config import Config

LOGGER_NAME = "qifledger"


def setup_logging(config: Config, quiet: bool = False) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.
        quiet: When True the console only receives warnings and errors.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # setup_logging may run more than once per process (tests, repeated imports)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")

    log_file_path = config.log_dir / f"{LOGGER_NAME}-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if quiet else config.log_level)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the application logger.

    Args:
        name: Optional child name, e.g. "ledger" for "qifledger.ledger".

    Returns:
        The qifledger logger, or one of its children.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
