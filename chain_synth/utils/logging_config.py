"""Logging configuration for the options-chain synthesis engine.

All modules log under the ``chain_synth`` namespace so a single call to
:func:`setup_logging` controls the engine, the spot feed and the CLI.
Records go to stderr so ``show_chain.py --json`` output stays parseable.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .error_handling import ConfigurationError

ROOT_LOGGER_NAME = "chain_synth"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def resolve_log_level(log_level: str) -> int:
    """Map a level name ('debug', 'WARNING', ...) to its numeric value.

    Raises:
        ConfigurationError: name is not a standard logging level
    """
    level = logging.getLevelName(str(log_level).strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {log_level!r}")
    return level


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """Configure the ``chain_synth`` logger.

    Calling it again replaces the previous handlers.

    Args:
        log_level: Level name; defaults to WARNING so only fallbacks and
            feed failures show up on the console
        log_file: Optional path to an additional log file
        log_format: Optional custom format string

    Returns:
        The configured ``chain_synth`` logger

    Raises:
        ConfigurationError: log_level is not a known level

    Example:
        >>> logger = setup_logging(log_level="DEBUG", log_file="logs/chain.log")
        >>> logger.info("Building chain for spot %.4f", 1.15)
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolve_log_level(log_level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a'))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child logger of ``chain_synth`` (the root engine logger when name is None)."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
