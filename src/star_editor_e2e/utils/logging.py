"""Logging configuration for star-editor-e2e.

All output goes to stderr so that stdout carries only the final pass line.
"""

import logging
import sys

LOGGER_NAME = "star_editor_e2e"


def setup_logging(level: int = logging.WARNING, name: str | None = None) -> logging.Logger:
    """Set up logging for a harness run.

    Args:
        level: Logging level (default: WARNING)
        name: Logger name (default: "star_editor_e2e")

    Returns:
        Configured logger instance
    """
    logger_name = name or LOGGER_NAME
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the star_editor_e2e namespace.

    Args:
        name: Logger name suffix (e.g., "browser" for "star_editor_e2e.browser")

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
