"""
Logger configuration for Official Finder.
Console output only; the hosting process decides where stdout goes.
"""

import logging
import sys


def setup_logger(name: str = "official_finder", level: str = "INFO") -> logging.Logger:
    """Set up and return a configured logger instance.

    Args:
        name: Logger name identifier.
        level: Logging level name (default: INFO).

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger


logger = setup_logger()
