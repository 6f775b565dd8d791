"""
Log Levels - The extra VERBOSE level between DEBUG and INFO.
"""

import logging

VERBOSE = 15

logging.addLevelName(VERBOSE, "VERBOSE")

LEVELS = {
    "DEBUG": logging.DEBUG,
    "VERBOSE": VERBOSE,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def verbose(logger: logging.Logger, message: str) -> None:
    """Log a message at VERBOSE level."""
    logger.log(VERBOSE, message)


def parse_level(name: str) -> int:
    """
    Translate a level name into a logging level.

    Raises:
        ValueError: If the name is not one of LEVELS
    """
    try:
        return LEVELS[name.upper()]
    except KeyError:
        raise ValueError(
            f"Invalid log level '{name}'. Must be one of: {', '.join(LEVELS)}."
        ) from None
