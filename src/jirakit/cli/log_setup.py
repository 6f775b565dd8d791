"""
Log Setup - Root logger configuration for the CLI.
"""

import logging
import sys
from typing import Optional, TextIO

from ..core.log_levels import VERBOSE
from .output import Colors

LEVEL_COLORS = {
    logging.DEBUG: Colors.GREEN,
    VERBOSE: Colors.YELLOW,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


class ColoredFormatter(logging.Formatter):
    """Prefixes records with their level name, coloured on terminals."""

    def __init__(self, color: bool = True):
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message

        prefix = f"[{record.levelname}]"
        color = LEVEL_COLORS.get(record.levelno)
        if self.color and color:
            prefix = f"{color}{prefix}{Colors.RESET}"
        return f"{prefix} {message}"


def setup_logging(level: int = logging.INFO, color: bool = True, stream: Optional[TextIO] = None) -> None:
    """Configure logging."""
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(color=color and bool(isatty and isatty())))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # urllib3 logs every request at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
