"""
Line Source Port - Blocking, line-oriented input for interactive prompts.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LineSourcePort(ABC):
    """Source of raw text lines, typically a terminal."""

    @property
    @abstractmethod
    def is_interactive(self) -> bool:
        """True when a user is attached (a TTY)."""
        ...

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """
        Block until a full line is available.

        Returns:
            The line without its line ending, or None at end of input
        """
        ...

    @abstractmethod
    def write(self, text: str) -> None:
        """Write prompt decoration (not a log message) next to the input."""
        ...
