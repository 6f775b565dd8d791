"""
Command Base - Common structure for all workflow commands.

A command validates its inputs, executes against the ports it was given and
reports a CommandResult. Expected failures (tracker errors, template and
metadata errors) are returned as failed results carrying the exception.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ...core.exceptions import JiraKitError
from ...core.ports.issue_tracker import IssueTrackerError


@dataclass
class CommandResult:
    """Result of executing a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    exception: Optional[Exception] = None
    dry_run: bool = False
    skipped: bool = False

    @classmethod
    def ok(cls, data: Any = None, dry_run: bool = False) -> "CommandResult":
        return cls(success=True, data=data, dry_run=dry_run)

    @classmethod
    def fail(
        cls,
        error: str,
        data: Any = None,
        exception: Optional[Exception] = None,
    ) -> "CommandResult":
        return cls(success=False, error=error, data=data, exception=exception)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, error=reason)


class Command(ABC):
    """
    Abstract base class for commands.

    Subclasses implement validate() and _execute().
    """

    def __init__(self, dry_run: bool = False, logger: Optional[logging.Logger] = None):
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(self.name)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def validate(self) -> Optional[str]:
        """
        Check the command's inputs.

        Returns:
            An error message, or None if the command can run
        """
        return None

    def execute(self) -> CommandResult:
        """Validate, then run the command."""
        error = self.validate()
        if error:
            return CommandResult.fail(error)

        try:
            return self._execute()
        except (JiraKitError, IssueTrackerError) as e:
            self.logger.debug(f"{self.name} failed: {type(e).__name__}: {e}")
            return CommandResult.fail(str(e), exception=e)

    @abstractmethod
    def _execute(self) -> CommandResult:
        ...
