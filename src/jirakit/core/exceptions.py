"""
Exceptions - Centralized exception hierarchy for jirakit.

Tracker/transport errors live with the issue tracker port
(see ports/issue_tracker.py); everything raised by the template and
metadata engine derives from JiraKitError.
"""

from typing import Optional, Sequence


class JiraKitError(Exception):
    """Base exception for all jirakit errors."""


class FetchError(JiraKitError):
    """Field metadata could not be retrieved, or came back empty."""

    def __init__(
        self,
        message: str,
        project: str = "",
        issue_type: str = "",
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.project = project
        self.issue_type = issue_type
        self.status_code = status_code
        self.cause = cause


class PlaceholdersPresentError(JiraKitError):
    """A document still contains placeholders but prompting is disabled."""

    def __init__(self, paths: Sequence[str]):
        self.paths = list(paths)
        super().__init__(
            "Template contains interactive placeholders but interactive mode is disabled: "
            + ", ".join(self.paths)
        )


class InvalidPathError(JiraKitError):
    """A document path contains characters outside [a-zA-Z0-9._-]."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Invalid field path detected: {path!r}. Paths must contain only "
            "alphanumeric characters, dots, hyphens, and underscores."
        )


class InteractiveModeError(JiraKitError):
    """Interactive mode was requested implicitly but cannot be honoured."""


class TemplateError(JiraKitError):
    """A template could not be read, parsed or generated."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigError(JiraKitError):
    """Configuration is incomplete."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


__all__ = [
    "JiraKitError",
    "FetchError",
    "PlaceholdersPresentError",
    "InvalidPathError",
    "InteractiveModeError",
    "TemplateError",
    "ConfigError",
]
