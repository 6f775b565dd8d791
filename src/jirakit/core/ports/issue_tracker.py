"""
Issue Tracker Port - Abstract interface for issue tracker operations.

The template engine only needs a handful of operations: fetch create
metadata, list fields and issue types, and create/update issues from a
prepared payload.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IssueTrackerError(Exception):
    """Base exception for issue tracker errors."""

    def __init__(
        self,
        message: str,
        issue_key: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.issue_key = issue_key
        self.status_code = status_code
        self.cause = cause


class AuthenticationError(IssueTrackerError):
    """Authentication failed."""


class NotFoundError(IssueTrackerError):
    """Resource not found."""


class PermissionError(IssueTrackerError):
    """Insufficient permissions."""


class IssueTrackerPort(ABC):
    """
    Abstract interface for issue trackers.

    Payloads and metadata are plain JSON-like documents.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Jira')."""
        ...

    @abstractmethod
    def fetch_createmeta(self, project_key: str, issue_type: str) -> dict[str, Any]:
        """
        Fetch issue creation metadata, expanded to field level.

        Raises:
            IssueTrackerError: On network, auth or non-2xx failures
        """
        ...

    @abstractmethod
    def get_issue_types(self, project_key: str) -> list[dict[str, Any]]:
        """
        List the issue types available in a project.

        Raises:
            NotFoundError: If the project does not exist or is not visible
        """
        ...

    @abstractmethod
    def list_fields(self) -> list[dict[str, Any]]:
        """List all global fields of the instance."""
        ...

    @abstractmethod
    def create_issue(self, payload: dict[str, Any]) -> Optional[str]:
        """
        Create an issue from a full payload ({"fields": {...}}).

        Returns:
            The new issue key, or None in dry-run mode
        """
        ...

    @abstractmethod
    def update_issue(self, issue_key: str, payload: dict[str, Any]) -> bool:
        """Update an existing issue with a payload."""
        ...

    @abstractmethod
    def browse_url(self, issue_key: str) -> str:
        """Get the web URL of an issue."""
        ...
