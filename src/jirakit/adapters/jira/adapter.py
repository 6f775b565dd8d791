"""
Jira Adapter - Implements IssueTrackerPort for Atlassian Jira.

This is the main entry point for Jira integration.
"""

import logging
from typing import Any, Optional

from ...core.ports.issue_tracker import IssueTrackerPort, NotFoundError
from ...core.ports.config_provider import TrackerConfig
from .client import JiraApiClient


class JiraAdapter(IssueTrackerPort):
    """
    Jira implementation of the IssueTrackerPort.

    Payloads are passed through to the REST API unchanged.
    """

    def __init__(
        self,
        config: TrackerConfig,
        dry_run: bool = False,
        client: Optional[JiraApiClient] = None,
    ):
        """
        Initialize the Jira adapter.

        Args:
            config: Tracker configuration
            dry_run: If True, don't make changes
            client: Optional pre-built API client (tests)
        """
        self.config = config
        self._dry_run = dry_run
        self.logger = logging.getLogger("JiraAdapter")

        self._client = client or JiraApiClient(
            base_url=config.url,
            email=config.email,
            api_token=config.api_token,
            dry_run=dry_run,
        )

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Jira"

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def fetch_createmeta(self, project_key: str, issue_type: str) -> dict[str, Any]:
        return self._client.get_createmeta(project_key, issue_type)

    def get_issue_types(self, project_key: str) -> list[dict[str, Any]]:
        data = self._client.get_createmeta(project_key, expand="projects.issuetypes")
        projects = data.get("projects") or []
        if not projects:
            raise NotFoundError(
                f"Project '{project_key}' not found or you don't have permission to access it.",
                issue_key=project_key,
            )
        return projects[0].get("issuetypes") or []

    def list_fields(self) -> list[dict[str, Any]]:
        return self._client.get_fields()

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Write Operations
    # -------------------------------------------------------------------------

    def create_issue(self, payload: dict[str, Any]) -> Optional[str]:
        if self._dry_run:
            self.logger.info("[DRY-RUN] Would create issue")
            return None

        result = self._client.post("issue", json=payload)
        new_key = result.get("key")
        if new_key:
            self.logger.info(f"Successfully created ticket {new_key}!")
        return new_key

    def update_issue(self, issue_key: str, payload: dict[str, Any]) -> bool:
        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would update {issue_key}")
            return True

        self._client.put(f"issue/{issue_key}", json=payload)
        self.logger.info(f"Successfully updated ticket {issue_key}!")
        return True

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Utility
    # -------------------------------------------------------------------------

    def browse_url(self, issue_key: str) -> str:
        return f"{self._client.base_url}/browse/{issue_key}"
