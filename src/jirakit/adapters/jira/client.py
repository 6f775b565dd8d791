"""
Jira API Client - Low-level HTTP client for Jira REST API.

This handles the raw HTTP communication with Jira.
The JiraAdapter uses this to implement the IssueTrackerPort.
"""

import logging
from typing import Any, Optional, Union

import requests

from ...core.ports.issue_tracker import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
)

JsonBody = Union[dict[str, Any], list[Any]]


class JiraApiClient:
    """
    Low-level Jira REST API client.

    Handles authentication, request/response, and error handling.
    API version 2 is used so that text fields (description, environment)
    accept plain strings.
    """

    API_VERSION = "2"

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        dry_run: bool = False,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://company.atlassian.net)
            email: User email for authentication
            api_token: API token
            dry_run: If True, don't make write operations
            session: Optional pre-built session (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.auth = (email, api_token)
        self.dry_run = dry_run
        self.logger = logging.getLogger("JiraApiClient")

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._session = session or requests.Session()
        self._session.auth = self.auth
        self._session.headers.update(self.headers)

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> JsonBody:
        """
        Make an authenticated request to Jira API.

        Args:
            method: HTTP method (GET, POST, PUT)
            endpoint: API endpoint (e.g., 'issue/PROJ-123')
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON response ({} for empty bodies)

        Raises:
            IssueTrackerError: On API errors
        """
        url = f"{self.api_url}/{endpoint}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise IssueTrackerError(f"Connection failed: {e}", cause=e) from e
        except requests.exceptions.Timeout as e:
            raise IssueTrackerError(f"Request timed out: {e}", cause=e) from e

        self.logger.debug(f"HTTP status: {response.status_code}")
        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> JsonBody:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> JsonBody:
        """POST request (checks dry_run)."""
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would POST to {endpoint}")
            return {}
        self.logger.debug(f"Payload: {json}")
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> JsonBody:
        """PUT request (checks dry_run)."""
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would PUT to {endpoint}")
            return {}
        self.logger.debug(f"Payload: {json}")
        return self.request("PUT", endpoint, json=json, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> JsonBody:
        """Handle API response and errors."""
        if response.ok:
            if response.text:
                return response.json()
            return {}

        status = response.status_code
        error_body = response.text[:500] if response.text else ""
        self.logger.debug(f"Response body: {error_body}")

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check JIRA_EMAIL and JIRA_API_TOKEN.",
                status_code=status,
            )

        if status == 403:
            raise PermissionError(
                f"Permission denied for {endpoint}",
                issue_key=endpoint,
                status_code=status,
            )

        if status == 404:
            raise NotFoundError(
                f"Not found: {endpoint}",
                issue_key=endpoint,
                status_code=status,
            )

        raise IssueTrackerError(
            f"API error {status}: {error_body}",
            issue_key=endpoint,
            status_code=status,
        )

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_createmeta(
        self,
        project_key: str,
        issue_type: Optional[str] = None,
        expand: str = "projects.issuetypes.fields",
    ) -> dict[str, Any]:
        """GET issue/createmeta for a project, optionally narrowed to one issue type."""
        params = {"projectKeys": project_key, "expand": expand}
        if issue_type:
            params["issuetypeNames"] = issue_type
        return self.get("issue/createmeta", params=params)

    def get_fields(self) -> list[dict[str, Any]]:
        """GET field (all global fields)."""
        data = self.get("field")
        return data if isinstance(data, list) else []
