"""
Field Metadata Cache - Avoid refetching create metadata for a (project, issue type).

Entries never expire. Metadata changes (new custom fields) are rare next to
ticket creation, so the caller decides when to refresh.
"""

import logging
from typing import Any, Optional

from ...core.exceptions import FetchError
from ...core.log_levels import verbose
from ...core.ports.issue_tracker import IssueTrackerPort, IssueTrackerError
from ...core.ports.metadata_store import MetadataStorePort


class FieldMetadataCache:
    """
    Read-through cache in front of the tracker's createmeta endpoint.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        store: MetadataStorePort,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the cache.

        Args:
            tracker: Issue tracker used to fetch metadata on a miss
            store: Persistent storage for fetched metadata
            logger: Optional logger (defaults to "FieldMetadataCache")
        """
        self.tracker = tracker
        self.store = store
        self.logger = logger or logging.getLogger("FieldMetadataCache")

    def get_metadata(
        self,
        project_key: str,
        issue_type: str,
        force_refresh: bool = False,
    ) -> dict[str, Any]:
        """
        Return create metadata, fetching and storing it on a miss or refresh.

        Args:
            project_key: Jira project key (e.g., PROJ)
            issue_type: Issue type name (e.g., Task)
            force_refresh: Ignore any stored entry and refetch

        Returns:
            The raw createmeta document

        Raises:
            FetchError: If the fetch fails or returns an empty body
        """
        if not force_refresh:
            cached = self.store.read(project_key, issue_type)
            if cached is not None:
                self.logger.debug(
                    f"Using cached metadata from: {self.store.location(project_key, issue_type)}"
                )
                return cached

        self.logger.debug("Fetching metadata from Jira...")
        metadata = self._fetch(project_key, issue_type)

        self.store.write(project_key, issue_type, metadata)
        self.logger.info(
            f"Metadata cached to: {self.store.location(project_key, issue_type)}"
        )
        return metadata

    def cache_location(self, project_key: str, issue_type: str) -> str:
        return self.store.location(project_key, issue_type)

    def _fetch(self, project_key: str, issue_type: str) -> dict[str, Any]:
        verbose(
            self.logger,
            f"Fetching create metadata for project {project_key}, issue type {issue_type}...",
        )
        try:
            metadata = self.tracker.fetch_createmeta(project_key, issue_type)
        except IssueTrackerError as e:
            raise FetchError(
                f"Failed to fetch metadata for {project_key}/{issue_type}: {e}",
                project=project_key,
                issue_type=issue_type,
                status_code=e.status_code,
                cause=e,
            ) from e

        if not metadata:
            raise FetchError(
                "Received empty response from Jira.",
                project=project_key,
                issue_type=issue_type,
            )
        return metadata
