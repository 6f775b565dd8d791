"""
File Metadata Store - One JSON file per (project, issue type).

Layout: <cache_dir>/<PROJECT>-<IssueType>.json (default ~/.jira-cache).
No locking and no expiry.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import DEFAULT_CACHE_DIR
from ...core.ports.metadata_store import MetadataStorePort


class FileMetadataStore(MetadataStorePort):
    """
    Filesystem-backed metadata store.
    """

    def __init__(self, cache_dir: Optional[Path] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.logger = logging.getLogger("FileMetadataStore")

    def path_for(self, project_key: str, issue_type: str) -> Path:
        # Issue type names may contain spaces but never path separators.
        safe_type = issue_type.replace("/", "_").replace("\\", "_")
        safe_project = project_key.replace("/", "_").replace("\\", "_")
        return self.cache_dir / f"{safe_project}-{safe_type}.json"

    def location(self, project_key: str, issue_type: str) -> str:
        return str(self.path_for(project_key, issue_type))

    def read(self, project_key: str, issue_type: str) -> Optional[dict[str, Any]]:
        path = self.path_for(project_key, issue_type)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            self.logger.warning(f"Ignoring unreadable cache file {path}: {e}")
            return None

        if not data:
            return None
        return data

    def write(self, project_key: str, issue_type: str, metadata: dict[str, Any]) -> None:
        if not self.cache_dir.exists():
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Created cache directory: {self.cache_dir}")

        path = self.path_for(project_key, issue_type)
        path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
