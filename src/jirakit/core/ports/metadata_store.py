"""
Metadata Store Port - Persistence for cached field metadata.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class MetadataStorePort(ABC):
    """
    Key-value storage of create metadata, keyed by (project, issue type).

    Entries never expire; they are only replaced by write().
    """

    @abstractmethod
    def read(self, project_key: str, issue_type: str) -> Optional[dict[str, Any]]:
        """Return the stored document, or None if there is no entry."""
        ...

    @abstractmethod
    def write(self, project_key: str, issue_type: str, metadata: dict[str, Any]) -> None:
        """Store (or overwrite) the document for a key."""
        ...

    @abstractmethod
    def location(self, project_key: str, issue_type: str) -> str:
        """Human-readable location of an entry, for messages."""
        ...
