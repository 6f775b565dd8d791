"""
Cache Adapters - Persistent storage for field metadata.
"""

from .file_store import FileMetadataStore

__all__ = ["FileMetadataStore"]
