"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Issue Trackers: Jira
- Metadata storage: JSON files
- Templates: YAML files
- Input: Text streams
- Config: Environment variables
"""

from .cache import FileMetadataStore
from .config import EnvironmentConfigProvider
from .input import StreamLineSource
from .jira import JiraAdapter
from .templates import YamlTemplateStore

__all__ = [
    "JiraAdapter",
    "FileMetadataStore",
    "YamlTemplateStore",
    "StreamLineSource",
    "EnvironmentConfigProvider",
]
