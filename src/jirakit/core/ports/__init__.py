"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
)
from .metadata_store import MetadataStorePort
from .line_source import LineSourcePort
from .template_store import TemplateStorePort
from .config_provider import ConfigProviderPort, AppConfig, TrackerConfig

__all__ = [
    "IssueTrackerPort",
    "IssueTrackerError",
    "AuthenticationError",
    "NotFoundError",
    "PermissionError",
    "MetadataStorePort",
    "LineSourcePort",
    "TemplateStorePort",
    "ConfigProviderPort",
    "AppConfig",
    "TrackerConfig",
]
