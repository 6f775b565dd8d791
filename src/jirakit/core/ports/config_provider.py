"""
Config Provider Port - Abstract interface for configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..exceptions import ConfigError

DEFAULT_CACHE_DIR = Path.home() / ".jira-cache"


@dataclass
class TrackerConfig:
    """Connection settings handed to the HTTP client."""

    url: str
    email: str
    api_token: str

    def is_valid(self) -> bool:
        return bool(self.url and self.email and self.api_token)


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig
    cache_dir: Path = field(default_factory=lambda: DEFAULT_CACHE_DIR)
    log_level: str = "INFO"
    dry_run: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load the complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """Return a list of configuration errors (empty if valid)."""
        ...

    def load_validated(self) -> AppConfig:
        """Load configuration, raising ConfigError when it is incomplete."""
        errors = self.validate()
        if errors:
            raise ConfigError(errors)
        return self.load()


def optional_path(value: Optional[Any]) -> Optional[Path]:
    if value in (None, ""):
        return None
    return Path(value).expanduser()
