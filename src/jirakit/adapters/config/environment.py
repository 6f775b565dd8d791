"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN, JIRA_CACHE_DIR, LOG_LEVEL)
- The older names jira_base_url, jira_user and jira_password
- .env files
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    DEFAULT_CACHE_DIR,
    AppConfig,
    ConfigProviderPort,
    TrackerConfig,
    optional_path,
)

# Every accepted spelling, mapped to its config key.
KEY_ALIASES = {
    "jira_url": "jira_url",
    "jira_base_url": "jira_url",
    "jira_email": "jira_email",
    "jira_user": "jira_email",
    "jira_api_token": "jira_api_token",
    "jira_password": "jira_api_token",
    "jira_cache_dir": "cache_dir",
    "log_level": "log_level",
}


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Precedence: CLI overrides, then environment, then the .env file.
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
            environ: Environment mapping (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._environ = environ if environ is not None else os.environ

        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        tracker = TrackerConfig(
            url=self.get("jira_url", ""),
            email=self.get("jira_email", ""),
            api_token=self.get("jira_api_token", ""),
        )

        return AppConfig(
            tracker=tracker,
            cache_dir=optional_path(self.get("cache_dir")) or DEFAULT_CACHE_DIR,
            log_level=str(self.get("log_level") or "INFO").upper(),
            dry_run=bool(self.get("dry_run", False)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        value = self._values.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("jira_url"):
            errors.append("Missing JIRA_URL - set in environment or .env file")
        if not self.get("jira_email"):
            errors.append("Missing JIRA_EMAIL - set in environment or .env file")
        if not self.get("jira_api_token"):
            errors.append("Missing JIRA_API_TOKEN - set in environment or .env file")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if line.startswith("export "):
                line = line[len("export "):]

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            config_key = KEY_ALIASES.get(key.strip().lower())
            if config_key:
                self._values[config_key] = value.strip().strip('"').strip("'")

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, raw_value in self._environ.items():
            config_key = KEY_ALIASES.get(env_key.lower())
            if config_key and raw_value != "":
                self._values[config_key] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        cli_mapping = {
            "jira_url": "jira_url",
            "jira_email": "jira_email",
            "jira_api_token": "jira_api_token",
            "cache_dir": "cache_dir",
            "log_level": "log_level",
            "dry_run": "dry_run",
        }

        for cli_key, config_key in cli_mapping.items():
            if self._cli_overrides.get(cli_key) is not None:
                self._values[config_key] = self._cli_overrides[cli_key]
