"""Tests for the environment config provider."""

from pathlib import Path

import pytest

from jirakit.adapters.config import EnvironmentConfigProvider
from jirakit.core.exceptions import ConfigError
from jirakit.core.ports.config_provider import DEFAULT_CACHE_DIR


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / "absent.env"


class TestEnvironmentConfigProvider:
    """Tests for EnvironmentConfigProvider."""

    def test_environment_variables(self, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            environ={
                "JIRA_URL": "https://jira.example.com",
                "JIRA_EMAIL": "me@example.com",
                "JIRA_API_TOKEN": "secret",
            },
        )

        config = provider.load()

        assert config.tracker.url == "https://jira.example.com"
        assert config.tracker.email == "me@example.com"
        assert config.tracker.api_token == "secret"
        assert config.tracker.is_valid()
        assert config.cache_dir == DEFAULT_CACHE_DIR
        assert config.log_level == "INFO"
        assert provider.validate() == []

    def test_legacy_names(self, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            environ={
                "jira_base_url": "https://old.example.com",
                "jira_user": "old@example.com",
                "jira_password": "pw",
            },
        )

        tracker = provider.load().tracker

        assert tracker.url == "https://old.example.com"
        assert tracker.email == "old@example.com"
        assert tracker.api_token == "pw"

    def test_missing_values(self, no_env_file):
        provider = EnvironmentConfigProvider(env_file=no_env_file, environ={})

        errors = provider.validate()

        assert len(errors) == 3
        assert any("JIRA_URL" in e for e in errors)
        with pytest.raises(ConfigError) as exc_info:
            provider.load_validated()
        assert exc_info.value.errors == errors

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "JIRA_URL='https://file.example.com'\n"
            'export JIRA_EMAIL="file@example.com"\n'
            "JIRA_API_TOKEN=from-file\n"
            "UNRELATED=1\n"
            "not a pair\n"
        )

        provider = EnvironmentConfigProvider(env_file=env_file, environ={"JIRA_API_TOKEN": "from-env"})
        tracker = provider.load().tracker

        assert tracker.url == "https://file.example.com"
        assert tracker.email == "file@example.com"
        assert tracker.api_token == "from-env"

    def test_cli_overrides_win(self, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            cli_overrides={"jira_url": "https://cli.example.com", "cache_dir": "/tmp/jk", "dry_run": True},
            environ={"JIRA_URL": "https://env.example.com", "JIRA_CACHE_DIR": "/tmp/env"},
        )

        config = provider.load()

        assert config.tracker.url == "https://cli.example.com"
        assert config.cache_dir == Path("/tmp/jk")
        assert config.dry_run

    def test_none_overrides_ignored(self, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            cli_overrides={"jira_url": None},
            environ={"JIRA_URL": "https://env.example.com"},
        )
        assert provider.load().tracker.url == "https://env.example.com"

    def test_cache_dir_and_log_level_from_env(self, no_env_file):
        provider = EnvironmentConfigProvider(
            env_file=no_env_file,
            environ={"JIRA_CACHE_DIR": "/var/cache/jira", "LOG_LEVEL": "debug"},
        )

        config = provider.load()

        assert config.cache_dir == Path("/var/cache/jira")
        assert config.log_level == "DEBUG"
