"""Tests for environment-derived settings."""

import pytest

from gqlcli.config import DEFAULT_URL, Settings
from gqlcli.errors import ConfigError


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.config == ".gql"
        assert settings.url == DEFAULT_URL
        assert settings.timeout is None
        assert settings.log_level == "info"
        assert settings.log_format == "txt"
        assert settings.log_output == "stderr"
        assert settings.command_name == "gqlcli"

    def test_values(self):
        settings = Settings.from_env({
            "GQL_CONF": "github.gql",
            "GQL_URL": "https://api.github.com/graphql",
            "GQL_TIMEOUT": "30",
            "GQL_LOG_LVL": "debug",
            "GQL_LOG_FMT": "json",
            "GQL_LOG_OUT": "stdout",
        })
        assert settings.config == "github.gql"
        assert settings.url == "https://api.github.com/graphql"
        assert settings.timeout == 30.0
        assert settings.log_level == "debug"
        assert settings.log_format == "json"
        assert settings.log_output == "stdout"
        assert settings.command_name == "github"

    def test_empty_values_are_unset(self):
        settings = Settings.from_env({"GQL_CONF": "", "GQL_TIMEOUT": ""})
        assert settings.config == ".gql"
        assert settings.timeout is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("GQL_URL", "http://localhost:8080/query")
        assert Settings.from_env().url == "http://localhost:8080/query"

    @pytest.mark.parametrize("raw", ["soon", "-1"])
    def test_bad_timeout(self, raw):
        with pytest.raises(ConfigError, match="GQL_TIMEOUT"):
            Settings.from_env({"GQL_TIMEOUT": raw})
