"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from gist_rss.config import Config, GitHubConfig


class TestConfigUnit:
    """Unit tests for Config class."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        github_config = config.get_github_config()
        assert github_config == GitHubConfig()
        assert github_config.api_url == "https://api.github.com"
        assert github_config.web_url == "https://gist.github.com"
        assert github_config.timeout == 30
        assert github_config.max_pages == 100
        assert config.log_level == "INFO"

    def test_environment_overrides(self):
        env = {
            "GIST_API_URL": "https://ghe.example.com/api/v3/",
            "GIST_WEB_URL": "https://ghe.example.com/gist/",
            "GIST_RSS_TIMEOUT": "5",
            "GIST_RSS_MAX_PAGES": "3",
            "LOG_LEVEL": "DEBUG",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config()

        github_config = config.get_github_config()
        assert github_config.api_url == "https://ghe.example.com/api/v3"
        assert github_config.web_url == "https://ghe.example.com/gist"
        assert github_config.timeout == 5
        assert github_config.max_pages == 3
        assert config.log_level == "DEBUG"

    def test_blank_numeric_setting_uses_default(self):
        with patch.dict(os.environ, {"GIST_RSS_TIMEOUT": "  "}, clear=True):
            assert Config().timeout == 30

    @pytest.mark.parametrize("value", ["abc", "1.5", "0", "-2"])
    def test_invalid_numeric_setting(self, value):
        with patch.dict(os.environ, {"GIST_RSS_MAX_PAGES": value}, clear=True):
            with pytest.raises(ValueError) as excinfo:
                Config()

        assert "GIST_RSS_MAX_PAGES" in str(excinfo.value)
