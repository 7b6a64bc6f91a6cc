"""Property-based tests for configuration management."""

import os
from unittest.mock import patch

from hypothesis import given
from hypothesis import strategies as st

from gist_rss.config import Config


class TestConfigProperties:
    """Property-based tests for Config class."""

    @given(st.integers(min_value=1, max_value=10**6), st.integers(min_value=1, max_value=600))
    def test_numeric_settings_round_trip(self, max_pages, timeout):
        """
        For any positive integers in the environment, the gist API config
        carries exactly those values.
        """
        env = {"GIST_RSS_MAX_PAGES": str(max_pages), "GIST_RSS_TIMEOUT": f" {timeout} "}
        with patch.dict(os.environ, env):
            github_config = Config().get_github_config()

        assert github_config.max_pages == max_pages
        assert github_config.timeout == timeout

    @given(
        st.text(
            alphabet="abcdefghijklmnopqrstuvwxyz0123456789-./:", min_size=1, max_size=40
        )
    )
    def test_trailing_slashes_stripped(self, base):
        """Base URLs never end in a slash, so joined paths have a single one."""
        url = f"https://{base}"
        with patch.dict(os.environ, {"GIST_API_URL": url + "/", "GIST_WEB_URL": url + "//"}):
            config = Config()

        assert config.api_url == url.rstrip("/")
        assert config.web_url == url.rstrip("/")
        assert not config.api_url.endswith("/")
