"""Configuration management for gist-rss."""

import os
from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """Configuration for the gist hosting API."""

    api_url: str = "https://api.github.com"
    web_url: str = "https://gist.github.com"
    timeout: int = 30
    max_pages: int = 100
    user_agent: str = "gist-rss/1.0 (Gist comments to RSS)"


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.api_url = os.getenv("GIST_API_URL", GitHubConfig.api_url).rstrip("/")
        self.web_url = os.getenv("GIST_WEB_URL", GitHubConfig.web_url).rstrip("/")
        self.timeout = self._positive_int("GIST_RSS_TIMEOUT", GitHubConfig.timeout)
        self.max_pages = self._positive_int(
            "GIST_RSS_MAX_PAGES", GitHubConfig.max_pages
        )
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _positive_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default

        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}")

        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return value

    def get_github_config(self) -> GitHubConfig:
        """Get gist API configuration."""
        return GitHubConfig(
            api_url=self.api_url,
            web_url=self.web_url,
            timeout=self.timeout,
            max_pages=self.max_pages,
        )
