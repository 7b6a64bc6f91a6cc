"""Gist API client for gist-rss."""

from typing import Any

import requests

from .config import GitHubConfig
from .errors import DecodingError, RemoteRequestError
from .logging_config import create_execution_logger
from .models import Comment, Gist


class GistClient:
    """Performs the read-only gist and comment requests."""

    def __init__(
        self,
        config: GitHubConfig | None = None,
        session: requests.Session | None = None,
        execution_id: str | None = None,
    ):
        """Initialize GistClient with configuration.

        Args:
            config: API endpoints, timeout and user agent
            session: Optional pre-built HTTP session (tests inject one)
            execution_id: Execution ID for logging context
        """
        self.config = config or GitHubConfig()
        self.logger = create_execution_logger("gist_client", execution_id)
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "application/vnd.github+json",
            }
        )

        self.logger.info(
            "GistClient initialized",
            url=self.config.api_url,
            timeout=self.config.timeout,
        )

    def __enter__(self) -> "GistClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def gist_url(self, gist_id: str) -> str:
        return f"{self.config.api_url}/gists/{gist_id}"

    def comments_url(self, gist_id: str) -> str:
        """First page of a gist's comment collection."""
        return f"{self.gist_url(gist_id)}/comments"

    def fetch_gist(self, gist_id: str) -> Gist:
        """Fetch the gist metadata.

        Raises:
            RemoteRequestError: If the API is unreachable or answers non-200
            DecodingError: If the body is not a gist JSON object
        """
        url = self.gist_url(gist_id)
        payload, _ = self._get_json(url)
        try:
            gist = Gist.from_dict(payload)
        except ValueError as e:
            raise DecodingError(url, str(e)) from e

        self.logger.info("Fetched gist", gist_id=gist_id, url=url)
        return gist

    def fetch_comments_page(self, url: str) -> tuple[list[Comment], str | None]:
        """Fetch one page of comments.

        Args:
            url: Page URL, either the first page or a previous page's cursor

        Returns:
            The page's comments in API order and the next page URL, if any

        Raises:
            RemoteRequestError: If the API is unreachable or answers non-200
            DecodingError: If the body is not a JSON array of comments
        """
        payload, next_url = self._get_json(url)
        if not isinstance(payload, list):
            raise DecodingError(
                url, f"expected comment array, got {type(payload).__name__}"
            )

        try:
            comments = [Comment.from_dict(entry) for entry in payload]
        except ValueError as e:
            raise DecodingError(url, str(e)) from e

        return comments, next_url

    def _get_json(self, url: str) -> tuple[Any, str | None]:
        """GET a URL and decode its JSON body.

        The response is closed before returning, whatever the outcome.

        Returns:
            Decoded JSON and the URL of the Link header's rel="next" entry
        """
        self.logger.debug("Requesting", url=url)
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Request to {url} failed: {e}", url=url, error=str(e))
            raise RemoteRequestError(url, None, str(e)) from e

        with response:
            if response.status_code != 200:
                self.logger.error(
                    f"Gist API returned status {response.status_code}",
                    url=url,
                    status_code=response.status_code,
                )
                raise RemoteRequestError(url, response.status_code)

            try:
                payload = response.json()
            except ValueError as e:
                raise DecodingError(url, str(e)) from e
            except requests.RequestException as e:
                # Connection dropped while the body was streaming
                raise RemoteRequestError(url, None, str(e)) from e

            next_url = response.links.get("next", {}).get("url")

        return payload, next_url
